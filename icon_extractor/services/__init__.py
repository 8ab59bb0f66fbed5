"""
Icon extraction and encoding services for Exe Icon Extractor
"""

from .errors import (
    IconExtractorError,
    PathNotFoundError,
    NoExecutableFoundError,
    ConversionFailedError,
    UserCancelledError
)
from .ico_encoder import ICO_SIZES, IconEntry, encode_ico, read_ico_directory, write_ico
from .path_resolver import ResolvedPath, resolve_path

__all__ = [
    # Errors
    'IconExtractorError',
    'PathNotFoundError',
    'NoExecutableFoundError',
    'ConversionFailedError',
    'UserCancelledError',

    # ICO container
    'ICO_SIZES',
    'IconEntry',
    'encode_ico',
    'read_ico_directory',
    'write_ico',

    # Path resolution
    'ResolvedPath',
    'resolve_path'
]
