"""
Error types for Exe Icon Extractor
Each error maps to one user-visible failure of a batch item
"""


class IconExtractorError(Exception):
    """Base class for all icon extraction errors."""


class PathNotFoundError(IconExtractorError):
    """The requested input path does not exist."""

    def __init__(self, path):
        super().__init__(f"Path does not exist: {path}")
        self.path = path


class NoExecutableFoundError(IconExtractorError):
    """A directory was given but it contains no executable."""

    def __init__(self, path):
        super().__init__(f"No executable at this location: {path}")
        self.path = path


class ConversionFailedError(IconExtractorError):
    """The icon could not be turned into an image or written to disk."""

    def __init__(self, reason):
        super().__init__(f"Conversion failed: {reason}")
        self.reason = reason


class UserCancelledError(IconExtractorError):
    """The file picker was dismissed and there is nothing to process."""

    def __init__(self):
        super().__init__("No file selected, operation cancelled")
