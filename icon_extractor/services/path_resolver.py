"""
Path Resolver for Exe Icon Extractor
Turns a user-supplied location into a concrete executable file
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional

EXECUTABLE_SUFFIX = '.exe'


class ResolvedPath:
    """Outcome of resolving one input location."""

    RESOLVED = 'resolved'
    NO_MATCH = 'no_match'
    NOT_EXIST = 'not_exist'

    def __init__(self, kind: str, location: Path, executable: Optional[Path] = None):
        self.kind = kind
        self.location = location
        self.executable = executable

    @classmethod
    def resolved(cls, location: Path, executable: Path) -> 'ResolvedPath':
        return cls(cls.RESOLVED, location, executable)

    @classmethod
    def no_match(cls, location: Path) -> 'ResolvedPath':
        return cls(cls.NO_MATCH, location)

    @classmethod
    def not_exist(cls, location: Path) -> 'ResolvedPath':
        return cls(cls.NOT_EXIST, location)

    @property
    def ok(self) -> bool:
        return self.kind == self.RESOLVED

    def __eq__(self, other):
        if not isinstance(other, ResolvedPath):
            return NotImplemented
        return (self.kind, self.location, self.executable) == (other.kind, other.location, other.executable)

    def __repr__(self):
        if self.ok:
            return f"ResolvedPath({self.kind}, {self.executable})"
        return f"ResolvedPath({self.kind}, {self.location})"


def list_executables(directory: Path) -> List[Path]:
    """List executables directly inside a directory, in directory order."""
    return [p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() == EXECUTABLE_SUFFIX]


def find_executable(directory: Path, candidates: List[Path]) -> Optional[Path]:
    """
    Pick the executable for a directory.

    Prefers a file whose name contains the directory's own name,
    otherwise the first candidate listed.
    """
    if not candidates:
        return None

    needle = directory.name.lower()
    for candidate in candidates:
        if needle in candidate.name.lower():
            return candidate

    logging.debug(f"No executable named like '{directory.name}', using {candidates[0].name}")
    return candidates[0]


def resolve_path(path,
                 exists: Callable[[Path], bool] = Path.exists,
                 is_dir: Callable[[Path], bool] = Path.is_dir,
                 lister: Callable[[Path], List[Path]] = list_executables) -> ResolvedPath:
    """
    Resolve a file or directory to the executable whose icon is wanted.

    Args:
        path: Directory or direct executable path
        exists: Existence check, injectable for tests
        is_dir: Directory check, injectable for tests
        lister: Returns the executables inside a directory

    Returns:
        ResolvedPath tagged resolved, no_match or not_exist
    """
    location = Path(path)

    if not exists(location):
        return ResolvedPath.not_exist(location)

    if not is_dir(location):
        return ResolvedPath.resolved(location, location)

    executable = find_executable(location, lister(location))
    if executable is None:
        return ResolvedPath.no_match(location)
    return ResolvedPath.resolved(location, executable)
