from __future__ import annotations

from typing import Optional


class FilesystemException(Exception):
    """Base exception for filesystem adapter errors."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        original: Optional[BaseException] = None
    ) -> None:
        super().__init__(message)
        self.path = path
        self.original = original


class FileNotFoundException(FilesystemException):
    """Exception for a path that does not exist."""

    def __init__(self, path: str, original: Optional[BaseException] = None) -> None:
        super().__init__(f"File not found at path: {path}", path, original)


class FileExistsException(FilesystemException):
    """Exception for a create-only write against an existing path."""

    def __init__(self, path: str, original: Optional[BaseException] = None) -> None:
        super().__init__(f"File already exists at path: {path}", path, original)


class DirectoryNotEmptyException(FilesystemException):
    """Exception for a non-recursive delete of a directory that still has children."""

    def __init__(self, path: str, original: Optional[BaseException] = None) -> None:
        super().__init__(f"Directory not empty: {path}", path, original)


class UnsupportedCapabilityException(FilesystemException):
    """Exception for an operation the backing store cannot perform."""

    def __init__(self, capability: str, path: Optional[str] = None) -> None:
        super().__init__(f"{capability} is not supported by this adapter", path)
        self.capability = capability


class TransportException(FilesystemException):
    """Exception for remote faults that map to no other filesystem error."""
    pass


class PathTraversalException(FilesystemException):
    """Exception for a path that would escape the adapter root."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path is outside of the defined root, path: [{path}]", path)
