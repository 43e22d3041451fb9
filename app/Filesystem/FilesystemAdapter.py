from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, List, Optional, Union

from .Metadata import Metadata


class FilesystemAdapter(ABC):
    """
    Abstract filesystem adapter.

    Every disk driver implements these operations against its own backend.
    Paths are relative to the root of the disk. Failures are raised as the
    exceptions in ``app.Filesystem.Exceptions``; ``has`` is the only
    operation that answers a missing path with a value instead.
    """

    @abstractmethod
    def has(self, path: str) -> bool:
        """Check if a file or directory exists."""
        pass

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Get file contents."""
        pass

    @abstractmethod
    def read_stream(self, path: str) -> BinaryIO:
        """Get a readable stream over the file contents."""
        pass

    @abstractmethod
    def write(
        self,
        path: str,
        contents: Union[str, bytes],
        config: Optional[Dict[str, Any]] = None
    ) -> Metadata:
        """Create a new file. Raises FileExistsException if the path exists."""
        pass

    @abstractmethod
    def write_stream(
        self,
        path: str,
        resource: BinaryIO,
        config: Optional[Dict[str, Any]] = None
    ) -> Metadata:
        """Create a new file from a stream."""
        pass

    @abstractmethod
    def update(
        self,
        path: str,
        contents: Union[str, bytes],
        config: Optional[Dict[str, Any]] = None
    ) -> Metadata:
        """Replace an existing file. Raises FileNotFoundException if it is missing."""
        pass

    @abstractmethod
    def update_stream(
        self,
        path: str,
        resource: BinaryIO,
        config: Optional[Dict[str, Any]] = None
    ) -> Metadata:
        """Replace an existing file from a stream."""
        pass

    @abstractmethod
    def rename(self, from_path: str, to_path: str) -> bool:
        """Move a file."""
        pass

    @abstractmethod
    def copy(self, from_path: str, to_path: str) -> bool:
        """Copy a file."""
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Delete a file."""
        pass

    @abstractmethod
    def delete_dir(self, directory: str) -> bool:
        """Delete a directory."""
        pass

    @abstractmethod
    def create_dir(self, directory: str, config: Optional[Dict[str, Any]] = None) -> Metadata:
        """Create a directory."""
        pass

    @abstractmethod
    def list_contents(self, directory: str = '', recursive: bool = False) -> List[Metadata]:
        """List the contents of a directory."""
        pass

    @abstractmethod
    def get_metadata(self, path: str) -> Metadata:
        """Get all metadata of a file or directory."""
        pass

    @abstractmethod
    def set_visibility(self, path: str, visibility: str) -> Metadata:
        """Set the visibility of a file."""
        pass

    @abstractmethod
    def get_visibility(self, path: str) -> str:
        """Get the visibility of a file."""
        pass

    def get_size(self, path: str) -> Optional[int]:
        """Get file size in bytes."""
        return self.get_metadata(path).size

    def get_timestamp(self, path: str) -> Optional[int]:
        """Get last modified timestamp."""
        return self.get_metadata(path).timestamp

    def get_mimetype(self, path: str) -> Optional[str]:
        """Get MIME type of a file."""
        return self.get_metadata(path).mimetype

    def put(
        self,
        path: str,
        contents: Union[str, bytes],
        config: Optional[Dict[str, Any]] = None
    ) -> Metadata:
        """Create or replace a file."""
        if self.has(path):
            return self.update(path, contents, config)
        return self.write(path, contents, config)

    def put_stream(
        self,
        path: str,
        resource: BinaryIO,
        config: Optional[Dict[str, Any]] = None
    ) -> Metadata:
        """Create or replace a file from a stream."""
        if self.has(path):
            return self.update_stream(path, resource, config)
        return self.write_stream(path, resource, config)

    def read_string(self, path: str, encoding: str = 'utf-8') -> str:
        """Get file contents as string."""
        return self.read(path).decode(encoding)

    def missing(self, path: str) -> bool:
        """Check if a file is missing."""
        return not self.has(path)
