from __future__ import annotations

from .Exceptions import (
    FilesystemException,
    FileNotFoundException,
    FileExistsException,
    DirectoryNotEmptyException,
    UnsupportedCapabilityException,
    TransportException,
    PathTraversalException
)
from .FilesystemAdapter import FilesystemAdapter
from .FilesystemManager import (
    FilesystemManager,
    get_filesystem_manager,
    storage
)
from .Metadata import Metadata

__all__ = [
    'FilesystemException',
    'FileNotFoundException',
    'FileExistsException',
    'DirectoryNotEmptyException',
    'UnsupportedCapabilityException',
    'TransportException',
    'PathTraversalException',
    'FilesystemAdapter',
    'FilesystemManager',
    'get_filesystem_manager',
    'storage',
    'Metadata'
]
