from __future__ import annotations

from typing import Any, BinaryIO, Callable, Dict, List, Optional, Union

from app.Log import logger

from .FilesystemAdapter import FilesystemAdapter
from .Metadata import Metadata

DriverCreator = Callable[[Dict[str, Any]], FilesystemAdapter]


class FilesystemManager:
    """Laravel-style filesystem manager."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self._config = config or {}
        self._disks: Dict[str, FilesystemAdapter] = {}
        self._default_disk = self._config.get('default', 'azure-file')
        self._custom_drivers: Dict[str, DriverCreator] = {}

    def disk(self, name: Optional[str] = None) -> FilesystemAdapter:
        """Get a filesystem disk."""
        name = name or self._default_disk

        if name not in self._disks:
            self._disks[name] = self._create_disk(name)
            logger('filesystem').info(f"Resolved filesystem disk '{name}'", {
                'driver': self.disk_config(name).get('driver', 'azure-file'),
            })

        return self._disks[name]

    def _create_disk(self, name: str) -> FilesystemAdapter:
        """Create a filesystem disk."""
        config = self.disk_config(name)
        driver = config.get('driver', 'azure-file')

        if driver in self._custom_drivers:
            return self._custom_drivers[driver](config)
        elif driver == 'azure-file':
            return self._create_azure_file_adapter(config)
        else:
            raise ValueError(f"Filesystem driver '{driver}' not supported")

    def _create_azure_file_adapter(self, config: Dict[str, Any]) -> FilesystemAdapter:
        """Create Azure File Storage filesystem adapter."""
        from azure.storage.fileshare import ShareClient

        from app.Storage.AzureFileAdapter import AzureFileAdapter
        from app.Storage.AzureFileConfig import AzureFileConfig

        settings = AzureFileConfig.model_validate(config)
        if not settings.container:
            raise ValueError("Azure File Storage disk requires a 'container' (share name)")

        client = ShareClient.from_connection_string(
            settings.connection_string(),
            share_name=settings.container
        )
        return AzureFileAdapter(client, settings)

    def get_default_driver(self) -> str:
        """Get the default filesystem disk."""
        return self._default_disk

    def set_default_driver(self, name: str) -> None:
        """Set the default filesystem disk."""
        self._default_disk = name

    def extend(self, driver: str, creator: DriverCreator) -> None:
        """Register a custom filesystem driver."""
        self._custom_drivers[driver] = creator

    def disk_config(self, disk: Optional[str] = None) -> Dict[str, Any]:
        """Get the configuration of a disk."""
        return dict(self._config.get('disks', {}).get(disk or self._default_disk, {}))

    def available_drivers(self) -> List[str]:
        """Get the names of the drivers disks can use."""
        return ['azure-file'] + sorted(self._custom_drivers)

    def forget_disk(self, name: str) -> None:
        """Drop a resolved disk so the next call builds it again."""
        self._disks.pop(name, None)

    # Proxy methods to the default disk

    def has(self, path: str) -> bool:
        return self.disk().has(path)

    def missing(self, path: str) -> bool:
        return self.disk().missing(path)

    def read(self, path: str) -> bytes:
        return self.disk().read(path)

    def read_stream(self, path: str) -> BinaryIO:
        return self.disk().read_stream(path)

    def write(self, path: str, contents: Union[str, bytes], config: Optional[Dict[str, Any]] = None) -> Metadata:
        return self.disk().write(path, contents, config)

    def write_stream(self, path: str, resource: BinaryIO, config: Optional[Dict[str, Any]] = None) -> Metadata:
        return self.disk().write_stream(path, resource, config)

    def update(self, path: str, contents: Union[str, bytes], config: Optional[Dict[str, Any]] = None) -> Metadata:
        return self.disk().update(path, contents, config)

    def update_stream(self, path: str, resource: BinaryIO, config: Optional[Dict[str, Any]] = None) -> Metadata:
        return self.disk().update_stream(path, resource, config)

    def put(self, path: str, contents: Union[str, bytes], config: Optional[Dict[str, Any]] = None) -> Metadata:
        return self.disk().put(path, contents, config)

    def rename(self, from_path: str, to_path: str) -> bool:
        return self.disk().rename(from_path, to_path)

    def copy(self, from_path: str, to_path: str) -> bool:
        return self.disk().copy(from_path, to_path)

    def delete(self, path: str) -> bool:
        return self.disk().delete(path)

    def delete_dir(self, directory: str) -> bool:
        return self.disk().delete_dir(directory)

    def create_dir(self, directory: str) -> Metadata:
        return self.disk().create_dir(directory)

    def list_contents(self, directory: str = '', recursive: bool = False) -> List[Metadata]:
        return self.disk().list_contents(directory, recursive)

    def get_metadata(self, path: str) -> Metadata:
        return self.disk().get_metadata(path)

    def put_stream(self, path: str, resource: BinaryIO, config: Optional[Dict[str, Any]] = None) -> Metadata:
        return self.disk().put_stream(path, resource, config)

    def read_string(self, path: str, encoding: str = 'utf-8') -> str:
        return self.disk().read_string(path, encoding)

    def get_size(self, path: str) -> Optional[int]:
        return self.disk().get_size(path)

    def get_timestamp(self, path: str) -> Optional[int]:
        return self.disk().get_timestamp(path)

    def get_mimetype(self, path: str) -> Optional[str]:
        return self.disk().get_mimetype(path)

    def set_visibility(self, path: str, visibility: str) -> Metadata:
        return self.disk().set_visibility(path, visibility)

    def get_visibility(self, path: str) -> str:
        return self.disk().get_visibility(path)


# Global filesystem manager instance
filesystem_manager_instance: Optional[FilesystemManager] = None


def get_filesystem_manager() -> FilesystemManager:
    """Get the global filesystem manager, configured from config/filesystems.py."""
    global filesystem_manager_instance
    if filesystem_manager_instance is None:
        from config import filesystems

        filesystem_manager_instance = FilesystemManager({
            'default': filesystems.default,
            'disks': filesystems.disks,
        })
    return filesystem_manager_instance


def storage(disk: Optional[str] = None) -> FilesystemAdapter:
    """Get storage disk instance."""
    return get_filesystem_manager().disk(disk)
