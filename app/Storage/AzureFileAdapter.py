from __future__ import annotations

import io
import logging
import mimetypes
import shutil
import tempfile
from collections import deque
from typing import Any, BinaryIO, Deque, Dict, List, Optional, Union

from azure.core.exceptions import AzureError
from azure.storage.fileshare import ContentSettings

from app.Filesystem.Exceptions import (
    FileExistsException,
    FileNotFoundException,
    UnsupportedCapabilityException,
)
from app.Filesystem.FilesystemAdapter import FilesystemAdapter
from app.Filesystem.Metadata import TYPE_DIR, TYPE_FILE, VISIBILITY_PUBLIC, Metadata

from .AzureFileConfig import AzureFileConfig
from .DirectoryOperator import DirectoryOperator
from .DownloadStream import DownloadStream
from .ErrorTranslator import ErrorTranslator
from .MetadataMapper import MetadataMapper, RemoteEntry
from .PathResolver import PathResolver

# Streams up to this size are staged in memory before upload, larger ones spill to disk.
STAGING_MEMORY_LIMIT = 8 * 1024 * 1024


class AzureFileAdapter(FilesystemAdapter):
    """
    Filesystem adapter for an Azure File Storage share.

    Takes a ``ShareClient`` for the share, the disk configuration and an
    optional path prefix. Every path is resolved under the prefix before it
    reaches the share, and share faults are raised as filesystem exceptions.

    The share has no visibility concept, no atomic move and no exists call:
    visibility operations always fail, rename and copy run as read, write
    and delete steps, and existence is derived from get-properties calls.
    """

    def __init__(
        self,
        client: Any,
        config: Optional[Union[AzureFileConfig, Dict[str, Any]]] = None,
        prefix: Optional[str] = None
    ) -> None:
        if isinstance(config, AzureFileConfig):
            self.config = config
        else:
            self.config = AzureFileConfig.model_validate(config or {})

        self.client = client
        self.resolver = PathResolver(prefix if prefix is not None else self.config.prefix)
        self.mapper = MetadataMapper(self.resolver)
        self.directories = DirectoryOperator(client, self.resolver)
        self.logger = logging.getLogger(self.__class__.__name__)

    def has(self, path: str) -> bool:
        """Check if a file or directory exists. Directories count as existing files."""
        return self._properties(path, self.resolver.resolve(path)) is not None

    def read(self, path: str) -> bytes:
        remote_path = self.resolver.resolve(path)
        with ErrorTranslator.translating(path):
            return self.client.get_file_client(remote_path).download_file().readall()

    def read_stream(self, path: str) -> BinaryIO:
        """Open the file for reading; content is fetched from the share as the stream is read."""
        remote_path = self.resolver.resolve(path)
        with ErrorTranslator.translating(path):
            downloader = self.client.get_file_client(remote_path).download_file()
        return io.BufferedReader(DownloadStream(downloader.chunks(), path))

    def write(
        self,
        path: str,
        contents: Union[str, bytes],
        config: Optional[Dict[str, Any]] = None
    ) -> Metadata:
        remote_path = self._prepare_create(path, config)
        return self._upload(path, remote_path, self._to_bytes(contents), config)

    def write_stream(
        self,
        path: str,
        resource: BinaryIO,
        config: Optional[Dict[str, Any]] = None
    ) -> Metadata:
        remote_path = self._prepare_create(path, config)
        return self._upload_stream(path, remote_path, resource, config)

    def update(
        self,
        path: str,
        contents: Union[str, bytes],
        config: Optional[Dict[str, Any]] = None
    ) -> Metadata:
        remote_path = self._prepare_replace(path, config)
        return self._upload(path, remote_path, self._to_bytes(contents), config)

    def update_stream(
        self,
        path: str,
        resource: BinaryIO,
        config: Optional[Dict[str, Any]] = None
    ) -> Metadata:
        remote_path = self._prepare_replace(path, config)
        return self._upload_stream(path, remote_path, resource, config)

    def rename(self, from_path: str, to_path: str) -> bool:
        """
        Move a file.

        Not atomic: if the delete fails the file exists at both paths.
        """
        self.copy(from_path, to_path)
        self.delete(from_path)
        self.logger.info(f"Renamed {from_path} to {to_path}")
        return True

    def copy(self, from_path: str, to_path: str) -> bool:
        with self.read_stream(from_path) as stream:
            self.write_stream(to_path, stream)
        return True

    def delete(self, path: str) -> bool:
        remote_path = self.resolver.resolve(path)
        with ErrorTranslator.translating(path):
            self.client.get_file_client(remote_path).delete_file()
        self.logger.debug(f"Deleted file {path}")
        return True

    def delete_dir(self, directory: str) -> bool:
        """
        Delete a directory, and everything in it unless recursive delete is disabled.

        A file at the path is not a directory and is left in place.
        """
        return self.directories.delete_recursive(
            self.resolver.resolve(directory),
            allow_recursive=not self.config.disable_recursive_delete
        )

    def create_dir(self, directory: str, config: Optional[Dict[str, Any]] = None) -> Metadata:
        remote_path = self.resolver.resolve(directory)
        self.directories.create_directory(remote_path)
        return Metadata(path=self.resolver.strip(remote_path), type=TYPE_DIR)

    def list_contents(self, directory: str = '', recursive: bool = False) -> List[Metadata]:
        """List a directory breadth first. A missing directory lists as empty."""
        contents: List[Metadata] = []
        pending: Deque[str] = deque([self.resolver.resolve(directory)])

        while pending:
            try:
                entries = self.directories.list_entries(pending.popleft())
            except FileNotFoundException:
                continue

            for entry in entries:
                contents.append(self.mapper.to_metadata(entry))
                if recursive and entry.is_directory:
                    pending.append(entry.path)

        return contents

    def get_metadata(self, path: str) -> Metadata:
        entry = self._properties(path, self.resolver.resolve(path))
        if entry is None:
            raise FileNotFoundException(path)
        return self.mapper.to_metadata(entry)

    def set_visibility(self, path: str, visibility: str) -> Metadata:
        raise UnsupportedCapabilityException('Setting visibility', path)

    def get_visibility(self, path: str) -> str:
        raise UnsupportedCapabilityException('Getting visibility', path)

    def _properties(self, path: str, remote_path: str) -> Optional[RemoteEntry]:
        """Look the path up as a file, then as a directory. None when it is neither."""
        if remote_path:
            try:
                properties = self.client.get_file_client(remote_path).get_file_properties()
                return self.mapper.entry_from_properties(properties, remote_path, is_directory=False)
            except AzureError as error:
                if not ErrorTranslator.is_not_found(error):
                    raise ErrorTranslator.translate(error, path) from error

        try:
            properties = self.client.get_directory_client(remote_path).get_directory_properties()
            return self.mapper.entry_from_properties(properties, remote_path, is_directory=True)
        except AzureError as error:
            if not ErrorTranslator.is_not_found(error):
                raise ErrorTranslator.translate(error, path) from error
        return None

    def _prepare_create(self, path: str, config: Optional[Dict[str, Any]]) -> str:
        self._check_visibility(path, config)
        remote_path = self.resolver.resolve(path)
        if self._properties(path, remote_path) is not None:
            raise FileExistsException(path)
        self.directories.ensure_ancestry(remote_path)
        return remote_path

    def _prepare_replace(self, path: str, config: Optional[Dict[str, Any]]) -> str:
        self._check_visibility(path, config)
        remote_path = self.resolver.resolve(path)
        entry = self._properties(path, remote_path)
        if entry is None or entry.is_directory:
            raise FileNotFoundException(path)
        return remote_path

    def _upload_stream(
        self,
        path: str,
        remote_path: str,
        resource: BinaryIO,
        config: Optional[Dict[str, Any]]
    ) -> Metadata:
        staging = tempfile.SpooledTemporaryFile(max_size=STAGING_MEMORY_LIMIT)
        try:
            shutil.copyfileobj(resource, staging)
            length = staging.tell()
            staging.seek(0)
            return self._upload(path, remote_path, staging, config, length)
        finally:
            staging.close()

    def _upload(
        self,
        path: str,
        remote_path: str,
        data: Any,
        config: Optional[Dict[str, Any]],
        length: Optional[int] = None
    ) -> Metadata:
        if length is None:
            length = len(data)
        mimetype = self._mimetype(path, config)
        content_settings = ContentSettings(content_type=mimetype) if mimetype else None

        with ErrorTranslator.translating(path):
            response = self.client.get_file_client(remote_path).upload_file(
                data, length=length, content_settings=content_settings
            )

        self.logger.debug(f"Uploaded {length} bytes to {path}")
        last_modified = response.get('last_modified') if isinstance(response, dict) else None
        return Metadata(
            path=self.resolver.strip(remote_path),
            type=TYPE_FILE,
            timestamp=int(last_modified.timestamp()) if last_modified else None,
            size=length,
            mimetype=mimetype,
        )

    @staticmethod
    def _check_visibility(path: str, config: Optional[Dict[str, Any]]) -> None:
        visibility = (config or {}).get('visibility')
        if visibility is not None and visibility != VISIBILITY_PUBLIC:
            raise UnsupportedCapabilityException(f"Visibility '{visibility}'", path)

    @staticmethod
    def _mimetype(path: str, config: Optional[Dict[str, Any]]) -> Optional[str]:
        return (config or {}).get('mimetype') or mimetypes.guess_type(path)[0]

    @staticmethod
    def _to_bytes(contents: Union[str, bytes]) -> bytes:
        if isinstance(contents, str):
            return contents.encode('utf-8')
        return contents
