from __future__ import annotations

import logging
from typing import Any, List, Tuple

from azure.core.exceptions import AzureError

from app.Filesystem.Exceptions import DirectoryNotEmptyException, FileNotFoundException

from .ErrorTranslator import ErrorTranslator
from .MetadataMapper import MetadataMapper, RemoteEntry
from .PathResolver import PathResolver

logger = logging.getLogger(__name__)


class DirectoryOperator:
    """
    Directory handling for a file share.

    The share needs every parent directory to exist before a file can be
    created in it, and only deletes empty directories. This class creates
    missing ancestors and walks subtrees for recursive deletes.
    """

    def __init__(self, client: Any, resolver: PathResolver) -> None:
        self.client = client
        self.resolver = resolver

    def ensure_ancestry(self, remote_path: str) -> None:
        """Create every missing directory above a remote path, root first."""
        for ancestor in PathResolver.ancestors(remote_path):
            self._create(ancestor)

    def create_directory(self, remote_path: str) -> None:
        """Create a directory together with its missing ancestors."""
        self.ensure_ancestry(remote_path)
        if remote_path:
            self._create(remote_path)

    def list_entries(self, remote_path: str) -> List[RemoteEntry]:
        """List the immediate children of a directory."""
        directory_client = self.client.get_directory_client(remote_path)
        with ErrorTranslator.translating(self._caller_path(remote_path)):
            return [
                MetadataMapper.entry_from_listing(item, remote_path)
                for item in directory_client.list_directories_and_files(include=['timestamps'])
            ]

    def delete_recursive(self, remote_path: str, allow_recursive: bool = True) -> bool:
        """
        Delete a directory.

        With recursion disabled only the named directory is removed, so a
        directory with children raises DirectoryNotEmptyException. With it
        enabled the subtree is deleted in post-order, one entry at a time.
        A missing directory counts as deleted. A file at the path is left
        untouched.
        """
        if not allow_recursive:
            if remote_path:
                self._delete_directory(remote_path)
            elif self._list_tolerant(remote_path):
                raise DirectoryNotEmptyException(self._caller_path(remote_path))
            return True

        # (directory, children already queued)
        pending: List[Tuple[str, bool]] = [(remote_path, False)]
        while pending:
            directory, expanded = pending.pop()
            if expanded:
                if directory:
                    self._delete_directory(directory)
                continue

            pending.append((directory, True))
            for entry in self._list_tolerant(directory):
                if entry.is_directory:
                    pending.append((entry.path, False))
                else:
                    self._delete_file(entry.path)

        logger.debug(f"Deleted directory tree {remote_path!r}")
        return True

    def _create(self, remote_path: str) -> None:
        try:
            self.client.get_directory_client(remote_path).create_directory()
            logger.debug(f"Created directory {remote_path!r}")
        except AzureError as error:
            if not ErrorTranslator.is_already_exists(error):
                raise ErrorTranslator.translate(error, self._caller_path(remote_path)) from error

    def _list_tolerant(self, remote_path: str) -> List[RemoteEntry]:
        try:
            return self.list_entries(remote_path)
        except FileNotFoundException:
            return []

    def _delete_file(self, remote_path: str) -> None:
        try:
            self.client.get_file_client(remote_path).delete_file()
        except AzureError as error:
            if not ErrorTranslator.is_not_found(error):
                raise ErrorTranslator.translate(error, self._caller_path(remote_path)) from error

    def _delete_directory(self, remote_path: str) -> None:
        try:
            self.client.get_directory_client(remote_path).delete_directory()
        except AzureError as error:
            if not ErrorTranslator.is_not_found(error):
                raise ErrorTranslator.translate(error, self._caller_path(remote_path)) from error

    def _caller_path(self, remote_path: str) -> str:
        # Directories above the prefix are the caller's root.
        if self.resolver.contains(remote_path):
            return self.resolver.strip(remote_path)
        return ''
