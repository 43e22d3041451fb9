from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from app.Filesystem.Metadata import TYPE_DIR, TYPE_FILE, VISIBILITY_PUBLIC, Metadata

from .PathResolver import PathResolver


@dataclass(frozen=True)
class RemoteEntry:
    """A file or directory as reported by the file share."""

    path: str
    is_directory: bool
    size: Optional[int] = None
    last_modified: Optional[datetime] = None
    content_type: Optional[str] = None


class MetadataMapper:
    """Converts file share properties into caller-facing metadata."""

    def __init__(self, resolver: PathResolver) -> None:
        self.resolver = resolver

    @staticmethod
    def entry_from_properties(properties: Any, remote_path: str, is_directory: bool) -> RemoteEntry:
        """Build an entry from a get-properties response."""
        if is_directory:
            return RemoteEntry(
                path=remote_path,
                is_directory=True,
                last_modified=getattr(properties, 'last_modified', None),
            )

        content_settings = getattr(properties, 'content_settings', None)
        return RemoteEntry(
            path=remote_path,
            is_directory=False,
            size=getattr(properties, 'size', None),
            last_modified=getattr(properties, 'last_modified', None),
            content_type=getattr(content_settings, 'content_type', None),
        )

    @classmethod
    def entry_from_listing(cls, item: Any, remote_directory: str) -> RemoteEntry:
        """Build an entry from one item of a directory listing."""
        remote_path = PathResolver.join(remote_directory, item.name)
        return cls.entry_from_properties(
            item, remote_path, bool(getattr(item, 'is_directory', False))
        )

    def to_metadata(self, entry: RemoteEntry) -> Metadata:
        path = self.resolver.strip(entry.path)
        timestamp = int(entry.last_modified.timestamp()) if entry.last_modified else None

        if entry.is_directory:
            return Metadata(path=path, type=TYPE_DIR, timestamp=timestamp)

        mimetype = entry.content_type or mimetypes.guess_type(path)[0]
        return Metadata(
            path=path,
            type=TYPE_FILE,
            timestamp=timestamp,
            size=entry.size,
            visibility=VISIBILITY_PUBLIC,
            mimetype=mimetype,
        )
