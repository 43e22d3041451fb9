from __future__ import annotations

from typing import List, Optional

from app.Filesystem.Exceptions import PathTraversalException


class PathResolver:
    """
    Maps caller paths onto paths inside the file share.

    The optional prefix is prepended to every path, so several disks can
    share one file share without seeing each other's files. Remote paths
    never carry a leading or trailing slash; the empty string is the root
    of the share.
    """

    def __init__(self, prefix: Optional[str] = None) -> None:
        self._prefix = self.normalize(prefix or '')

    @property
    def prefix(self) -> str:
        return self._prefix

    @staticmethod
    def normalize(path: str) -> str:
        """Collapse separators and dot segments into a relative path."""
        segments: List[str] = []
        for segment in path.replace('\\', '/').split('/'):
            if segment in ('', '.'):
                continue
            if segment == '..':
                if not segments:
                    raise PathTraversalException(path)
                segments.pop()
                continue
            segments.append(segment)
        return '/'.join(segments)

    def resolve(self, path: str) -> str:
        """Get the remote path for a caller path."""
        return self.join(self._prefix, self.normalize(path))

    def contains(self, remote_path: str) -> bool:
        """Check if a remote path lies inside the prefix."""
        if not self._prefix or remote_path == self._prefix:
            return True
        return remote_path.startswith(self._prefix + '/')

    def strip(self, remote_path: str) -> str:
        """Get the caller path for a remote path."""
        if not self.contains(remote_path):
            raise PathTraversalException(remote_path)
        if not self._prefix:
            return remote_path
        if remote_path == self._prefix:
            return ''
        return remote_path[len(self._prefix) + 1:]

    @staticmethod
    def join(directory: str, name: str) -> str:
        if not directory:
            return name
        if not name:
            return directory
        return f"{directory}/{name}"

    @staticmethod
    def dirname(path: str) -> str:
        return path.rpartition('/')[0]

    @staticmethod
    def basename(path: str) -> str:
        return path.rpartition('/')[2]

    @staticmethod
    def ancestors(remote_path: str) -> List[str]:
        """Get the directories above a remote path, ordered from the root down."""
        segments = remote_path.split('/')[:-1] if remote_path else []
        return ['/'.join(segments[:index]) for index in range(1, len(segments) + 1)]
