from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

VISIBILITY_PUBLIC = 'public'

TYPE_FILE = 'file'
TYPE_DIR = 'dir'


@dataclass
class Metadata:
    """Metadata of a file or directory as seen by callers of a disk."""

    path: str
    type: str
    timestamp: Optional[int] = None
    size: Optional[int] = None
    visibility: str = VISIBILITY_PUBLIC
    mimetype: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return self.type == TYPE_FILE

    @property
    def is_dir(self) -> bool:
        return self.type == TYPE_DIR

    @property
    def dirname(self) -> str:
        """Parent directory of the path, empty for top level entries."""
        return self.path.rpartition('/')[0]

    @property
    def basename(self) -> str:
        return self.path.rpartition('/')[2]

    def to_dict(self) -> Dict[str, Any]:
        """Get the record as a plain dictionary."""
        data = asdict(self)
        data['dirname'] = self.dirname
        data['basename'] = self.basename
        return data
