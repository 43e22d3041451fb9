from __future__ import annotations

from .FakeFileShare import FakeFileShare, storage_error

__all__ = [
    'FakeFileShare',
    'storage_error'
]
