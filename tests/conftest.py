from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

import pytest

from app.Storage import AzureFileAdapter
from app.Testing.FakeFileShare import FakeFileShare

PREFIXES = [None, 'test-prefix', 'test-prefix-level1/test-prefix-level2']


class Clock:
    """Deterministic clock advancing one second per reading."""

    def __init__(self) -> None:
        self.seconds = 1_700_000_000

    def __call__(self) -> datetime:
        self.seconds += 1
        return datetime.fromtimestamp(self.seconds, tz=timezone.utc)


@pytest.fixture
def share() -> FakeFileShare:
    """In-memory file share shared by every adapter in a test."""
    return FakeFileShare(clock=Clock())


@pytest.fixture(params=PREFIXES, ids=['no-prefix', 'prefix', 'nested-prefix'])
def prefix(request: pytest.FixtureRequest) -> Optional[str]:
    return request.param


@pytest.fixture
def adapter(share: FakeFileShare, prefix: Optional[str]) -> AzureFileAdapter:
    return AzureFileAdapter(share, {'container': share.share_name}, prefix)


@pytest.fixture
def make_adapter(share: FakeFileShare) -> Callable[..., AzureFileAdapter]:
    """Build further adapters over the same share."""
    def factory(prefix: Optional[str] = None, **config: object) -> AzureFileAdapter:
        return AzureFileAdapter(share, dict(config, container=share.share_name), prefix)
    return factory
