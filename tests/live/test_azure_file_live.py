"""
Live tests against a real Azure File Storage share.

Skipped unless AZURE_FILE_STORAGE_ACCOUNT, AZURE_FILE_STORAGE_ACCESS_KEY
and AZURE_FILE_STORAGE_SHARE_NAME are set. The tests write under fixed
prefixes and subdirectories of the share and remove them again.
"""

import io
import os
from typing import Iterator, Optional

import pytest

from app.Filesystem.Exceptions import (
    FileExistsException,
    FileNotFoundException,
    UnsupportedCapabilityException,
)
from app.Storage import AzureFileAdapter, AzureFileConfig

REQUIRED_VARIABLES = (
    'AZURE_FILE_STORAGE_ACCOUNT',
    'AZURE_FILE_STORAGE_ACCESS_KEY',
    'AZURE_FILE_STORAGE_SHARE_NAME',
)

PREFIX_ONE = 'test-prefix'
PREFIX_TWO = 'test-prefix-level1/test-prefix-level2'

SUBDIR_ONE = 'test-subdir1'
SUBDIR_TWO = 'test-subdir1/test-subdir2'

pytestmark = pytest.mark.skipif(
    not all(os.getenv(name) for name in REQUIRED_VARIABLES),
    reason='Azure File Storage credentials are not configured'
)


def filename(number: int, directory: Optional[str] = None) -> str:
    name = f"test-foo-{number}.txt"
    if directory is None:
        return name
    return f"{directory.strip('/')}/{name}".strip('/')


@pytest.fixture(scope='module')
def config() -> AzureFileConfig:
    return AzureFileConfig(
        account_name=os.environ['AZURE_FILE_STORAGE_ACCOUNT'],
        account_key=os.environ['AZURE_FILE_STORAGE_ACCESS_KEY'],
        container=os.environ['AZURE_FILE_STORAGE_SHARE_NAME'],
    )


@pytest.fixture(scope='module')
def client(config: AzureFileConfig) -> object:
    from azure.storage.fileshare import ShareClient

    return ShareClient.from_connection_string(config.connection_string(), share_name=config.container)


@pytest.fixture(scope='module', autouse=True)
def clean_share(client: object, config: AzureFileConfig) -> Iterator[None]:
    """Start and finish with none of the test paths on the share."""
    def clear() -> None:
        root = AzureFileAdapter(client, config)
        for directory in (PREFIX_ONE, PREFIX_TWO.split('/')[0], SUBDIR_ONE):
            assert root.delete_dir(directory) is True
        for number in range(20):
            if root.has(filename(number)):
                root.delete(filename(number))

    clear()
    yield
    clear()


@pytest.fixture(params=[None, PREFIX_ONE, PREFIX_TWO], ids=['no-prefix', 'single-prefix', 'double-prefix'])
def adapter(request: pytest.FixtureRequest, client: object, config: AzureFileConfig) -> AzureFileAdapter:
    return AzureFileAdapter(client, config, request.param)


class TestAzureFileLive:
    """Round trips through a real share, under each prefix layout."""

    def test_has(self, adapter: AzureFileAdapter) -> None:
        adapter.write(filename(1), 'content')
        adapter.put(filename(2, SUBDIR_ONE), 'content')
        adapter.put(filename(3, SUBDIR_TWO), 'content')

        assert adapter.has(filename(1))
        assert adapter.has(filename(2, SUBDIR_ONE))
        assert adapter.has(filename(3, SUBDIR_TWO))
        assert adapter.has(SUBDIR_ONE)
        assert adapter.has(SUBDIR_TWO)

    def test_has_fail(self, adapter: AzureFileAdapter) -> None:
        assert not adapter.has(filename(4))
        assert not adapter.has(filename(4, SUBDIR_ONE))
        assert not adapter.has(filename(4, SUBDIR_TWO))

    @pytest.mark.parametrize('path', [filename(5), filename(6, SUBDIR_ONE), filename(7, SUBDIR_TWO)])
    def test_write_is_create_only(self, adapter: AzureFileAdapter, path: str) -> None:
        adapter.write(path, 'content', {'visibility': 'public'})

        with pytest.raises(FileExistsException):
            adapter.write(path, 'other', {'visibility': 'public'})
        assert adapter.read(path) == b'content'

    @pytest.mark.parametrize('path', [filename(8), filename(8, SUBDIR_ONE)])
    def test_write_stream_then_delete(self, adapter: AzureFileAdapter, path: str) -> None:
        adapter.write_stream(path, io.BytesIO(b'content'), {'visibility': 'public'})
        assert adapter.read(path) == b'content'

        with pytest.raises(FileExistsException):
            adapter.write_stream(path, io.BytesIO(b'content'))

        assert adapter.delete(path) is True
        with pytest.raises(FileNotFoundException):
            adapter.delete(path)

    def test_update(self, adapter: AzureFileAdapter) -> None:
        paths = [filename(9), filename(10, SUBDIR_ONE), filename(11, SUBDIR_TWO)]
        for path in paths:
            adapter.put(path, 'content')

        for number, path in enumerate(paths):
            adapter.update(path, f"foobar{number}")
        for number, path in enumerate(paths):
            assert adapter.read_string(path) == f"foobar{number}"

        for number, path in enumerate(paths):
            adapter.update_stream(path, io.BytesIO(f"stream{number}".encode()))
        for number, path in enumerate(paths):
            with adapter.read_stream(path) as stream:
                assert stream.read() == f"stream{number}".encode()

    def test_update_fail(self, adapter: AzureFileAdapter) -> None:
        with pytest.raises(FileNotFoundException):
            adapter.update(filename(15), 'foobar15')

    def test_visibility_is_unsupported(self, adapter: AzureFileAdapter) -> None:
        with pytest.raises(UnsupportedCapabilityException):
            adapter.set_visibility(filename(5), 'public')
        with pytest.raises(UnsupportedCapabilityException):
            adapter.get_visibility(filename(5))

    def test_delete_dir(self, adapter: AzureFileAdapter) -> None:
        adapter.put(filename(12, SUBDIR_TWO), 'content')

        assert adapter.delete_dir(SUBDIR_ONE) is True
        assert not adapter.has(SUBDIR_ONE)
        assert adapter.delete_dir(SUBDIR_ONE) is True
