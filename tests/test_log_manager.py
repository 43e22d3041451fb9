"""Tests for LogManager."""

import json
from pathlib import Path
from typing import Iterator

import pytest

from app.Log import LogManager


class TestLogManager:
    """Test suite for channel based logging."""

    @pytest.fixture
    def log_path(self, tmp_path: Path) -> Path:
        return tmp_path / 'logs' / 'storage.log'

    @pytest.fixture
    def manager(self, log_path: Path) -> Iterator[LogManager]:
        manager = LogManager({
            'default': 'test-single',
            'channels': {
                'test-single': {'driver': 'single', 'path': str(log_path), 'level': 'debug'},
                'test-json': {'driver': 'single', 'path': str(log_path), 'level': 'info', 'formatter': 'json'},
                'test-stack': {'driver': 'stack', 'channels': ['test-single']},
                'test-bad': {'driver': 'papertrail'},
            },
        })
        yield manager
        for name in list(manager.get_channels()):
            manager.forget_channel(name)

    def test_single_channel_writes_laravel_format(self, manager: LogManager, log_path: Path) -> None:
        manager.channel().debug('Resolved disk', {'driver': 'azure-file'})

        line = log_path.read_text().strip()
        assert 'test-single.DEBUG: Resolved disk {"driver": "azure-file"}' in line

    def test_json_formatter(self, manager: LogManager, log_path: Path) -> None:
        manager.channel('test-json').warning('Slow request', {'path': 'a.txt'})

        entry = json.loads(log_path.read_text().strip())
        assert entry['level'] == 'WARNING'
        assert entry['channel'] == 'test-json'
        assert entry['context'] == {'path': 'a.txt'}

    def test_level_names_filter_records(self, manager: LogManager, log_path: Path) -> None:
        manager.channel('test-json').debug('hidden')
        manager.channel('test-json').log('error', 'shown')

        assert 'hidden' not in log_path.read_text()
        assert 'shown' in log_path.read_text()

    def test_stack_channel_fans_out(self, manager: LogManager, log_path: Path) -> None:
        manager.channel('test-stack').info('through the stack')

        assert 'test-stack.INFO: through the stack' in log_path.read_text()

    def test_unknown_driver(self, manager: LogManager) -> None:
        with pytest.raises(ValueError, match='papertrail'):
            manager.channel('test-bad')

    def test_channels_are_cached(self, manager: LogManager) -> None:
        assert manager.channel('test-single') is manager.channel('test-single')

    def test_stderr_channel(self, capsys: pytest.CaptureFixture[str]) -> None:
        manager = LogManager({'channels': {'test-stderr': {'driver': 'stderr'}}})
        manager.set_default_driver('test-stderr')
        manager.error('Share unreachable')
        manager.forget_channel('test-stderr')

        assert 'test-stderr.ERROR: Share unreachable' in capsys.readouterr().err
