from __future__ import annotations

import os
from typing import Dict, Any

# Default log channel
default = os.getenv('LOG_CHANNEL', 'stderr')

channels: Dict[str, Dict[str, Any]] = {
    'stack': {
        'driver': 'stack',
        'channels': ['single', 'stderr'],
    },

    'single': {
        'driver': 'single',
        'path': 'storage/logs/storage.log',
        'level': os.getenv('LOG_LEVEL', 'debug'),
    },

    'daily': {
        'driver': 'daily',
        'path': 'storage/logs/storage.log',
        'level': os.getenv('LOG_LEVEL', 'debug'),
        'days': 14,
    },

    'stderr': {
        'driver': 'stderr',
        'level': os.getenv('LOG_LEVEL', 'info'),
        'formatter': 'laravel',
    },

    'json': {
        'driver': 'stderr',
        'level': os.getenv('LOG_LEVEL', 'info'),
        'formatter': 'json',
    },

    # Disk resolution and configuration events from the filesystem manager
    'filesystem': {
        'driver': 'stderr',
        'level': os.getenv('FILESYSTEM_LOG_LEVEL', 'warning'),
    },
}
