from __future__ import annotations

import os
from typing import Dict, Any

# Default filesystem disk
default = os.getenv('FILESYSTEM_DISK', 'azure-file')


def _connection_string() -> str:
    """Build the storage connection string from the account credentials."""
    return 'DefaultEndpointsProtocol=https;AccountName={};AccountKey={}'.format(
        os.getenv('AZURE_FILE_STORAGE_ACCOUNT', ''),
        os.getenv('AZURE_FILE_STORAGE_ACCESS_KEY', ''),
    )


# Filesystem disks configuration
disks: Dict[str, Dict[str, Any]] = {
    # Azure File Storage share
    'azure-file': {
        'driver': 'azure-file',
        'endpoint': os.getenv('AZURE_FILE_STORAGE_CONNECTION_STRING') or _connection_string(),
        'container': os.getenv('AZURE_FILE_STORAGE_SHARE_NAME'),
        'prefix': os.getenv('AZURE_FILE_STORAGE_PREFIX', ''),
        # Set to stop directory deletion from removing all descendant
        # files and directories.
        'disableRecursiveDelete': os.getenv('AZURE_FILE_STORAGE_DISABLE_RECURSIVE_DELETE', 'false'),
    },
}
