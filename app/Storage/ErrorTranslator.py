from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from azure.core.exceptions import (
    AzureError,
    HttpResponseError,
    ResourceExistsError,
    ResourceNotFoundError,
)
from azure.storage.fileshare import StorageErrorCode

from app.Filesystem.Exceptions import (
    DirectoryNotEmptyException,
    FileExistsException,
    FileNotFoundException,
    FilesystemException,
    TransportException,
)

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = frozenset({
    StorageErrorCode.resource_not_found.value,
    StorageErrorCode.parent_not_found.value,
    StorageErrorCode.share_not_found.value,
})

ALREADY_EXISTS_CODES = frozenset({
    StorageErrorCode.resource_already_exists.value,
})

DIRECTORY_NOT_EMPTY_CODES = frozenset({
    StorageErrorCode.directory_not_empty.value,
})


class ErrorTranslator:
    """Maps file share faults onto filesystem exceptions."""

    @staticmethod
    def error_code(error: BaseException) -> Optional[str]:
        """Get the storage error code of a fault as a plain string."""
        code = getattr(error, 'error_code', None)
        if code is None:
            return None
        return str(getattr(code, 'value', code))

    @classmethod
    def is_not_found(cls, error: BaseException) -> bool:
        code = cls.error_code(error)
        if code in DIRECTORY_NOT_EMPTY_CODES or code in ALREADY_EXISTS_CODES:
            return False
        if code in NOT_FOUND_CODES or isinstance(error, ResourceNotFoundError):
            return True
        return isinstance(error, HttpResponseError) and error.status_code == 404

    @classmethod
    def is_already_exists(cls, error: BaseException) -> bool:
        code = cls.error_code(error)
        if code in DIRECTORY_NOT_EMPTY_CODES:
            return False
        return code in ALREADY_EXISTS_CODES or isinstance(error, ResourceExistsError)

    @classmethod
    def translate(cls, error: BaseException, path: str) -> FilesystemException:
        """Classify a fault raised for the given path."""
        if isinstance(error, FilesystemException):
            return error

        code = cls.error_code(error)
        if code in DIRECTORY_NOT_EMPTY_CODES:
            translated: FilesystemException = DirectoryNotEmptyException(path, error)
        elif cls.is_not_found(error):
            translated = FileNotFoundException(path, error)
        elif cls.is_already_exists(error):
            translated = FileExistsException(path, error)
        else:
            translated = TransportException(
                f"File share request failed for path {path}: {error}", path, error
            )

        logger.debug(
            f"Translated {type(error).__name__} ({code}) for {path} "
            f"into {type(translated).__name__}"
        )
        return translated

    @classmethod
    @contextmanager
    def translating(cls, path: str) -> Iterator[None]:
        """Re-raise any file share fault in the block as a filesystem exception."""
        try:
            yield
        except AzureError as error:
            raise cls.translate(error, path) from error
