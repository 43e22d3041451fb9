from .AzureFileAdapter import AzureFileAdapter
from .AzureFileConfig import AzureFileConfig
from .DirectoryOperator import DirectoryOperator
from .ErrorTranslator import ErrorTranslator
from .MetadataMapper import MetadataMapper, RemoteEntry
from .PathResolver import PathResolver

__all__ = [
    # Adapter
    "AzureFileAdapter",
    "AzureFileConfig",

    # Adapter components
    "DirectoryOperator",
    "ErrorTranslator",
    "MetadataMapper",
    "RemoteEntry",
    "PathResolver",
]
