from . import filesystems, logging

__all__ = ["filesystems", "logging"]
