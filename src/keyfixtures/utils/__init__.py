from .logging import configure_logging, get_logger
from .cleanup import CleanupManager, remove_file

__all__ = [
    "configure_logging",
    "get_logger",
    "CleanupManager",
    "remove_file",
]
