"""File I/O operations for the Content Converter."""

from .file_manager import (
    LocalFileManager,
    MemoryFileManager,
    FILE_MANAGER_REGISTRY,
    available_file_managers,
    get_file_manager,
)

__all__ = [
    "LocalFileManager",
    "MemoryFileManager",
    "FILE_MANAGER_REGISTRY",
    "available_file_managers",
    "get_file_manager",
]
