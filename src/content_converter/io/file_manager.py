"""File managers: byte sources and sinks for the conversion pipeline."""

import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional
from ..types import (
    ConversionError,
    ErrorType,
    FileManagerInterface,
    UnsupportedFormatError,
)

STDIO = "-"


class LocalFileManager(FileManagerInterface):
    """
    File manager backed by the local filesystem.

    The config string is a file path; ``-`` reads stdin or writes stdout.
    Blocking I/O runs in a worker thread so loading and saving stay
    awaitable alongside the rest of the pipeline.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the file manager.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    async def load(self, config: str) -> bytes:
        """
        Read all bytes from a file.

        Args:
            config: File path, or ``-`` for stdin

        Returns:
            File contents

        Raises:
            ConversionError: If the file cannot be read
        """
        if config == STDIO:
            return await asyncio.to_thread(sys.stdin.buffer.read)

        path = Path(config)
        if not path.is_file():
            raise ConversionError(
                f"Input file {path} does not exist",
                ErrorType.FILESYSTEM,
                context={"path": str(path)}
            )
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise ConversionError(
                f"Failed to read {path}: {str(e)}",
                ErrorType.FILESYSTEM,
                context={"path": str(path)}
            ) from e

        self.logger.debug(f"Read {len(data)} bytes from {path}")
        return data

    async def save(self, config: str, data: bytes) -> None:
        """
        Write bytes to a file, creating parent directories as needed.

        Args:
            config: File path, or ``-`` for stdout
            data: Bytes to write

        Raises:
            ConversionError: If the file cannot be written
        """
        if config == STDIO:
            await asyncio.to_thread(self._write_stdout, data)
            return

        path = Path(config)
        try:
            self._ensure_directory_exists(path.parent)
            await asyncio.to_thread(path.write_bytes, data)
        except OSError as e:
            raise ConversionError(
                f"Failed to write {path}: {str(e)}",
                ErrorType.FILESYSTEM,
                context={"path": str(path)}
            ) from e

        self.logger.debug(f"Wrote {len(data)} bytes to {path}")

    @staticmethod
    def _write_stdout(data: bytes) -> None:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()

    def _ensure_directory_exists(self, directory_path: Path) -> None:
        """
        Ensure that a directory exists, creating it if necessary.

        Args:
            directory_path: Path to directory

        Raises:
            ConversionError: If the directory is not writable
        """
        directory_path.mkdir(parents=True, exist_ok=True)
        if not os.access(directory_path, os.W_OK):
            raise ConversionError(
                f"Directory {directory_path} is not writable",
                ErrorType.FILESYSTEM
            )


class MemoryFileManager(FileManagerInterface):
    """In-memory file manager keyed by config string."""

    def __init__(self, files: Optional[Dict[str, bytes]] = None,
                 logger: Optional[logging.Logger] = None):
        self.files: Dict[str, bytes] = dict(files or {})
        self.logger = logger or logging.getLogger(__name__)

    async def load(self, config: str) -> bytes:
        try:
            return self.files[config]
        except KeyError:
            raise ConversionError(
                f"No in-memory file named {config!r}",
                ErrorType.FILESYSTEM,
                context={"path": config}
            ) from None

    async def save(self, config: str, data: bytes) -> None:
        self.files[config] = data
        self.logger.debug(f"Stored {len(data)} bytes as {config!r}")


FILE_MANAGER_REGISTRY: Dict[str, Callable[..., FileManagerInterface]] = {
    "file": LocalFileManager,
    "memory": MemoryFileManager,
}


def available_file_managers() -> List[str]:
    """Names of all registered file managers."""
    return sorted(FILE_MANAGER_REGISTRY)


def get_file_manager(name: str, **kwargs) -> FileManagerInterface:
    """
    Instantiate the file manager registered under a name.

    Raises:
        UnsupportedFormatError: If no file manager is registered for the name
    """
    factory = FILE_MANAGER_REGISTRY.get(name.lower())
    if factory is None:
        raise UnsupportedFormatError(name, available_file_managers())
    return factory(**kwargs)
