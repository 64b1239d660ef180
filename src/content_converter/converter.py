"""Conversion pipeline: load, parse, render, save."""

import asyncio
import logging
from typing import Optional, Tuple, Union
from .codecs import get_codec
from .error_handler import ErrorHandler
from .io import get_file_manager
from .models import Content
from .profiler import ConversionMetrics, ConversionProfiler
from .progress import ProgressReporter
from .types import (
    CodecInterface,
    ConversionError,
    ConversionResult,
    FileManagerInterface,
)

ManagerRef = Union[str, FileManagerInterface]


class ContentConverter:
    """
    Converts documents between formats through the Content model.

    The input codec builds a Content tree from the loaded bytes and the
    output codec renders that same tree. Parsing and rendering run in a
    worker thread so loading and saving remain independently awaitable.
    Each conversion is a single pass: any error aborts it and nothing is
    written.
    """

    def __init__(self, encoding: str = "utf-8",
                 progress_interval: float = 5.0,
                 enable_profiling: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the converter.

        Args:
            encoding: Text encoding passed to codecs
            progress_interval: Seconds between progress log lines (0 disables)
            enable_profiling: Collect psutil-based metrics per conversion
            logger: Optional logger instance
        """
        self.encoding = encoding
        self.progress_interval = progress_interval
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = ErrorHandler(self.logger)
        self.profiler = ConversionProfiler(self.logger) if enable_profiling else None

    async def convert(self, in_format: str, out_format: str,
                      source: str, target: str,
                      source_manager: ManagerRef = "file",
                      target_manager: ManagerRef = "file") -> ConversionResult:
        """
        Convert a document from one format to another.

        Args:
            in_format: Format name of the source document
            out_format: Format name of the target document
            source: Source location understood by the source manager
            target: Target location understood by the target manager
            source_manager: File manager name or instance used to load
            target_manager: File manager name or instance used to save

        Returns:
            ConversionResult describing the outcome
        """
        try:
            input_codec = self._codec(in_format)
            output_codec = self._codec(out_format)
            loader = self._file_manager(source_manager)
            saver = self._file_manager(target_manager)
        except ConversionError as e:
            return self._failure(e, in_format, out_format)

        self.logger.info(f"Converting {source} ({in_format}) to {target} ({out_format})")
        input_size = 0

        try:
            async with ProgressReporter(self.progress_interval, logger=self.logger):
                data = await loader.load(source)
                input_size = len(data)

                validation = self.error_handler.validate_input(data, in_format)
                if not validation.is_valid:
                    return ConversionResult(
                        success=False,
                        input_format=in_format,
                        output_format=out_format,
                        input_size=input_size,
                        errors=[error.message for error in validation.errors]
                    )
                for warning in validation.warnings:
                    self.logger.warning(warning)

                output, metrics = await self._run_codecs(input_codec, output_codec, data)
                await saver.save(target, output)

        except ConversionError as e:
            return self._failure(e, in_format, out_format, input_size)

        self.logger.info(f"Converted {input_size} bytes of {in_format} into {len(output)} bytes of {out_format}")
        return ConversionResult(
            success=True,
            input_format=in_format,
            output_format=out_format,
            input_size=input_size,
            output_size=len(output),
            metrics=metrics
        )

    async def convert_bytes(self, data: bytes, in_format: str, out_format: str) -> bytes:
        """
        Convert in-memory bytes from one format to another.

        Raises:
            ParseError: If the input is malformed
            StructureError: If the tree cannot be rendered in the target format
            UnsupportedFormatError: If either format is unknown
        """
        input_codec = self._codec(in_format)
        output_codec = self._codec(out_format)
        output, _ = await self._run_codecs(input_codec, output_codec, data)
        return output

    async def parse(self, data: bytes, format_name: str) -> Content:
        """Parse bytes of the named format into a Content tree."""
        return await asyncio.to_thread(self._codec(format_name).parse, data)

    async def render(self, content: Content, format_name: str) -> bytes:
        """Render a Content tree into bytes of the named format."""
        return await asyncio.to_thread(self._codec(format_name).render, content)

    async def _run_codecs(self, input_codec: CodecInterface, output_codec: CodecInterface,
                          data: bytes) -> Tuple[bytes, Optional[ConversionMetrics]]:
        if self.profiler is None:
            content = await asyncio.to_thread(input_codec.parse, data)
            return await asyncio.to_thread(output_codec.render, content), None

        operation = f"{input_codec.format_name}_to_{output_codec.format_name}"
        with self.profiler.profile_operation(operation, len(data)):
            content = await asyncio.to_thread(input_codec.parse, data)
            self.profiler.sample_performance()
            output = await asyncio.to_thread(output_codec.render, content)
            metrics = self.profiler.stop_profiling(output_size=len(output))
        return output, metrics

    def _codec(self, format_name: str) -> CodecInterface:
        return get_codec(format_name, encoding=self.encoding, logger=self.logger)

    def _file_manager(self, manager: ManagerRef) -> FileManagerInterface:
        if isinstance(manager, FileManagerInterface):
            return manager
        return get_file_manager(manager, logger=self.logger)

    def _failure(self, error: ConversionError, in_format: str, out_format: str,
                 input_size: int = 0) -> ConversionResult:
        response = self.error_handler.handle_conversion_error(error)
        return ConversionResult(
            success=False,
            input_format=in_format,
            output_format=out_format,
            input_size=input_size,
            errors=[str(error), response.suggested_action]
        )
