"""Format codecs and the static registry that selects them."""

from pathlib import Path
from typing import Callable, Dict, List, Union
from ..types import CodecInterface, UnsupportedFormatError
from .json_codec import JSONCodec
from .xml_codec import XMLCodec

CODEC_REGISTRY: Dict[str, Callable[..., CodecInterface]] = {
    "json": JSONCodec,
    "xml": XMLCodec,
}


def available_formats() -> List[str]:
    """Names of all registered formats."""
    return sorted(CODEC_REGISTRY)


def get_codec(name: str, **kwargs) -> CodecInterface:
    """
    Instantiate the codec registered under a format name.

    Args:
        name: Format name, case-insensitive
        **kwargs: Passed to the codec factory

    Returns:
        Codec instance

    Raises:
        UnsupportedFormatError: If no codec is registered for the name
    """
    factory = CODEC_REGISTRY.get(name.lower())
    if factory is None:
        raise UnsupportedFormatError(name, available_formats())
    return factory(**kwargs)


def detect_format(path: Union[str, Path]) -> str:
    """Infer a format name from a file suffix."""
    suffix = Path(path).suffix.lstrip(".").lower()
    if suffix not in CODEC_REGISTRY:
        raise UnsupportedFormatError(suffix or str(path), available_formats())
    return suffix


__all__ = [
    "JSONCodec",
    "XMLCodec",
    "CODEC_REGISTRY",
    "available_formats",
    "get_codec",
    "detect_format",
]
