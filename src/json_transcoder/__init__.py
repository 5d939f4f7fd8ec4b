"""
JSON Transcoder - Streaming XML to JSON conversion.

Turns the element, attribute and text events of an XML document into JSON
as they arrive. Instructions in a dedicated namespace declare arrays,
objects, nulls and the scalar type of child elements and attributes.
"""

__version__ = "1.0.0"

from .converter import XMLToJSONConverter
from .io.json_writer import JSONStreamWriter
from .result import JSONResult
from .transcoder import Transcoder
from .types import (
    NS_URI,
    ConversionConfig,
    ConversionResult,
    Diagnostic,
    TranscoderError,
)

__all__ = [
    "XMLToJSONConverter",
    "Transcoder",
    "JSONStreamWriter",
    "JSONResult",
    "ConversionConfig",
    "ConversionResult",
    "Diagnostic",
    "TranscoderError",
    "NS_URI",
]
