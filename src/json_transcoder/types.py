"""Core type definitions for the JSON Transcoder."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, NamedTuple, Optional, Union


# Namespaces recognised while reading attributes
NS_URI = "http://pageseeder.org/JSON"
XML_NS_URI = "http://www.w3.org/XML/1998/namespace"
XMLNS_NS_URI = "http://www.w3.org/2000/xmlns/"


class Context(Enum):
    """JSON role of the element at the top of the stack."""
    ROOT = "root"
    OBJECT = "object"
    ARRAY = "array"
    VALUE = "value"
    NULL = "null"


class ScalarType(Enum):
    """Declared interpretation of an element or attribute value."""
    DEFAULT = "default"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


class ErrorType(Enum):
    """Enumeration of error types."""
    STACK = "stack"
    SINK = "sink"
    SYNTAX = "syntax"
    PATH = "path"
    STYLESHEET = "stylesheet"
    CONFIG = "config"


class DiagnosticType(Enum):
    """Recoverable anomalies reported while transcoding."""
    NULL_CONTEXT = "null-context"
    VALUE_CONTEXT = "value-context"
    MISSING_NAME = "missing-name"
    IGNORED_NAME = "ignored-name"
    UNKNOWN_INSTRUCTION = "unknown-instruction"
    ILLEGAL_ROOT_NULL = "illegal-root-null"
    AMBIGUOUS_PROPERTY = "ambiguous-property"
    NUMBER_COERCION = "number-coercion"
    BOOLEAN_COERCION = "boolean-coercion"
    PARSER_WARNING = "parser-warning"


JSONScalar = Union[str, int, float, bool, None]


class Attribute(NamedTuple):
    """Attribute as delivered by the event source, in document order."""
    namespace: Optional[str]
    local_name: str
    value: str


@dataclass(frozen=True)
class SourceLocation:
    """Position in the source document a diagnostic refers to."""
    system_id: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class Diagnostic:
    """A recoverable anomaly reported during a conversion."""
    type: DiagnosticType
    message: str
    location: Optional[SourceLocation] = None


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str


@dataclass
class ConversionConfig:
    """Options shared by every conversion of a converter instance."""
    namespace_uri: str = NS_URI
    indent: Optional[int] = None
    encoding: str = "utf-8"
    ensure_ascii: bool = False
    enable_profiling: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.namespace_uri:
            raise ValueError("namespace_uri cannot be empty")
        if self.indent is not None and self.indent < 0:
            raise ValueError("indent must be non-negative")
        if not self.encoding:
            raise ValueError("encoding cannot be empty")


@dataclass
class ConversionResult:
    """Result of converting one XML document to JSON."""
    success: bool
    json_string: Optional[str] = None
    output_path: Optional[str] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)
    errors: Optional[List[str]] = None
    metrics: Optional[Any] = None


class TranscoderError(Exception):
    """Custom exception for conversion errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class StackDisciplineError(TranscoderError):
    """Raised when start/end events do not nest the way the stack requires."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.STACK, context)


class JSONWriterError(TranscoderError):
    """Raised when a sink call would produce malformed JSON."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.SINK, context)


# Abstract base classes for interfaces

class JSONSinkInterface(ABC):
    """Abstract interface for JSON event sinks."""

    @abstractmethod
    def open_object(self, key: Optional[str] = None) -> None:
        """Open a JSON object, as a property when key is given."""
        pass

    @abstractmethod
    def open_array(self, key: Optional[str] = None) -> None:
        """Open a JSON array, as a property when key is given."""
        pass

    @abstractmethod
    def close_current(self) -> None:
        """Close the innermost open object or array."""
        pass

    @abstractmethod
    def write_scalar(self, key: Optional[str], value: JSONScalar) -> None:
        """Write a string, number, boolean or null."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Complete the document and release the sink."""
        pass


class DiagnosticHandlerInterface(ABC):
    """Abstract interface for receiving diagnostics."""

    @abstractmethod
    def report(self, diagnostic: Diagnostic) -> None:
        """Receive a recoverable anomaly."""
        pass
