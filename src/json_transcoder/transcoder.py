"""State machine turning XML element events into JSON sink calls."""

import logging
from typing import Callable, List, Optional, Sequence

from .coercion import CoercionError, coerce_scalar
from .error_handler import ErrorHandler
from .state import ContextStack
from .types import (
    NS_URI,
    XML_NS_URI,
    XMLNS_NS_URI,
    Attribute,
    Context,
    Diagnostic,
    DiagnosticHandlerInterface,
    DiagnosticType,
    JSONSinkInterface,
    ScalarType,
    SourceLocation,
)


class Transcoder:
    """
    Push-based XML to JSON transcoder.

    Receives one event at a time from an upstream source and writes the
    corresponding JSON to a sink without building a tree. Elements become
    objects unless their parent declares them as scalars through the
    ``string``, ``number``, ``boolean`` or ``null`` instruction attributes;
    ``array``, ``object`` and ``null`` elements in the instruction namespace
    open those shapes explicitly.

    An instance converts a single document: the context stack and the
    pending value buffer belong to it alone.
    """

    def __init__(self, sink: JSONSinkInterface,
                 diagnostics: Optional[DiagnosticHandlerInterface] = None,
                 namespace_uri: str = NS_URI,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the transcoder.

        Args:
            sink: Destination of the JSON events, closed at document end
            diagnostics: Receiver of recoverable anomalies
            namespace_uri: Namespace of the conversion instructions
            logger: Optional logger instance
        """
        self.sink = sink
        self.logger = logger or logging.getLogger(__name__)
        self.diagnostics = diagnostics or ErrorHandler(self.logger)
        self.namespace_uri = namespace_uri
        self.location_provider: Optional[Callable[[], Optional[SourceLocation]]] = None
        self.events_processed = 0
        self._stack = ContextStack(namespace_uri)
        self._buffer: List[str] = []

    @property
    def stack(self) -> ContextStack:
        return self._stack

    # Upstream events

    def document_start(self) -> None:
        self.events_processed += 1
        self._stack.push_root()
        self.logger.debug("Document started")

    def document_end(self) -> None:
        self.events_processed += 1
        self._stack.pop_root()
        self.sink.close()
        self.logger.debug(f"Document ended after {self.events_processed} events")

    def element_start(self, namespace: Optional[str], local_name: str,
                      attributes: Sequence[Attribute] = ()) -> None:
        """
        Handle the start of an element.

        Args:
            namespace: Namespace URI of the element, None if it has none
            local_name: Local name of the element
            attributes: Attributes in document order
        """
        self.events_processed += 1
        attributes = [Attribute(*attribute) for attribute in attributes]

        if self._stack.is_context(Context.NULL):
            self._stack.push(Context.NULL, attributes, self._stack.current_name())
            self._report(DiagnosticType.NULL_CONTEXT,
                         f"Ignoring element {local_name} in null context")
        elif self._stack.is_context(Context.VALUE):
            self._stack.push(Context.NULL, attributes, self._stack.current_name())
            self._report(DiagnosticType.VALUE_CONTEXT,
                         f"Ignoring element {local_name} inside value {self._stack.current_name()}")
        elif namespace == self.namespace_uri:
            self._start_instruction(local_name, attributes)
        else:
            self._start_element(local_name, attributes)

    def character_data(self, text: str) -> None:
        self.events_processed += 1
        if self._stack.is_context(Context.VALUE):
            self._buffer.append(text)

    def element_end(self, namespace: Optional[str], local_name: str) -> None:
        """
        Handle the end of an element.

        Args:
            namespace: Namespace URI of the element, None if it has none
            local_name: Local name of the element
        """
        self.events_processed += 1
        frame = self._stack.pop()

        if frame.context is Context.NULL:
            return

        if namespace == self.namespace_uri:
            if local_name in ("array", "object"):
                self.sink.close_current()
        elif frame.context is Context.VALUE:
            key = frame.name if self._stack.is_context(Context.OBJECT) else None
            value = "".join(self._buffer)
            self._buffer = []
            self._write_property(key, value, frame.scalar_type)
        else:
            self.sink.close_current()

    # Element handling

    def _start_instruction(self, local_name: str, attributes: List[Attribute]) -> None:
        """Handle an element in the instruction namespace."""
        in_object = self._stack.is_context(Context.OBJECT)
        name = self._instruction_attribute(attributes, "name")
        if name is None and in_object:
            self._report(DiagnosticType.MISSING_NAME,
                         f"Attribute 'name' must be used to specify array/object name, "
                         f"using '{local_name}'")
            name = local_name

        key = name if in_object else None

        if local_name == "array":
            self.sink.open_array(key)
            self._stack.push(Context.ARRAY, attributes, name)

        elif local_name == "object":
            self.sink.open_object(key)
            self._stack.push(Context.OBJECT, attributes, name)
            self._write_attributes(attributes)

        elif local_name == "null":
            if self._stack.is_context(Context.ROOT):
                self._report(DiagnosticType.ILLEGAL_ROOT_NULL,
                             "Illegal null as root, substituting for empty object")
                self.sink.open_object()
                self.sink.close_current()
            else:
                self.sink.write_scalar(key, None)
            self._stack.push(Context.NULL, attributes, name)

        else:
            self._stack.push(Context.OBJECT, attributes, name)
            self._report(DiagnosticType.UNKNOWN_INSTRUCTION,
                         f"Unknown JSON element: {local_name}")

    def _start_element(self, local_name: str, attributes: List[Attribute]) -> None:
        """Handle an ordinary element, as an object or a declared scalar."""
        name = self._instruction_attribute(attributes, "name")
        scalar_type = self._stack.type_of(local_name)

        # Declared by the parent as a scalar: wait for the text
        if scalar_type is not ScalarType.DEFAULT:
            if self._has_properties(attributes):
                self._report(DiagnosticType.AMBIGUOUS_PROPERTY,
                             f"Element {local_name} is mapped to a property, also has properties!")
            key = local_name if name is None else name
            self._stack.push(Context.VALUE, attributes, key, scalar_type)
            self._buffer = []
            return

        if self._stack.is_context(Context.OBJECT):
            if name is None:
                name = local_name
            self.sink.open_object(name)
        else:
            if name is not None:
                self._report(DiagnosticType.IGNORED_NAME,
                             "Attribute 'name' is ignored in array/document context")
            self.sink.open_object()
        self._stack.push(Context.OBJECT, attributes, name)
        self._write_attributes(attributes)

    def _write_attributes(self, attributes: List[Attribute]) -> None:
        """Serialize attributes as properties of the object just opened."""
        for attribute in attributes:
            if self._is_property(attribute):
                scalar_type = self._stack.type_of(attribute.local_name)
                self._write_property(attribute.local_name, attribute.value, scalar_type)

    def _write_property(self, key: Optional[str], value: str, scalar_type: ScalarType) -> None:
        """Write a value as its declared type, falling back to a string."""
        try:
            self.sink.write_scalar(key, coerce_scalar(value, scalar_type))
        except CoercionError as e:
            self.sink.write_scalar(key, value)
            target = f"'{key}'" if key is not None else "value"
            self._report(e.diagnostic_type,
                         f"Unable to convert {target} to a {scalar_type.value}: {e}")

    # Helpers

    def _is_property(self, attribute: Attribute) -> bool:
        return attribute.namespace not in (self.namespace_uri, XMLNS_NS_URI, XML_NS_URI)

    def _has_properties(self, attributes: List[Attribute]) -> bool:
        return any(self._is_property(attribute) for attribute in attributes)

    def _instruction_attribute(self, attributes: List[Attribute], local_name: str) -> Optional[str]:
        for attribute in attributes:
            if attribute.namespace == self.namespace_uri and attribute.local_name == local_name:
                return attribute.value
        return None

    def _report(self, diagnostic_type: DiagnosticType, message: str) -> None:
        location = self.location_provider() if self.location_provider else None
        self.diagnostics.report(Diagnostic(diagnostic_type, message, location))
