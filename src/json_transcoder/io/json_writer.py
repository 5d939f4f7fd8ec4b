"""Streaming JSON writer used as the transcoder's sink."""

import io
import json
import logging
from typing import BinaryIO, List, Optional, TextIO

from ..types import JSONScalar, JSONSinkInterface, JSONWriterError

_OBJECT = "object"
_ARRAY = "array"


class _Container:
    """An open object or array and the number of members written to it."""

    __slots__ = ("kind", "count")

    def __init__(self, kind: str):
        self.kind = kind
        self.count = 0


class JSONStreamWriter(JSONSinkInterface):
    """
    Writes JSON text incrementally to a character stream.

    Output is compact by default. The writer refuses any call that would
    produce malformed JSON: properties need a key inside an object and must
    not have one anywhere else, a document holds a single root value, and
    nothing can be written once the writer is closed.
    """

    def __init__(self, stream: TextIO, indent: Optional[int] = None,
                 ensure_ascii: bool = False, close_stream: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the writer.

        Args:
            stream: Character stream receiving the JSON text
            indent: Spaces per nesting level, None for compact output
            ensure_ascii: Escape non-ASCII characters
            close_stream: Close the stream when the writer is closed
            logger: Optional logger instance
        """
        self.stream = stream
        self.indent = indent
        self.ensure_ascii = ensure_ascii
        self.close_stream = close_stream
        self.logger = logger or logging.getLogger(__name__)
        self.characters_written = 0
        self.containers_opened = 0
        self.containers_closed = 0
        self._containers: List[_Container] = []
        self._root_written = False
        self._closed = False
        self._detach = False

    @classmethod
    def for_binary_stream(cls, stream: BinaryIO, encoding: str = "utf-8",
                          **kwargs) -> 'JSONStreamWriter':
        """
        Create a writer encoding its output onto a byte stream.

        The byte stream is left open when the writer is closed.
        """
        wrapper = io.TextIOWrapper(stream, encoding=encoding, write_through=True)
        writer = cls(wrapper, **kwargs)
        writer._detach = True
        return writer

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def depth(self) -> int:
        return len(self._containers)

    # Sink operations

    def open_object(self, key: Optional[str] = None) -> None:
        self._begin_value(key)
        self._write("{")
        self._containers.append(_Container(_OBJECT))
        self.containers_opened += 1

    def open_array(self, key: Optional[str] = None) -> None:
        self._begin_value(key)
        self._write("[")
        self._containers.append(_Container(_ARRAY))
        self.containers_opened += 1

    def close_current(self) -> None:
        self._check_open()
        if not self._containers:
            raise JSONWriterError("No object or array to close")
        container = self._containers.pop()
        if container.count and self.indent is not None:
            self._newline()
        self._write("}" if container.kind == _OBJECT else "]")
        self.containers_closed += 1

    def write_scalar(self, key: Optional[str], value: JSONScalar) -> None:
        self._begin_value(key)
        self._write(self._encode(value))

    def close(self) -> None:
        """
        Complete the document and flush the stream.

        Closing twice is a no-op.

        Raises:
            JSONWriterError: If containers are still open or nothing was written
        """
        if self._closed:
            return
        if self._containers:
            raise JSONWriterError(
                f"Cannot close writer with {len(self._containers)} open container(s)",
                context={"depth": len(self._containers)}
            )
        if not self._root_written:
            raise JSONWriterError("Cannot close writer before a value was written")

        self._closed = True
        self.stream.flush()
        if self._detach:
            self.stream.detach()
        elif self.close_stream:
            self.stream.close()
        self.logger.debug(f"JSON writer closed after {self.characters_written} characters")

    # Helpers

    def _check_open(self) -> None:
        if self._closed:
            raise JSONWriterError("Cannot write to a closed JSON writer")

    def _begin_value(self, key: Optional[str]) -> None:
        """Write the separator and key preceding a new value."""
        self._check_open()

        if not self._containers:
            if key is not None:
                raise JSONWriterError(f"Property '{key}' written outside an object")
            if self._root_written:
                raise JSONWriterError("A JSON document holds a single root value")
            self._root_written = True
            return

        container = self._containers[-1]
        if container.kind == _OBJECT and key is None:
            raise JSONWriterError("Values inside an object must have a key")
        if container.kind == _ARRAY and key is not None:
            raise JSONWriterError(f"Property '{key}' written inside an array")

        if container.count:
            self._write(",")
        container.count += 1
        if self.indent is not None:
            self._newline()
        if key is not None:
            self._write(self._encode(key))
            self._write(": " if self.indent is not None else ":")

    def _encode(self, value: JSONScalar) -> str:
        return json.dumps(value, ensure_ascii=self.ensure_ascii)

    def _newline(self) -> None:
        self._write("\n" + " " * (self.indent * len(self._containers)))

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.characters_written += len(text)
