"""Output destinations for JSON produced by a conversion."""

import io
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, BinaryIO, Dict, Iterator, Optional, TextIO, Union

from .io.json_writer import JSONStreamWriter

JSON_MEDIA_TYPE = "application/json"

OutputTarget = Union[None, str, Path, TextIO, BinaryIO]


class JSONResult:
    """
    Destination of a JSON document.

    A result wraps exactly one of a byte stream, a character stream or a
    file path; without any of them output goes to standard output. Streams
    supplied by the caller are never closed, files opened by the result are.
    """

    def __init__(self, stream: Optional[Union[TextIO, BinaryIO]] = None,
                 path: Optional[Union[str, Path]] = None,
                 encoding: str = "utf-8",
                 indent: Optional[int] = None,
                 ensure_ascii: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the result.

        Args:
            stream: Text or byte stream to write to
            path: File to create, used when no stream is given
            encoding: Encoding for byte streams and files
            indent: Spaces per nesting level, None for compact output
            ensure_ascii: Escape non-ASCII characters
            logger: Optional logger instance
        """
        if stream is not None and path is not None:
            raise ValueError("A JSON result takes either a stream or a path, not both")
        self.stream = stream
        self.path = Path(path) if path is not None else None
        self.encoding = encoding
        self.indent = indent
        self.ensure_ascii = ensure_ascii
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def new_instance(cls, target: OutputTarget = None, **kwargs) -> 'JSONResult':
        """
        Create a result from a stream, a path or nothing (standard output).

        Args:
            target: Where the JSON goes
            **kwargs: Writer options passed to the constructor

        Returns:
            A new JSONResult
        """
        if target is None or hasattr(target, "write"):
            return cls(stream=target, **kwargs)
        return cls(path=target, **kwargs)

    @classmethod
    def new_instance_if_supported(cls, output_properties: dict,
                                  target: OutputTarget = None,
                                  **kwargs) -> Optional['JSONResult']:
        """
        Create a result only if the output properties ask for JSON.

        Returns:
            A new JSONResult, or None when the output is not JSON
        """
        if cls.supports(output_properties.get("method"), output_properties.get("media-type")):
            return cls.new_instance(target, **kwargs)
        return None

    @staticmethod
    def supports(method: Optional[str], media_type: Optional[str]) -> bool:
        """
        Check whether an output declaration asks for JSON.

        Output must use the ``xml`` method with the ``application/json``
        media type.
        """
        return method == "xml" and media_type == JSON_MEDIA_TYPE

    @property
    def system_id(self) -> Optional[str]:
        """URI of the output file, if the result writes to one."""
        return self.path.resolve().as_uri() if self.path is not None else None

    @contextmanager
    def open(self) -> Iterator[JSONStreamWriter]:
        """
        Open a writer for this result.

        Yields:
            A JSONStreamWriter; owned resources are released on exit even
            if the document could not be completed
        """
        options: Dict[str, Any] = {
            "indent": self.indent,
            "ensure_ascii": self.ensure_ascii,
            "logger": self.logger,
        }

        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding=self.encoding) as stream:
                self.logger.debug(f"Writing JSON to {self.system_id}")
                yield JSONStreamWriter(stream, **options)
            return

        stream = self.stream if self.stream is not None else sys.stdout
        if isinstance(stream, io.TextIOBase):
            yield JSONStreamWriter(stream, **options)
            return

        writer = JSONStreamWriter.for_binary_stream(stream, self.encoding, **options)
        try:
            yield writer
        finally:
            if not writer.closed:
                writer.stream.detach()
