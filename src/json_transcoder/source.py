"""XML input sources driving a SAX handler."""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union
from xml.sax import make_parser
from xml.sax.handler import (
    ContentHandler,
    feature_external_ges,
    feature_external_pes,
    feature_namespaces,
)
from xml.sax.xmlreader import InputSource, XMLReader


class XMLEventSource:
    """
    Acquires XML input and delivers it as SAX2 namespace events.

    Parsing is delegated to the ``xml.sax`` parser; this class only prepares
    a namespace-aware parser and the input source for it.
    """

    def __init__(self, resolve_external_entities: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the event source.

        Args:
            resolve_external_entities: Load external general and parameter entities
            logger: Optional logger instance
        """
        self.resolve_external_entities = resolve_external_entities
        self.logger = logger or logging.getLogger(__name__)

    def create_parser(self, handler: ContentHandler) -> XMLReader:
        """
        Create a namespace-aware parser reporting to ``handler``.

        The handler is also installed as error handler when it provides
        the SAX error callbacks.
        """
        parser = make_parser()
        parser.setFeature(feature_namespaces, True)
        parser.setFeature(feature_external_ges, self.resolve_external_entities)
        # expat never reads external parameter entities
        parser.setFeature(feature_external_pes, False)
        parser.setContentHandler(handler)
        if hasattr(handler, "fatalError"):
            parser.setErrorHandler(handler)
        return parser

    def parse_string(self, xml: Union[str, bytes], handler: ContentHandler,
                     system_id: Optional[str] = None) -> None:
        """
        Parse a document held in memory.

        Args:
            xml: Document text, or bytes decoded per the XML declaration
            handler: Receiver of the SAX events
            system_id: Optional identifier used in diagnostics
        """
        stream = io.BytesIO(xml) if isinstance(xml, bytes) else io.StringIO(xml)
        self.parse_stream(stream, handler, system_id)

    def parse_stream(self, stream: Union[TextIO, BinaryIO], handler: ContentHandler,
                     system_id: Optional[str] = None) -> None:
        """
        Parse a document read from a text or byte stream.
        """
        source = InputSource(system_id)
        if isinstance(stream, io.TextIOBase):
            source.setCharacterStream(stream)
        else:
            source.setByteStream(stream)
        self.logger.debug(f"Parsing XML stream {system_id or '<stream>'}")
        self.create_parser(handler).parse(source)

    def parse_file(self, path: Union[str, Path], handler: ContentHandler) -> None:
        """
        Parse a document from the file system.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        file_path = Path(path)
        with file_path.open("rb") as stream:
            self.parse_stream(stream, handler, file_path.resolve().as_uri())
