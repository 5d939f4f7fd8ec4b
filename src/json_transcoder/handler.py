"""SAX content handler feeding a transcoder."""

from typing import List, Optional
from xml.sax.handler import ContentHandler, ErrorHandler as SAXErrorHandler
from xml.sax import SAXParseException

from .transcoder import Transcoder
from .types import Attribute, Diagnostic, DiagnosticType, SourceLocation


class TranscoderContentHandler(ContentHandler, SAXErrorHandler):
    """
    Adapts namespace-aware SAX callbacks to transcoder events.

    Works with any producer of SAX2 namespace events, such as an
    ``xml.sax`` parser with namespace processing enabled or
    ``lxml.sax.saxify``. Parser warnings are reported as diagnostics,
    errors are raised.
    """

    def __init__(self, transcoder: Transcoder):
        super().__init__()
        self.transcoder = transcoder
        self._locator = None

    def setDocumentLocator(self, locator) -> None:
        self._locator = locator
        self.transcoder.location_provider = self.location

    def location(self) -> Optional[SourceLocation]:
        """Current position of the parser, if it publishes one."""
        if self._locator is None:
            return None
        return SourceLocation(
            system_id=self._locator.getSystemId(),
            line=self._locator.getLineNumber(),
            column=self._locator.getColumnNumber()
        )

    def startDocument(self) -> None:
        self.transcoder.document_start()

    def endDocument(self) -> None:
        self.transcoder.document_end()

    def startElementNS(self, name, qname, attrs) -> None:
        namespace, local_name = name
        self.transcoder.element_start(namespace or None, local_name, self._attributes(attrs))

    def endElementNS(self, name, qname) -> None:
        namespace, local_name = name
        self.transcoder.element_end(namespace or None, local_name)

    def characters(self, content: str) -> None:
        self.transcoder.character_data(content)

    @staticmethod
    def _attributes(attrs) -> List[Attribute]:
        return [
            Attribute(namespace or None, local_name, value)
            for (namespace, local_name), value in attrs.items()
        ]

    # SAX error handling

    def warning(self, exception: SAXParseException) -> None:
        location = SourceLocation(
            system_id=exception.getSystemId(),
            line=exception.getLineNumber(),
            column=exception.getColumnNumber()
        )
        self.transcoder.diagnostics.report(
            Diagnostic(DiagnosticType.PARSER_WARNING, exception.getMessage(), location)
        )

    def error(self, exception: SAXParseException) -> None:
        raise exception

    def fatalError(self, exception: SAXParseException) -> None:
        raise exception
