"""XSLT transformations whose result is serialized as JSON."""

import logging
from pathlib import Path
from typing import Dict, Optional, Union
from xml.sax.handler import ContentHandler

from lxml import etree
from lxml import sax as lxml_sax

from .result import JSONResult
from .types import ErrorType, TranscoderError

XSL_NS_URI = "http://www.w3.org/1999/XSL/Transform"

_OUTPUT_PROPERTIES = ("method", "media-type", "encoding", "indent")


class XSLTPipeline:
    """
    Applies an XSLT stylesheet and routes its result to JSON when asked to.

    A stylesheet asks for JSON by declaring
    ``<xsl:output method="xml" media-type="application/json"/>``. The result
    tree of such a stylesheet is replayed as SAX events into a transcoder;
    any other result is written out as the stylesheet serializes it.
    """

    def __init__(self, stylesheet: Union[str, Path, etree._ElementTree],
                 logger: Optional[logging.Logger] = None):
        """
        Compile a stylesheet.

        Args:
            stylesheet: Path to the stylesheet, or an already parsed document
            logger: Optional logger instance

        Raises:
            TranscoderError: If the stylesheet cannot be read or compiled
        """
        self.logger = logger or logging.getLogger(__name__)
        try:
            if isinstance(stylesheet, (str, Path)):
                self.document = etree.parse(str(stylesheet))
            else:
                self.document = stylesheet
            self.xslt = etree.XSLT(self.document)
        except (OSError, etree.XMLSyntaxError, etree.XSLTParseError) as e:
            raise TranscoderError(
                f"Cannot load stylesheet {stylesheet}: {e}",
                ErrorType.STYLESHEET,
                context={"stylesheet": str(stylesheet)}
            )

    @property
    def output_properties(self) -> Dict[str, str]:
        """
        Properties declared by the stylesheet's ``xsl:output`` elements.

        Later declarations override earlier ones.
        """
        properties: Dict[str, str] = {}
        for output in self.document.getroot().iterfind(f"{{{XSL_NS_URI}}}output"):
            for name in _OUTPUT_PROPERTIES:
                value = output.get(name)
                if value is not None:
                    properties[name] = value
        return properties

    def supports_json(self) -> bool:
        """Check whether the stylesheet declares JSON output."""
        properties = self.output_properties
        return JSONResult.supports(properties.get("method"), properties.get("media-type"))

    def apply(self, source: Union[str, Path, etree._ElementTree]) -> etree._XSLTResultTree:
        """
        Transform a document.

        Raises:
            TranscoderError: If the source cannot be parsed or the
                transformation fails
        """
        try:
            document = etree.parse(str(source)) if isinstance(source, (str, Path)) else source
            result = self.xslt(document)
        except (OSError, etree.XMLSyntaxError) as e:
            raise TranscoderError(f"Cannot read {source}: {e}", ErrorType.SYNTAX,
                                  context={"source": str(source)})
        except etree.XSLTApplyError as e:
            raise TranscoderError(f"Transformation failed: {e}", ErrorType.STYLESHEET,
                                  context={"log": str(self.xslt.error_log)})

        for entry in self.xslt.error_log:
            self.logger.info(f"XSLT message: {entry.message}")
        return result

    def replay(self, result: etree._XSLTResultTree, handler: ContentHandler) -> None:
        """
        Feed a transformation result to a SAX handler.

        Raises:
            TranscoderError: If the result has no root element
        """
        if result.getroot() is None:
            raise TranscoderError("Transformation produced no element to serialize",
                                  ErrorType.STYLESHEET)
        lxml_sax.saxify(result, handler)
