"""Main XML to JSON converter."""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union
from xml.sax import SAXException, SAXParseException

from .error_handler import ErrorHandler
from .handler import TranscoderContentHandler
from .io.json_writer import JSONStreamWriter
from .profiler import ConversionProfiler
from .result import JSONResult, OutputTarget
from .source import XMLEventSource
from .transcoder import Transcoder
from .types import (
    ConversionConfig,
    ConversionResult,
    ErrorType,
    TranscoderError,
)
from .xslt import XSLTPipeline


class XMLToJSONConverter:
    """
    Converts XML documents to JSON.

    Each conversion runs its own transcoder and error handler, so a
    converter can be reused for any number of documents. Conversions never
    raise: failures are returned as unsuccessful results.
    """

    def __init__(self, config: Optional[ConversionConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the converter.

        Args:
            config: Conversion options, defaults when omitted
            logger: Optional logger instance
        """
        self.config = config or ConversionConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.source = XMLEventSource(logger=self.logger)
        self.profiler = ConversionProfiler(self.logger) if self.config.enable_profiling else None

    def convert_string(self, xml: Union[str, bytes], system_id: Optional[str] = None) -> ConversionResult:
        """
        Convert a document held in memory.

        Args:
            xml: XML text or bytes
            system_id: Optional identifier used in diagnostics

        Returns:
            ConversionResult holding the JSON text on success
        """
        error_handler = ErrorHandler(self.logger)
        validation = error_handler.validate_input(xml)
        if not validation.is_valid:
            return ConversionResult(
                success=False,
                errors=[error.message for error in validation.errors]
            )

        output = io.StringIO()
        result = self._run(
            "convert_string",
            len(xml),
            JSONResult(stream=output, **self._writer_options()),
            error_handler,
            lambda handler: self.source.parse_string(xml, handler, system_id)
        )
        if result.success:
            result.json_string = output.getvalue()
        return result

    def convert_stream(self, stream: Union[TextIO, BinaryIO], output: OutputTarget = None,
                       system_id: Optional[str] = None) -> ConversionResult:
        """
        Convert a document read from a stream.

        Args:
            stream: Text or byte stream holding the XML
            output: Destination of the JSON, standard output when omitted
            system_id: Optional identifier used in diagnostics

        Returns:
            ConversionResult describing the conversion
        """
        json_result = JSONResult.new_instance(output, **self._writer_options())
        result = self._run(
            "convert_stream",
            0,
            json_result,
            ErrorHandler(self.logger),
            lambda handler: self.source.parse_stream(stream, handler, system_id)
        )
        result.output_path = str(json_result.path) if json_result.path else None
        return result

    def convert_file(self, input_path: Union[str, Path],
                     output: OutputTarget = None) -> ConversionResult:
        """
        Convert an XML file.

        Args:
            input_path: XML file to read
            output: Destination of the JSON; when omitted the JSON is
                returned in the result instead

        Returns:
            ConversionResult describing the conversion
        """
        input_file = Path(input_path)
        if not input_file.is_file():
            return ConversionResult(success=False, errors=[f"Input file not found: {input_file}"])

        error_handler = ErrorHandler(self.logger)
        capture = None
        if output is None:
            capture = io.StringIO()
            output = capture
        elif not hasattr(output, "write"):
            validation = error_handler.validate_output_path(output)
            if not validation.is_valid:
                return ConversionResult(
                    success=False,
                    errors=[error.message for error in validation.errors]
                )
            for warning in validation.warnings:
                self.logger.info(warning)

        json_result = JSONResult.new_instance(output, **self._writer_options())
        result = self._run(
            "convert_file",
            input_file.stat().st_size,
            json_result,
            error_handler,
            lambda handler: self.source.parse_file(input_file, handler)
        )
        if result.success and capture is not None:
            result.json_string = capture.getvalue()
        result.output_path = str(json_result.path) if json_result.path else None
        return result

    def transform_file(self, input_path: Union[str, Path],
                       stylesheet: Union[str, Path, XSLTPipeline],
                       output: OutputTarget = None) -> ConversionResult:
        """
        Apply an XSLT stylesheet and serialize the result.

        The result is converted to JSON only if the stylesheet declares JSON
        output; otherwise it is written the way the stylesheet serializes it.

        Args:
            input_path: XML file to transform
            stylesheet: Stylesheet path or compiled pipeline
            output: Destination; when omitted the output is returned in the result

        Returns:
            ConversionResult describing the transformation
        """
        error_handler = ErrorHandler(self.logger)
        try:
            pipeline = stylesheet if isinstance(stylesheet, XSLTPipeline) else XSLTPipeline(stylesheet, self.logger)
            tree = pipeline.apply(input_path)
        except TranscoderError as e:
            response = error_handler.handle_processing_error(e)
            return ConversionResult(success=False, errors=[str(e), response.suggested_action])

        capture = None
        if output is None:
            capture = io.StringIO()
            output = capture

        json_result = JSONResult.new_instance_if_supported(
            pipeline.output_properties, output, **self._writer_options()
        )
        if json_result is None:
            self.logger.info("Stylesheet does not declare JSON output, writing result as is")
            return self._write_serialized(str(tree), output, capture)

        result = self._run(
            "transform_file",
            0,
            json_result,
            error_handler,
            lambda handler: pipeline.replay(tree, handler)
        )
        if result.success and capture is not None:
            result.json_string = capture.getvalue()
        result.output_path = str(json_result.path) if json_result.path else None
        return result

    def _run(self, operation: str, input_size: int, json_result: JSONResult,
             error_handler: ErrorHandler, parse) -> ConversionResult:
        """Run one conversion into a fresh transcoder."""
        if self.profiler:
            self.profiler.start_profiling(operation, input_size)

        writer: Optional[JSONStreamWriter] = None
        transcoder: Optional[Transcoder] = None
        errors = None
        try:
            with json_result.open() as writer:
                transcoder = Transcoder(
                    writer,
                    diagnostics=error_handler,
                    namespace_uri=self.config.namespace_uri,
                    logger=self.logger
                )
                parse(TranscoderContentHandler(transcoder))
        except TranscoderError as e:
            response = error_handler.handle_processing_error(e)
            errors = [str(e), response.suggested_action]
        except SAXParseException as e:
            error_handler.handle_processing_error(
                TranscoderError(f"XML parsing failed: {e}", ErrorType.SYNTAX)
            )
            errors = [f"XML parsing failed: {e.getMessage()} at line {e.getLineNumber()}, "
                      f"column {e.getColumnNumber()}"]
        except SAXException as e:
            response = error_handler.handle_processing_error(
                TranscoderError(f"XML parsing failed: {e}", ErrorType.SYNTAX)
            )
            errors = [f"XML parsing failed: {e}", response.suggested_action]
        except OSError as e:
            response = error_handler.handle_processing_error(
                TranscoderError(str(e), ErrorType.PATH)
            )
            errors = [str(e), response.suggested_action]

        metrics = None
        if self.profiler and self.profiler.current_operation:
            self.profiler.sample_performance()
            metrics = self.profiler.stop_profiling(
                output_size=writer.characters_written if writer else 0,
                events_processed=transcoder.events_processed if transcoder else 0,
                diagnostics_reported=len(error_handler.diagnostics)
            )

        if errors is None:
            self.logger.info(f"{operation} completed with {len(error_handler.diagnostics)} diagnostic(s)")
        return ConversionResult(
            success=errors is None,
            diagnostics=list(error_handler.diagnostics),
            errors=errors,
            metrics=metrics
        )

    def _write_serialized(self, text: str, output: OutputTarget,
                          capture: Optional[io.StringIO]) -> ConversionResult:
        """Write a transformation result that is not JSON."""
        try:
            if capture is not None:
                return ConversionResult(success=True, json_string=text)
            if isinstance(output, io.TextIOBase):
                output.write(text)
            elif hasattr(output, "write"):
                output.write(text.encode(self.config.encoding))
            else:
                path = Path(output)
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(text, encoding=self.config.encoding)
                return ConversionResult(success=True, output_path=str(path))
        except (OSError, UnicodeEncodeError) as e:
            return ConversionResult(success=False, errors=[f"Failed to write result: {e}"])
        return ConversionResult(success=True)

    def _writer_options(self) -> dict:
        return {
            "encoding": self.config.encoding,
            "indent": self.config.indent,
            "ensure_ascii": self.config.ensure_ascii,
            "logger": self.logger,
        }
