"""JSON output for the JSON Transcoder."""

from .json_writer import JSONStreamWriter

__all__ = ["JSONStreamWriter"]
