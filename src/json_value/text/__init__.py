"""Text layer: character stream, Reader, Writer, and their shared config."""

from json_value.text.config import TextConfig
from json_value.text.reader import Reader
from json_value.text.stream import CharStream
from json_value.text.writer import Writer

__all__ = ["CharStream", "Reader", "TextConfig", "Writer"]
