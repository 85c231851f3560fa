"""Incremental line decoding for producer streams."""

from .decoder import LineDecoder, StreamDecoder, decode_lines, decode_lines_sync, is_fence

__all__ = ["LineDecoder", "StreamDecoder", "decode_lines", "decode_lines_sync", "is_fence"]
