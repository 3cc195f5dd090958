"""Input-layer public API: key decoding and single-line editing."""

from .keys import KeyDecoder, KeyKind, LogicalKey, decode_key
from .line_editor import EditBuffer, LineEditor

__all__ = [
    "KeyKind",
    "LogicalKey",
    "KeyDecoder",
    "decode_key",
    "EditBuffer",
    "LineEditor",
]
