"""Clipboard support: contiguity checks, TSV text and the copy/paste adapter."""

from .adapter import Clipboard, CopyPasteAdapter, MemoryClipboard, coerce_value
from .contiguity import ContiguityResult, ContiguityValidator
from .tsv import format_block, parse_block

__all__ = [
    "Clipboard",
    "CopyPasteAdapter",
    "MemoryClipboard",
    "coerce_value",
    "ContiguityResult",
    "ContiguityValidator",
    "format_block",
    "parse_block",
]
