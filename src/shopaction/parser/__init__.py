"""Parsing of raw response text into a generic JSON tree."""

from .document import (
    BlankDocumentError,
    DocumentSyntaxError,
    JsonValue,
    NodeKind,
    is_blank,
    node_kind,
    parse_document,
)

__all__ = [
    "BlankDocumentError",
    "DocumentSyntaxError",
    "JsonValue",
    "NodeKind",
    "is_blank",
    "node_kind",
    "parse_document",
]
