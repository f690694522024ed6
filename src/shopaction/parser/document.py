"""Document parser turning raw response text into a generic JSON tree.

The tree is plain Python data (dict, list, str, int, float, bool, None) and
carries no knowledge of the action envelope.
"""

import json
import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

JsonValue = Any  # dict[str, JsonValue] | list[JsonValue] | str | int | float | bool | None


class NodeKind(str, Enum):
    """Tags of the generic tree."""
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"


class DocumentSyntaxError(ValueError):
    """Raised when text cannot be parsed as a JSON document."""


class BlankDocumentError(DocumentSyntaxError):
    """Raised for empty or whitespace-only input."""

    def __init__(self, message: str = "blank input"):
        super().__init__(message)


def _reject_constant(name: str) -> None:
    raise ValueError(f"Non-standard JSON constant: {name}")


def is_blank(text: str | None) -> bool:
    """True for None, empty or whitespace-only text."""
    return text is None or not text.strip()


def parse_document(text: str | None) -> JsonValue:
    """Parse text into a generic JSON tree.

    Args:
        text: Raw document text

    Returns:
        The root node of the parsed tree

    Raises:
        BlankDocumentError: If text is None, empty or whitespace-only
        DocumentSyntaxError: If text is not a well-formed JSON document or is
            nested too deeply to decode; the message is the underlying parser
            diagnostic unchanged
    """
    if is_blank(text):
        raise BlankDocumentError()

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        logger.debug(f"JSON parse failed: {e}")
        raise DocumentSyntaxError(str(e)) from e
    except ValueError as e:
        # NaN / Infinity rejected by _reject_constant
        logger.debug(f"JSON parse rejected constant: {e}")
        raise DocumentSyntaxError(str(e)) from e
    except RecursionError as e:
        # Nesting deeper than the interpreter recursion limit
        logger.debug(f"JSON parse exceeded nesting depth: {e}")
        raise DocumentSyntaxError(str(e)) from e


def node_kind(node: JsonValue) -> NodeKind:
    """Classify a node of the generic tree.

    bool is checked before number since bool is an int subclass.
    """
    if node is None:
        return NodeKind.NULL
    if isinstance(node, bool):
        return NodeKind.BOOL
    if isinstance(node, (int, float)):
        return NodeKind.NUMBER
    if isinstance(node, str):
        return NodeKind.STRING
    if isinstance(node, list):
        return NodeKind.ARRAY
    if isinstance(node, dict):
        return NodeKind.OBJECT
    raise TypeError(f"Not a JSON tree node: {type(node).__name__}")
