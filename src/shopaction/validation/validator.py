"""Validation of model responses into shopping action batches.

Expects the wrapped format::

    {"actions": [{"context": "SHOP", "name": "add", "parameters": [...]}, ...]}

Every problem is returned as a failed ``Outcome``; nothing here raises for
bad input. A batch is all-or-nothing: one malformed action rejects the whole
response, and every malformed action is reported in the same message.
"""

import logging

from pydantic import ValidationError

from ..models.action import Action, ActionBatch
from ..models.response import ChatResponse
from ..parser.document import BlankDocumentError, DocumentSyntaxError, JsonValue, parse_document
from .outcome import ElementError, Failure, FailureCause, Outcome

logger = logging.getLogger(__name__)

ACTIONS_KEY = "actions"

BLANK_MESSAGE = "Response content is null or blank"
SYNTAX_PREFIX = "Invalid JSON: "
ENVELOPE_MESSAGE = "Expected JSON object with 'actions' array"
ARRAY_SHAPE_MESSAGE = "Expected 'actions' to be an array"
EMPTY_MESSAGE = "Empty actions array"


def describe_validation_error(error: ValidationError) -> str:
    """Render a pydantic error as one line: ``field: message, other: message``."""
    parts = []
    for detail in error.errors(include_url=False):
        location = ".".join(str(part) for part in detail["loc"])
        if location:
            parts.append(f"{location}: {detail['msg']}")
        else:
            parts.append(detail["msg"])
    return ", ".join(parts) or str(error)


def decode_action(index: int, node: JsonValue) -> Action | ElementError:
    """Decode one array element, returning an ElementError instead of raising."""
    try:
        return Action.model_validate(node)
    except ValidationError as e:
        return ElementError(index, describe_validation_error(e))
    except ValueError as e:
        return ElementError(index, str(e))


class ActionBatchValidator:
    """Parses and validates response content as a batch of shopping actions."""

    @staticmethod
    def validate(text: str | None) -> Outcome[ActionBatch]:
        """Validate raw response text.

        Args:
            text: Response content, possibly None or malformed

        Returns:
            Outcome holding an ActionBatch, or a failure describing every problem
        """
        try:
            root = parse_document(text)
        except BlankDocumentError:
            logger.debug("Rejected blank response content")
            return Outcome.fail(Failure.of(FailureCause.BLANK, BLANK_MESSAGE))
        except DocumentSyntaxError as e:
            logger.debug(f"Rejected unparseable response content: {e}")
            return Outcome.fail(Failure.of(FailureCause.SYNTAX, f"{SYNTAX_PREFIX}{e}"))

        if not isinstance(root, dict) or ACTIONS_KEY not in root:
            logger.debug("Rejected response without actions envelope")
            return Outcome.fail(Failure.of(FailureCause.ENVELOPE, ENVELOPE_MESSAGE))

        actions_node = root[ACTIONS_KEY]
        if not isinstance(actions_node, list):
            logger.debug(f"Rejected non-array actions value: {type(actions_node).__name__}")
            return Outcome.fail(Failure.of(FailureCause.ARRAY_SHAPE, ARRAY_SHAPE_MESSAGE))

        return ActionBatchValidator._validate_action_array(actions_node)

    @staticmethod
    def validate_response(response: ChatResponse) -> Outcome[ActionBatch]:
        """Validate the content of a chat response."""
        return ActionBatchValidator.validate(response.content)

    @staticmethod
    def _validate_action_array(nodes: list[JsonValue]) -> Outcome[ActionBatch]:
        actions: list[Action] = []
        errors: list[ElementError] = []

        for decoded in (decode_action(i, node) for i, node in enumerate(nodes)):
            if isinstance(decoded, ElementError):
                logger.debug(f"Rejected element: {decoded}")
                errors.append(decoded)
            else:
                actions.append(decoded)

        if errors:
            return Outcome.fail(Failure.from_element_errors(errors))

        if not actions:
            return Outcome.fail(Failure.of(FailureCause.EMPTY, EMPTY_MESSAGE))

        logger.debug(f"Validated batch of {len(actions)} actions")
        return Outcome.ok(ActionBatch.from_actions(actions))


def validate_actions(text: str | None) -> Outcome[ActionBatch]:
    """Validate raw response text. See ActionBatchValidator.validate."""
    return ActionBatchValidator.validate(text)


def validate_response(response: ChatResponse) -> Outcome[ActionBatch]:
    """Validate the content of a chat response."""
    return ActionBatchValidator.validate_response(response)
