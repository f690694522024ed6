"""Validation of model responses into typed action batches.

Raw text is parsed into a generic JSON tree, the ``actions`` envelope is
checked, and every element is decoded into an Action. Failures are collected
per element and returned together.
"""

from .outcome import (
    VALIDATION_KIND,
    ElementError,
    Failure,
    FailureCause,
    Outcome,
    OutcomeError,
)
from .validator import (
    ActionBatchValidator,
    decode_action,
    describe_validation_error,
    validate_actions,
    validate_response,
)

__all__ = [
    "VALIDATION_KIND",
    "ActionBatchValidator",
    "ElementError",
    "Failure",
    "FailureCause",
    "Outcome",
    "OutcomeError",
    "decode_action",
    "describe_validation_error",
    "validate_actions",
    "validate_response",
]
