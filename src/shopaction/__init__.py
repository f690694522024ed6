"""shopaction - Validation of model responses into shopping action batches.

shopaction parses untrusted model output and turns it into an ordered,
validated batch of shopping actions, or one failure that lists every
problem found.
"""

__version__ = "0.1.0"
__author__ = "rpapub"
__email__ = "contact@rpapub.dev"
__description__ = "Validate model responses as shopping action batches"

from shopaction.config import ShopActionConfig
from shopaction.models import Action, ActionBatch, ActionContext, ActionParameter, ChatResponse
from shopaction.validation import ActionBatchValidator, Failure, Outcome, validate_actions

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "__description__",
    "Action",
    "ActionBatch",
    "ActionBatchValidator",
    "ActionContext",
    "ActionParameter",
    "ChatResponse",
    "Failure",
    "Outcome",
    "ShopActionConfig",
    "validate_actions",
]
