"""Pydantic data models for shopping actions and model responses."""

from shopaction.models.action import Action, ActionBatch, ActionContext, ActionParameter
from shopaction.models.response import ChatResponse

__all__ = [
    "Action",
    "ActionBatch",
    "ActionContext",
    "ActionParameter",
    "ChatResponse",
]
