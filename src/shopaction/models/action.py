"""Typed shopping actions decoded from model responses."""

from collections.abc import Iterable, Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class ActionContext(str, Enum):
    """Domain namespace an action belongs to."""
    SHOP = "SHOP"


class ActionParameter(BaseModel):
    """A single key/value argument of an action."""
    name: StrictStr = Field(min_length=1)
    value: str | int | float | bool | None = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class Action(BaseModel):
    """One operation instruction, e.g. add or remove an item.

    Unknown keys in the source object are ignored so newer response formats
    still decode.
    """
    context: ActionContext
    name: StrictStr = Field(min_length=1)
    parameters: tuple[ActionParameter, ...] = ()

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("name must not be blank")
        return v

    def parameter(self, name: str) -> ActionParameter | None:
        """Return the first parameter called name, if any."""
        for param in self.parameters:
            if param.name == name:
                return param
        return None


class ActionBatch(BaseModel):
    """Ordered, non-empty, immutable sequence of validated actions.

    Order matches the source array; actions are applied in sequence downstream.
    """
    actions: tuple[Action, ...]

    model_config = ConfigDict(frozen=True)

    @field_validator("actions")
    @classmethod
    def validate_not_empty(cls, v):
        if not v:
            raise ValueError("Response must contain at least one action")
        return v

    @classmethod
    def of(cls, *actions: Action) -> "ActionBatch":
        """Create a batch from one or more actions."""
        return cls(actions=actions)

    @classmethod
    def from_actions(cls, actions: Iterable[Action]) -> "ActionBatch":
        """Create a batch from any iterable, copying it into a tuple."""
        return cls(actions=tuple(actions))

    @property
    def names(self) -> list[str]:
        return [action.name for action in self.actions]

    def __len__(self) -> int:
        return len(self.actions)

    def __iter__(self) -> Iterator[Action]:  # type: ignore[override]
        return iter(self.actions)

    def __getitem__(self, index: int) -> Action:
        return self.actions[index]
