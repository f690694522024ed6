"""Model response envelope handed to the validator."""

from pydantic import BaseModel, ConfigDict, Field


class ChatResponse(BaseModel):
    """Response produced by the upstream generator.

    Only ``content`` is read by validation; the remaining fields are kept for
    callers that record them alongside the outcome.
    """
    content: str | None = None
    model: str | None = None
    input_tokens: int = Field(alias="inputTokens", default=0)
    output_tokens: int = Field(alias="outputTokens", default=0)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens
