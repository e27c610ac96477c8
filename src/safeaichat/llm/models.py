"""Events emitted by an on-device model while generating a response."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _GenerateEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    @property
    def is_terminal(self) -> bool:
        """True if no further events follow this one."""
        return False


class Processing(_GenerateEvent):
    """The prompt passed the filter and inference has started."""

    kind: Literal["processing"] = "processing"


class Chunk(_GenerateEvent):
    """Cumulative response text produced so far."""

    kind: Literal["chunk"] = "chunk"
    text: str = Field(description="Response prefix generated so far")


class Complete(_GenerateEvent):
    """The full response text."""

    kind: Literal["complete"] = "complete"
    text: str = Field(description="Complete response text")

    @property
    def is_terminal(self) -> bool:
        return True


class Filtered(_GenerateEvent):
    """The prompt was blocked by the safety filter."""

    kind: Literal["filtered"] = "filtered"
    reason: str = Field(description="Why the prompt was blocked")

    @property
    def is_terminal(self) -> bool:
        return True


class Error(_GenerateEvent):
    """Generation failed."""

    kind: Literal["error"] = "error"
    message: str = Field(description="Failure description shown to the user")

    @property
    def is_terminal(self) -> bool:
        return True


GenerateResult = Annotated[
    Union[Processing, Chunk, Complete, Filtered, Error],
    Field(discriminator="kind"),
]
