from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated, ClassVar, Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.types import AwareDatetime


class DomainModel(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class SchemaVersioned(DomainModel):
    schema_version: Annotated[int, Field(ge=1)] = 1
    _schema_version: ClassVar[int] = 1

    @model_validator(mode="after")
    def _validate_schema_version(self) -> Self:
        if self.schema_version != self._schema_version:
            raise ValueError(
                f"Unsupported schema_version {self.schema_version}; expected {self._schema_version}",
            )
        return self


class MessageType(StrEnum):
    user = "user"
    assistant = "assistant"


class ChatMessage(DomainModel):
    """One persisted chat record; `content` is raw Markdown as typed or generated."""

    message_id: Annotated[str, Field(min_length=1)]
    message_type: MessageType
    content: str
    sources_referenced: list[str] = Field(default_factory=list)
    created_at: AwareDatetime | None = None


class ChatTranscript(SchemaVersioned):
    session_id: Annotated[str, Field(min_length=1)]
    notebook_id: str | None = None
    messages: list[ChatMessage] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_messages(self) -> ChatTranscript:
        message_ids: set[str] = set()
        for message in self.messages:
            if message.message_id in message_ids:
                raise ValueError("message_id must be unique within a transcript")
            message_ids.add(message.message_id)

        timestamps = [message.created_at for message in self.messages if message.created_at is not None]
        for prev, cur in zip(timestamps, timestamps[1:], strict=False):
            if cur < prev:
                raise ValueError("messages must be ordered by created_at")

        return self

    def to_json(self, *, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, raw: str | bytes) -> ChatTranscript:
        return cls.model_validate_json(raw)


T = TypeVar("T")


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    value: T | None
    error: str | None


def try_load_transcript_json(raw: str | bytes) -> LoadResult[ChatTranscript]:
    try:
        return LoadResult(value=ChatTranscript.from_json(raw), error=None)
    except ValidationError as exc:
        return LoadResult(value=None, error=str(exc))
