"""Pydantic models for tool descriptors, arguments and results."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

TimeFormat = Literal["iso", "unix", "locale"]


class ToolDescriptor(BaseModel):
    """Static metadata advertised for one tool by tools/list."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(..., description="Tool name")
    description: str = Field(default="", description="Human-readable description")
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        alias="inputSchema",
        description="JSON schema of the tool arguments",
    )


class GetCurrentTimeArgs(BaseModel):
    """Arguments of get_current_time."""

    timezone: str | None = Field(default=None, description="IANA timezone name")
    format: TimeFormat = Field(default="iso", description="Output format")

    @field_validator("timezone", mode="before")
    @classmethod
    def _blank_timezone(cls, value: Any) -> Any:
        return None if value == "" else value

    @field_validator("format", mode="before")
    @classmethod
    def _default_format(cls, value: Any) -> Any:
        return "iso" if value is None or value == "" else value


class GetTimezoneOffsetArgs(BaseModel):
    """Arguments of get_timezone_offset."""

    timezone: str = Field(..., min_length=1, description="IANA timezone name")

    @field_validator("timezone", mode="before")
    @classmethod
    def _null_timezone(cls, value: Any) -> Any:
        # null reads as absent, reported like an empty string
        return "" if value is None else value


class ContentBlock(BaseModel):
    """One block of tool output. Only text blocks are produced here."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(default="text")
    text: str | None = Field(default=None)


class ToolResult(BaseModel):
    """Uniform tool result envelope: content blocks plus an error flag."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[ContentBlock] = Field(default_factory=list)
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(content=[ContentBlock(text=text)], is_error=False)

    @classmethod
    def failure(cls, text: str) -> "ToolResult":
        return cls(content=[ContentBlock(text=text)], is_error=True)

    @property
    def text(self) -> str:
        """Concatenated text of all text blocks."""
        return "".join(block.text or "" for block in self.content if block.type == "text")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
