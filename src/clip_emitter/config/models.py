"""Pydantic models for emitter configuration.

Defaults: 100 events, two seconds apart, labelled ``Test Event``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class EmitterConfig(BaseModel):
    """Validated settings for one emitter run."""

    count: int = Field(default=100, ge=1, description="Number of events to emit.")
    delay: float = Field(
        default=2.0,
        ge=0,
        description="Seconds to wait after each event.",
    )
    label: str = Field(
        default="Test Event",
        min_length=1,
        description="Fixed text placed before the event index.",
    )
    backend: Optional[str] = Field(
        default=None,
        description="Clipboard backend name; auto-detected when unset.",
    )
    command: Optional[list[str]] = Field(
        default=None,
        description="Custom clipboard command; the payload is sent on stdin.",
    )
    skip_final_delay: bool = Field(
        default=False,
        description="Do not sleep after the last event.",
    )
    timeout: float = Field(
        default=5.0,
        gt=0,
        description="Seconds before a clipboard command is considered hung.",
    )

    @field_validator("command")
    @classmethod
    def _command_not_empty(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if v is not None and not v:
            raise ValueError("command must contain at least the program name")
        return v
