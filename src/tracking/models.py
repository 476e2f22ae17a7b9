# src/tracking/models.py — v1
"""Tracking domain models: TimerEntry."""

from __future__ import annotations

from pydantic import BaseModel


class TimerEntry(BaseModel):
    """One measured step of the build's timer tree."""

    model_config = {"frozen": True}

    stage_tag: str
    parent_tag: str | None = None
    category: str | None = None
    duration_ns: int

    @property
    def duration_ms(self) -> float:
        return self.duration_ns / 1_000_000
