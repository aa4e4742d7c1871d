"""Quota ledger schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RateLimitConfig(BaseModel):
    """One named quota window. Built at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed window"] = "fixed window"
    rate: int = Field(..., ge=1, description="Maximum events per window")
    period: int = Field(..., ge=1, description="Window length in milliseconds")


class ConsumeResult(BaseModel):
    """Outcome of a consume call. Denial is a normal result, not an error."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    remaining: int = Field(..., ge=0)


class RateLimitStatus(BaseModel):
    """Current usage of a window for one identity."""

    window_name: str
    limit: int
    count: int
    remaining: int
    reset_at: int = Field(..., description="Epoch milliseconds of the next window boundary")
