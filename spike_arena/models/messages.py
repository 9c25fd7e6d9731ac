# spike_arena/models/messages.py
"""Inbound message schemas."""

from pydantic import BaseModel, ConfigDict, Field


class PlayerUpdate(BaseModel):
    """State a client reports for its own player."""

    model_config = ConfigDict(strict=True)

    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    score: int = Field(ge=0)
    radius: float = Field(gt=0, allow_inf_nan=False)
