"""Base model for configuration objects."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable configuration rejecting unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")
