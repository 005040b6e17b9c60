"""Position request options domain model."""

from pydantic import BaseModel, ConfigDict, Field


class PositionOptions(BaseModel):
    """Accuracy and timing hints passed along with a position request."""

    model_config = ConfigDict(frozen=True)

    high_accuracy: bool = True
    timeout_ms: int = Field(default=10_000, gt=0)
    max_cache_age_ms: int = Field(default=0, ge=0)
