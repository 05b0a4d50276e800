"""API response models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from fieldguard.validators.models import FieldError, FieldKind


class FieldErrorRecord(BaseModel):
    """One entry of a rejection body: which field failed, and why."""

    model_config = ConfigDict(populate_by_name=True)

    locator_kind: FieldKind = Field(alias="locatorKind")
    locator_name: str = Field(alias="locatorName")
    error: Any = None  # Already JSON-encoded integrator error

    @classmethod
    def from_field_error(cls, field_error: FieldError, encoded_error: Any) -> "FieldErrorRecord":
        return cls(
            locator_kind=field_error.locator.kind,
            locator_name=field_error.locator.name,
            error=encoded_error,
        )

    def to_wire(self) -> dict[str, Any]:
        # error is passed through untouched; JSON rendering checks it
        return {**self.model_dump(mode="json", by_alias=True, exclude={"error"}), "error": self.error}


class HealthResponse(BaseModel):
    """Demo app health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str
    uptime_seconds: float
    guarded_fields: dict[str, int] = Field(
        default_factory=dict,
        description="Number of guarded fields per route",
    )
