"""Wire models for rejection responses."""

from fieldguard.models.responses import FieldErrorRecord, HealthResponse

__all__ = ["FieldErrorRecord", "HealthResponse"]
