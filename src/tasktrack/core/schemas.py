"""Response envelopes wrapping every HTTP payload."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DataEnvelope[DataT](BaseModel):
    """Success envelope: the payload lives under 'data'."""

    data: DataT


class EmptyData(BaseModel):
    """Empty payload returned by operations with nothing to report."""


class ErrorEnvelope(BaseModel):
    """Failure envelope returned with every error status."""

    error_message: str = Field(serialization_alias="errorMessage", description="Human-readable error message")
