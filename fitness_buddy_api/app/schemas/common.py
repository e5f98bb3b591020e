"""
Pydantic schemas shared by all endpoints.

Record bodies are free‑form JSON objects and are not modelled here;
these schemas describe the fixed‑shape payloads: error messages and
the health check.
"""

from pydantic import BaseModel, Field


class MessageRead(BaseModel):
    """Body of error responses, e.g. ``{"message": "Workout not found"}``."""

    message: str = Field(..., example="Workout not found")


class HealthRead(BaseModel):
    """Schema for the health check response."""

    status: str = Field("OK", example="OK")
    message: str = Field(..., example="FitnessBuddy Backend is running")
