"""Pydantic schemas for visitor requests for new services."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

RequestStatus = Literal["pending", "approved", "denied"]

# Same loose shape check the request form applies; deliverability is not verified
_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class ServiceRequestCreate(BaseModel):
    """Fields a visitor submits when asking for a service."""

    email: str = Field(..., pattern=_EMAIL_PATTERN, description="Contact email of the requester.")
    service: str = Field(
        ...,
        min_length=3,
        description="Requested service (e.g., 'netflix', 'crunchyroll').",
    )
    plan: str = Field(..., min_length=1, description="Requested plan id (e.g., 'premium').")
    reason: str = Field(
        ...,
        min_length=10,
        description="Why the requester needs the service and how it will be used.",
    )


class ServiceRequest(ServiceRequestCreate):
    """A stored service request."""

    id: str = Field(..., description="Server-assigned identifier.")
    requested_on: datetime = Field(..., description="When the request was submitted.")
    status: RequestStatus = Field("pending", description="Review status.")


class ServiceRequestDecision(BaseModel):
    """Admin decision on a pending request."""

    status: Literal["approved", "denied"]
