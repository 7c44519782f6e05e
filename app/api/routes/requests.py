from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.core.catalog import get_request_service
from app.schemas.requests import ServiceRequest, ServiceRequestCreate
from app.services.request_service import RequestService

router = APIRouter(tags=["Requests"])


@router.post("/requests", response_model=ServiceRequest, status_code=status.HTTP_201_CREATED)
def submit_request(
    payload: ServiceRequestCreate,
    requests: Annotated[RequestService, Depends(get_request_service)],
) -> ServiceRequest:
    """Ask the administrators to add a service or plan.

    The request is stored as ``pending`` until an administrator decides it.
    """

    return requests.submit(payload)
