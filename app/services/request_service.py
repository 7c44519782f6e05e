"""Visitor requests for new services and their admin review."""

from __future__ import annotations

import logging

from app.adapters.catalog.base import AbstractCatalogRepository
from app.core.errors import ConflictAppError, NotFoundAppError
from app.schemas.requests import (
    RequestStatus,
    ServiceRequest,
    ServiceRequestCreate,
    ServiceRequestDecision,
)

logger = logging.getLogger(__name__)


class RequestService:
    """Submit, list and decide service requests.

    A request starts as ``pending`` and can be decided once, to
    ``approved`` or ``denied``.
    """

    def __init__(self, repository: AbstractCatalogRepository) -> None:
        self._repository = repository

    def submit(self, payload: ServiceRequestCreate) -> ServiceRequest:
        request = self._repository.add_request(payload)
        logger.info(
            "service_request.submitted",
            extra={
                "service_request_id": request.id,
                "service": request.service,
                "plan": request.plan,
            },
        )
        return request

    def list_requests(self, status: RequestStatus | None = None) -> list[ServiceRequest]:
        return self._repository.list_requests(status=status)

    def decide(self, request_id: str, decision: ServiceRequestDecision) -> ServiceRequest:
        """Approve or deny a pending request.

        Raises:
            NotFoundAppError: If the request does not exist.
            ConflictAppError: If the request was already decided.
        """
        current = self._repository.get_request(request_id)
        if current is None:
            raise NotFoundAppError(
                code="request_not_found",
                message="Service request not found",
                details={"service_request_id": request_id},
            )
        if current.status != "pending":
            raise ConflictAppError(
                code="request_already_resolved",
                message=f"Service request was already {current.status}",
                details={"service_request_id": request_id, "status": current.status},
            )

        updated = self._repository.set_request_status(request_id, decision.status)
        if updated is None:
            raise NotFoundAppError(
                code="request_not_found",
                message="Service request not found",
                details={"service_request_id": request_id},
            )
        logger.info(
            "service_request.decided",
            extra={"service_request_id": request_id, "status": decision.status},
        )
        return updated
