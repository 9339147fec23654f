"""Lead status settings domain service."""

import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import LeadStatus
from ledgerdesk.domain.errors import NotFoundError, ValidationError, lead_status_not_found

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("lead_status", "description", "order", "is_active", "is_default")


class LeadStatusService:
    """Service for managing CRM lead statuses."""

    def __init__(self, db: Database):
        """Initialize lead status service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_lead_status(
        self,
        lead_status: str,
        description: Optional[str] = None,
        order: int = 1,
        is_active: bool = True,
        is_default: bool = False,
    ) -> str:
        """Add a lead status.

        Returns:
            Lead status ID

        Raises:
            ValidationError: If the name is empty or order is not positive
        """
        lead_status = lead_status.strip()
        if not lead_status:
            raise ValidationError("Lead status name is required")
        if order < 1:
            raise ValidationError("Order must be at least 1")

        try:
            status_id = self.db.create_lead_status(
                lead_status=lead_status,
                description=description,
                order=order,
                is_active=is_active,
                is_default=is_default,
            )
        except SQLAlchemyError:
            logger.exception("Error adding lead status '%s'", lead_status)
            raise
        logger.info("Lead status '%s' added", lead_status)
        return status_id

    def get_lead_status(self, lead_status_id: str) -> Optional[LeadStatus]:
        return self.db.get_lead_status(lead_status_id)

    def list_lead_statuses(self) -> list[LeadStatus]:
        """List lead statuses ordered by ``order``."""
        return self.db.list_lead_statuses()

    def search_lead_statuses(self, term: str) -> list[LeadStatus]:
        """Find lead statuses whose name or description contains ``term``.

        Matching is case-insensitive; an empty term returns all statuses.
        """
        statuses = self.list_lead_statuses()
        if not term:
            return statuses
        term = term.lower()
        return [
            status
            for status in statuses
            if term in status.lead_status.lower()
            or (status.description is not None and term in status.description.lower())
        ]

    def update_lead_status(self, lead_status_id: str, changes: dict[str, Any]) -> None:
        """Update fields of a lead status.

        Raises:
            NotFoundError: If the lead status does not exist
            ValidationError: If a change is not allowed
        """
        unknown = [name for name in changes if name not in EDITABLE_FIELDS]
        if unknown:
            raise ValidationError(f"Cannot update lead status field(s): {', '.join(unknown)}")
        if "lead_status" in changes:
            if not changes["lead_status"] or not changes["lead_status"].strip():
                raise ValidationError("Lead status name is required")
            changes = {**changes, "lead_status": changes["lead_status"].strip()}
        if "order" in changes and changes["order"] < 1:
            raise ValidationError("Order must be at least 1")

        if self.db.get_lead_status(lead_status_id) is None:
            raise NotFoundError(lead_status_not_found(lead_status_id))

        try:
            self.db.update_lead_status(lead_status_id, changes)
        except SQLAlchemyError:
            logger.exception("Error updating lead status %s", lead_status_id)
            raise
        logger.info("Lead status %s updated", lead_status_id)

    def delete_lead_status(self, lead_status_id: str) -> None:
        """Delete a lead status.

        Raises:
            NotFoundError: If the lead status does not exist
        """
        if self.db.get_lead_status(lead_status_id) is None:
            raise NotFoundError(lead_status_not_found(lead_status_id))

        try:
            self.db.delete_lead_status(lead_status_id)
        except SQLAlchemyError:
            logger.exception("Error deleting lead status %s", lead_status_id)
            raise
        logger.info("Lead status %s deleted", lead_status_id)
