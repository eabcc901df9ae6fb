"""
Record builders for the three marketplace record kinds.

Each builder takes an already validated input model, attaches a fresh id,
fills in the initial status fields and marks the confidential fields for
encryption. The result is ready to be written to SecretVault.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from ..infrastructure.encryption import mark_for_encryption
from .schemas import (
    CreateBookingInput,
    CreateFeedbackInput,
    CreateServiceListingInput,
    ListingStatus,
    PaymentStatus,
    ResolutionStatus,
    ServiceStatus,
)

IdFactory = Callable[[], str]

LISTING_ENCRYPTED_FIELDS = ["provider_name", "provider_id", "contact_info"]
BOOKING_ENCRYPTED_FIELDS = ["customer_id", "customer_name"]
FEEDBACK_ENCRYPTED_FIELDS: List[str] = []


def generate_id() -> str:
    """Generate a unique record id (UUID4)."""
    return str(uuid.uuid4())


def _timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.isoformat()


def build_service_listing(
    data: CreateServiceListingInput,
    id_factory: IdFactory = generate_id,
) -> Dict[str, Any]:
    """Assemble a service listing with status ``available``."""
    record = data.model_dump(mode="json", exclude_none=True)
    record["status"] = ListingStatus.AVAILABLE.value
    record["_id"] = id_factory()
    return mark_for_encryption(record, LISTING_ENCRYPTED_FIELDS)


def build_booking(
    data: CreateBookingInput,
    id_factory: IdFactory = generate_id,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Assemble a booking, scheduled and awaiting payment.

    The meeting link is only marked (and only present) when one was supplied.
    """
    encrypted_fields = list(BOOKING_ENCRYPTED_FIELDS)
    if data.meeting_link:
        encrypted_fields.append("meeting_link")

    record = data.model_dump(mode="json", exclude_none=True)
    if not data.meeting_link:
        record.pop("meeting_link", None)
    record.update({
        "_id": id_factory(),
        "booking_time": _timestamp(now),
        "payment_status": PaymentStatus.PENDING.value,
        "service_status": ServiceStatus.SCHEDULED.value,
        "notes": "",
    })
    return mark_for_encryption(record, encrypted_fields)


def build_feedback(
    data: CreateFeedbackInput,
    id_factory: IdFactory = generate_id,
) -> Dict[str, Any]:
    """Assemble a feedback record; resolution always starts as ``pending``."""
    encrypted_fields = list(FEEDBACK_ENCRYPTED_FIELDS)
    if data.agent_notes:
        encrypted_fields.append("agent_notes")

    record = data.model_dump(mode="json", exclude_none=True)
    if not data.agent_notes:
        record.pop("agent_notes", None)
    record["_id"] = id_factory()
    record["resolution_status"] = ResolutionStatus.PENDING.value
    return mark_for_encryption(record, encrypted_fields)
