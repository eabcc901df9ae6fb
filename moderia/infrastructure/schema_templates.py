"""JSON schema documents registered with SecretVault for each record kind."""

import copy
from enum import Enum
from typing import Any, Dict, List, Optional

from .errors import MissingSchemaError


class SchemaKind(str, Enum):
    """Record kinds that have a remote schema in SecretVault."""
    SERVICE_LISTING = "SERVICE_LISTING"
    BOOKING = "BOOKING"
    FEEDBACK = "FEEDBACK"


JSON_SCHEMA_DRAFT = "http://json-schema.org/draft-07/schema#"


def _share_field() -> Dict[str, Any]:
    """Schema for a field stored as secret shares."""
    return {
        "type": "object",
        "properties": {"%share": {"type": "string"}},
        "required": ["%share"],
    }


def _id_field() -> Dict[str, Any]:
    return {"type": "string", "format": "uuid", "coerce": True}


def _collection(title: str, properties: Dict[str, Any], required: list) -> Dict[str, Any]:
    return {
        "$schema": JSON_SCHEMA_DRAFT,
        "title": title,
        "type": "array",
        "items": {
            "type": "object",
            "properties": properties,
            "required": required,
        },
    }


SERVICE_LISTING_SCHEMA = _collection(
    "Service Listing",
    {
        "_id": _id_field(),
        "provider_name": _share_field(),
        "provider_id": _share_field(),
        "service_type": {"type": "string"},
        "service_details": {
            "type": "object",
            "properties": {
                "title": {"type": "string"},
                "description": {"type": "string"},
                "duration_minutes": {"type": "integer", "minimum": 15},
            },
            "required": ["title", "description", "duration_minutes"],
        },
        "availability": {
            "type": "object",
            "properties": {
                "date": {"type": "string", "format": "date"},
                "start_time": {"type": "string", "format": "time"},
                "end_time": {"type": "string", "format": "time"},
                "timezone": {"type": "string"},
            },
            "required": ["date", "start_time", "end_time", "timezone"],
        },
        "price": {
            "type": "object",
            "properties": {
                "amount": {"type": "number"},
                "currency": {"type": "string"},
            },
            "required": ["amount", "currency"],
        },
        "contact_info": _share_field(),
        "status": {
            "type": "string",
            "enum": ["available", "booked", "completed", "cancelled"],
        },
    },
    [
        "_id", "provider_name", "provider_id", "service_type", "service_details",
        "availability", "price", "contact_info", "status",
    ],
)

BOOKING_SCHEMA = _collection(
    "Service Booking",
    {
        "_id": _id_field(),
        "service_id": {"type": "string"},
        "customer_id": _share_field(),
        "customer_name": _share_field(),
        "booking_time": {"type": "string", "format": "date-time"},
        "meeting_link": _share_field(),
        "payment_status": {
            "type": "string",
            "enum": ["pending", "paid", "refunded", "disputed"],
        },
        "service_status": {
            "type": "string",
            "enum": ["scheduled", "in_progress", "completed", "cancelled", "no_show"],
        },
        "notes": {"type": "string"},
    },
    [
        "_id", "service_id", "customer_id", "customer_name", "booking_time",
        "payment_status", "service_status",
    ],
)

FEEDBACK_SCHEMA = _collection(
    "Service Feedback",
    {
        "_id": _id_field(),
        "booking_id": {"type": "string"},
        "provider_rating": {"type": "integer", "minimum": 1, "maximum": 5},
        "customer_rating": {"type": "integer", "minimum": 1, "maximum": 5},
        "provider_feedback": {"type": "string"},
        "customer_feedback": {"type": "string"},
        "resolution_status": {
            "type": "string",
            "enum": ["pending", "resolved", "disputed", "refunded"],
        },
        "agent_notes": _share_field(),
    },
    ["_id", "booking_id", "resolution_status"],
)

_TEMPLATES = {
    SchemaKind.SERVICE_LISTING: SERVICE_LISTING_SCHEMA,
    SchemaKind.BOOKING: BOOKING_SCHEMA,
    SchemaKind.FEEDBACK: FEEDBACK_SCHEMA,
}


def get_schema_template(kind: SchemaKind) -> Dict[str, Any]:
    """Return a fresh copy of the schema document for ``kind``."""
    return copy.deepcopy(_TEMPLATES[SchemaKind(kind)])


class SchemaRegistry:
    """Remote schema ids per record kind, filled in once schemas are provisioned."""

    def __init__(self, schema_ids: Optional[Dict[SchemaKind, str]] = None):
        self._ids: Dict[SchemaKind, str] = {}
        for kind, schema_id in (schema_ids or {}).items():
            self.set(kind, schema_id)

    def get(self, kind: SchemaKind) -> Optional[str]:
        return self._ids.get(SchemaKind(kind)) or None

    def set(self, kind: SchemaKind, schema_id: str):
        self._ids[SchemaKind(kind)] = schema_id

    def require(self, kind: SchemaKind) -> str:
        """Return the schema id for ``kind`` or raise MissingSchemaError."""
        schema_id = self.get(kind)
        if not schema_id:
            raise MissingSchemaError(SchemaKind(kind).value)
        return schema_id

    def missing(self) -> List[SchemaKind]:
        return [kind for kind in SchemaKind if not self.get(kind)]

    def to_dict(self) -> Dict[str, str]:
        return {kind.value: self._ids.get(kind, "") for kind in SchemaKind}
