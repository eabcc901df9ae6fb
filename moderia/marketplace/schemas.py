"""
Input schemas for the marketplace actions.

Every action validates its arguments against one of these models before
anything else happens. Unknown fields are rejected.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..infrastructure.schema_templates import SchemaKind
from ..infrastructure.vault_gateway import VaultCredentials, VaultNode


class ListingStatus(str, Enum):
    """Lifecycle status of a service listing."""
    AVAILABLE = "available"
    BOOKED = "booked"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    DISPUTED = "disputed"


class ServiceStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class ResolutionStatus(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    DISPUTED = "disputed"
    REFUNDED = "refunded"


class ActionInput(BaseModel):
    """Base for action inputs: extra fields are an error."""

    model_config = ConfigDict(extra="forbid")


# Configuration

class ConfigureConnectionInput(ActionInput):
    nodes: List[VaultNode] = Field(description="Node configurations with url and did for each node")
    credentials: VaultCredentials = Field(description="Organization credentials with secret_key and org_did")

    @field_validator("nodes")
    @classmethod
    def validate_nodes(cls, v):
        """Require at least one node, each with an http(s) URL."""
        if not v:
            raise ValueError("At least one node must be specified")
        for node in v:
            if not node.url.startswith(("http://", "https://")):
                raise ValueError(f"Node URL must be an http(s) URL: {node.url}")
        return v


class CreateSchemaInput(ActionInput):
    schema_type: SchemaKind = Field(description="Type of schema to create (SERVICE_LISTING, BOOKING, or FEEDBACK)")
    title: Optional[str] = Field(default=None, description="Optional custom title for the schema")


# Service listings

class ServiceDetails(ActionInput):
    title: str = Field(description="Title of the service")
    description: str = Field(description="Description of the service")
    duration_minutes: int = Field(ge=15, description="Duration of the service in minutes")


class Availability(ActionInput):
    date: str = Field(description="Date of availability (YYYY-MM-DD)")
    start_time: str = Field(description="Start time (HH:MM)")
    end_time: str = Field(description="End time (HH:MM)")
    timezone: str = Field(description="Timezone (e.g., 'America/Mexico_City')")


class Price(ActionInput):
    amount: float = Field(gt=0, description="Price amount")
    currency: str = Field(description="Currency code (e.g., 'USD')")


class CreateServiceListingInput(ActionInput):
    provider_name: str = Field(description="Name of the service provider (will be encrypted)")
    provider_id: str = Field(description="ID of the service provider (will be encrypted)")
    service_type: str = Field(
        description="Type of service offered (e.g., 'language_lesson', 'tutoring', 'consulting')"
    )
    service_details: ServiceDetails = Field(description="Title, description and duration of the service")
    availability: Availability = Field(description="Date, start time, end time and timezone")
    price: Price = Field(description="Amount and currency")
    contact_info: str = Field(description="Contact information for the provider (will be encrypted)")


class QueryServiceListingsInput(ActionInput):
    service_type: Optional[str] = Field(default=None, description="Type of service to filter by")
    date: Optional[str] = Field(default=None, description="Date of availability to filter by (YYYY-MM-DD)")
    price_max: Optional[float] = Field(default=None, description="Maximum price to filter by")


# Bookings

class CreateBookingInput(ActionInput):
    service_id: str = Field(description="ID of the service being booked")
    customer_id: str = Field(description="ID of the customer (will be encrypted)")
    customer_name: str = Field(description="Name of the customer (will be encrypted)")
    meeting_link: Optional[str] = Field(default=None, description="Meeting link (will be encrypted)")


class UpdateBookingStatusInput(ActionInput):
    booking_id: str = Field(description="ID of the booking to update")
    service_status: ServiceStatus = Field(description="New service status")
    payment_status: Optional[PaymentStatus] = Field(default=None, description="New payment status")
    notes: Optional[str] = Field(default=None, description="Notes to add")
    meeting_link: Optional[str] = Field(default=None, description="Meeting link (will be encrypted)")


class GetBookingDetailsInput(ActionInput):
    booking_id: str = Field(description="ID of the booking to retrieve")


# Feedback

class CreateFeedbackInput(ActionInput):
    booking_id: str = Field(description="ID of the booking to provide feedback for")
    provider_rating: Optional[int] = Field(default=None, ge=1, le=5, description="Rating from 1-5 given by the provider")
    customer_rating: Optional[int] = Field(default=None, ge=1, le=5, description="Rating from 1-5 given by the customer")
    provider_feedback: Optional[str] = Field(default=None, description="Feedback text from the provider")
    customer_feedback: Optional[str] = Field(default=None, description="Feedback text from the customer")
    agent_notes: Optional[str] = Field(
        default=None,
        description="Notes from the AI agent about the session (will be encrypted)"
    )


class ResolveFeedbackInput(ActionInput):
    feedback_id: str = Field(description="ID of the feedback to resolve")
    resolution_status: ResolutionStatus = Field(description="Resolution status")
    resolution_notes: Optional[str] = Field(default=None, description="Notes about the resolution")


class GetFeedbackInput(ActionInput):
    feedback_id: str = Field(description="ID of the feedback to retrieve")


class GenerateIdentifierInput(ActionInput):
    """No arguments."""
