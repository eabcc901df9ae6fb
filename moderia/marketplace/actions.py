"""
Marketplace actions exposed to the mediator agent.

Each action validates its arguments against an input schema, checks that the
remote schema it depends on has been provisioned, talks to SecretVault at
most once and returns a human-readable string. No exception crosses this
boundary: failures come back as ``Error: ...`` strings.

Updating and reading individual bookings and feedback records is not backed
by SecretVault yet. Those four actions only confirm the requested change or
return an example record.
"""

import functools
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Type

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, ValidationError

from ..infrastructure.errors import InvalidDataError, MarketplaceError
from ..infrastructure.schema_templates import SchemaKind, SchemaRegistry, get_schema_template
from ..infrastructure.vault_gateway import VaultGateway
from .records import (
    IdFactory,
    build_booking,
    build_feedback,
    build_service_listing,
    generate_id,
)
from .schemas import (
    ConfigureConnectionInput,
    CreateBookingInput,
    CreateFeedbackInput,
    CreateSchemaInput,
    CreateServiceListingInput,
    GenerateIdentifierInput,
    GetBookingDetailsInput,
    GetFeedbackInput,
    ListingStatus,
    QueryServiceListingsInput,
    ResolveFeedbackInput,
    UpdateBookingStatusInput,
)

logger = logging.getLogger(__name__)

# Returned by get-booking-details / get-feedback until lookups are implemented
EXAMPLE_BOOKING = {
    "_id": "booking-example",
    "service_id": "service-123",
    "customer_name": "John Doe",
    "booking_time": "2023-05-15T18:00:00Z",
    "service_status": "scheduled",
    "payment_status": "pending",
    "meeting_link": "https://meet.jitsi.si/secure-meeting-123",
}

EXAMPLE_FEEDBACK = {
    "_id": "feedback-example",
    "booking_id": "booking-123",
    "provider_rating": 4,
    "customer_rating": 5,
    "provider_feedback": "Great student, was on time and prepared!",
    "customer_feedback": "Excellent teacher, very clear explanations",
    "resolution_status": "resolved",
    "agent_notes": "Both parties were satisfied with the service",
}


def format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one line."""
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "input"
        problems.append(f"{location}: {item.get('msg')}")
    return "; ".join(problems)


def _tool_validation_error(error: ValidationError) -> str:
    return f"Error: {InvalidDataError(format_validation_error(error))}"


def action_boundary(failure_message: str):
    """Turn every failure of an action into a one-line string result."""

    def decorator(method):
        @functools.wraps(method)
        async def wrapper(self, args: Optional[Mapping[str, Any]] = None) -> str:
            try:
                return await method(self, args if args is not None else {})
            except MarketplaceError as e:
                logger.warning(f"{method.__name__}: {e}")
                return f"Error: {e}"
            except Exception as e:
                logger.error(f"{failure_message}: {e}", exc_info=True)
                return f"{failure_message}: {e}"

        return wrapper

    return decorator


@dataclass(frozen=True)
class ActionSpec:
    """How one action is presented to the agent as a tool."""
    name: str
    method: str
    input_model: Type[BaseModel]
    description: str


ACTION_SPECS: List[ActionSpec] = [
    ActionSpec(
        name="configure-connection",
        method="configure_connection",
        input_model=ConfigureConnectionInput,
        description=(
            "Configure the Nillion SecretVault connection with custom nodes and organization credentials.\n"
            "Takes:\n"
            "- nodes: list of node configurations with url and did for each node\n"
            "- credentials: organization credentials with secret_key and org_did"
        ),
    ),
    ActionSpec(
        name="create-remote-schema",
        method="create_remote_schema",
        input_model=CreateSchemaInput,
        description=(
            "Create a new schema in SecretVault for storing marketplace data.\n"
            "Takes:\n"
            "- schema_type: SERVICE_LISTING, BOOKING, or FEEDBACK\n"
            "- title: optional custom title for the schema"
        ),
    ),
    ActionSpec(
        name="create-listing",
        method="create_listing",
        input_model=CreateServiceListingInput,
        description=(
            "Create a new service listing in the marketplace.\n"
            "Takes:\n"
            "- provider_name: name of the service provider (will be encrypted)\n"
            "- provider_id: ID of the service provider (will be encrypted)\n"
            "- service_type: type of service offered (e.g., 'language_lesson', 'tutoring', 'consulting')\n"
            "- service_details: object with title, description, and duration_minutes (at least 15)\n"
            "- availability: object with date, start_time, end_time, and timezone\n"
            "- price: object with amount and currency\n"
            "- contact_info: contact information for the provider (will be encrypted)"
        ),
    ),
    ActionSpec(
        name="query-listings",
        method="query_listings",
        input_model=QueryServiceListingsInput,
        description=(
            "Query available service listings.\n"
            "Takes optional filters:\n"
            "- service_type: type of service to filter by\n"
            "- date: date of availability (YYYY-MM-DD)\n"
            "- price_max: maximum price"
        ),
    ),
    ActionSpec(
        name="create-booking",
        method="create_booking",
        input_model=CreateBookingInput,
        description=(
            "Book a service by creating a booking record.\n"
            "Takes:\n"
            "- service_id: ID of the service being booked\n"
            "- customer_id: ID of the customer (will be encrypted)\n"
            "- customer_name: name of the customer (will be encrypted)\n"
            "- meeting_link: optional meeting link (will be encrypted)"
        ),
    ),
    ActionSpec(
        name="update-booking-status",
        method="update_booking_status",
        input_model=UpdateBookingStatusInput,
        description=(
            "Update the status of a booking.\n"
            "Takes:\n"
            "- booking_id: ID of the booking to update\n"
            "- service_status: 'scheduled', 'in_progress', 'completed', 'cancelled', or 'no_show'\n"
            "- payment_status: optional 'pending', 'paid', 'refunded', or 'disputed'\n"
            "- notes: optional notes to add\n"
            "- meeting_link: optional meeting link (will be encrypted)"
        ),
    ),
    ActionSpec(
        name="get-booking-details",
        method="get_booking_details",
        input_model=GetBookingDetailsInput,
        description=(
            "Get details of a specific booking.\n"
            "Takes:\n"
            "- booking_id: ID of the booking to retrieve"
        ),
    ),
    ActionSpec(
        name="create-feedback",
        method="create_feedback",
        input_model=CreateFeedbackInput,
        description=(
            "Create feedback for a completed service.\n"
            "Takes:\n"
            "- booking_id: ID of the booking to provide feedback for\n"
            "- provider_rating / customer_rating: optional ratings from 1-5\n"
            "- provider_feedback / customer_feedback: optional feedback text\n"
            "- agent_notes: optional notes from the AI agent (will be encrypted)"
        ),
    ),
    ActionSpec(
        name="resolve-feedback",
        method="resolve_feedback",
        input_model=ResolveFeedbackInput,
        description=(
            "Resolve feedback and finalize the service transaction.\n"
            "Takes:\n"
            "- feedback_id: ID of the feedback to resolve\n"
            "- resolution_status: 'pending', 'resolved', 'disputed', or 'refunded'\n"
            "- resolution_notes: optional notes about the resolution"
        ),
    ),
    ActionSpec(
        name="get-feedback",
        method="get_feedback",
        input_model=GetFeedbackInput,
        description=(
            "Get details of specific feedback.\n"
            "Takes:\n"
            "- feedback_id: ID of the feedback to retrieve"
        ),
    ),
    ActionSpec(
        name="generate-identifier",
        method="generate_identifier",
        input_model=GenerateIdentifierInput,
        description="Generate a unique UUID for use with SecretVault collections.",
    ),
]


def summarize_listing(listing: Mapping[str, Any]) -> Dict[str, Any]:
    """Public view of a listing as returned to the agent."""
    details = listing.get("service_details") or {}
    availability = listing.get("availability") or {}
    price = listing.get("price") or {}
    return {
        "id": listing.get("_id"),
        "title": details.get("title"),
        "description": details.get("description"),
        "service_type": listing.get("service_type"),
        "duration_minutes": details.get("duration_minutes"),
        "date": availability.get("date"),
        "time": f"{availability.get('start_time')} - {availability.get('end_time')}",
        "timezone": availability.get("timezone"),
        "price": f"{price.get('amount')} {price.get('currency')}",
    }


class MarketplaceActions:
    """
    The action surface of the marketplace.

    Owns no global state: the gateway and the schema registry are handed in by
    the caller, so separate instances never interfere with each other.
    """

    def __init__(
        self,
        gateway: VaultGateway,
        schema_ids: Optional[SchemaRegistry] = None,
        id_factory: IdFactory = generate_id,
    ):
        self.gateway = gateway
        self.schema_ids = schema_ids or SchemaRegistry()
        self._id_factory = id_factory

    @staticmethod
    def _parse(model: Type[BaseModel], args: Mapping[str, Any]):
        try:
            return model.model_validate(dict(args))
        except ValidationError as e:
            raise InvalidDataError(format_validation_error(e)) from e
        except (TypeError, ValueError) as e:
            raise InvalidDataError(str(e)) from e

    # Configuration

    @action_boundary("Configuration error")
    async def configure_connection(self, args: Mapping[str, Any]) -> str:
        request = self._parse(ConfigureConnectionInput, args)
        self.gateway.configure(request.nodes, request.credentials)
        await self.gateway.ensure_ready()
        return "SecretVault configuration updated successfully"

    @action_boundary("Schema creation error")
    async def create_remote_schema(self, args: Mapping[str, Any]) -> str:
        request = self._parse(CreateSchemaInput, args)
        kind = request.schema_type
        title = request.title or f"{kind.value} Schema"

        schema_id = await self.gateway.create_schema(get_schema_template(kind), title)
        self.schema_ids.set(kind, schema_id)

        return f"Schema created successfully\nSchema ID: {schema_id}\nTitle: {title}"

    # Service listings

    @action_boundary("Error creating service listing")
    async def create_listing(self, args: Mapping[str, Any]) -> str:
        request = self._parse(CreateServiceListingInput, args)
        schema_id = self.schema_ids.require(SchemaKind.SERVICE_LISTING)

        record = build_service_listing(request, self._id_factory)
        created_ids = await self.gateway.submit(schema_id, [record])

        logger.info(f"📋 Service listing created: {created_ids[0]}")
        return f"Service listing created successfully\nListing ID: {created_ids[0]}"

    @action_boundary("Error querying service listings")
    async def query_listings(self, args: Mapping[str, Any]) -> str:
        request = self._parse(QueryServiceListingsInput, args)
        schema_id = self.schema_ids.require(SchemaKind.SERVICE_LISTING)

        filters: Dict[str, Any] = {"status": ListingStatus.AVAILABLE.value}
        if request.service_type:
            filters["service_type"] = request.service_type
        if request.date:
            filters["availability.date"] = request.date
        if request.price_max is not None:
            filters["price.amount"] = {"$lte": request.price_max}

        listings = await self.gateway.query(schema_id, filters)
        if not listings:
            return "No service listings found matching your criteria"

        summaries = [summarize_listing(listing) for listing in listings]
        return f"Found {len(listings)} service listings:\n{json.dumps(summaries, indent=2)}"

    # Bookings

    @action_boundary("Error creating booking")
    async def create_booking(self, args: Mapping[str, Any]) -> str:
        request = self._parse(CreateBookingInput, args)
        schema_id = self.schema_ids.require(SchemaKind.BOOKING)
        self.schema_ids.require(SchemaKind.SERVICE_LISTING)

        # The referenced listing is not looked up or marked as booked
        record = build_booking(request, self._id_factory)
        created_ids = await self.gateway.submit(schema_id, [record])

        logger.info(f"📅 Booking created: {created_ids[0]} for service {request.service_id}")
        return f"Service booked successfully\nBooking ID: {created_ids[0]}"

    @action_boundary("Error updating booking status")
    async def update_booking_status(self, args: Mapping[str, Any]) -> str:
        request = self._parse(UpdateBookingStatusInput, args)
        self.schema_ids.require(SchemaKind.BOOKING)

        # Not persisted
        return f"Booking status updated to: {request.service_status.value}"

    @action_boundary("Error getting booking details")
    async def get_booking_details(self, args: Mapping[str, Any]) -> str:
        self._parse(GetBookingDetailsInput, args)
        self.schema_ids.require(SchemaKind.BOOKING)

        return f"Booking details:\n{json.dumps(EXAMPLE_BOOKING, indent=2)}"

    # Feedback

    @action_boundary("Error creating feedback")
    async def create_feedback(self, args: Mapping[str, Any]) -> str:
        request = self._parse(CreateFeedbackInput, args)
        schema_id = self.schema_ids.require(SchemaKind.FEEDBACK)

        record = build_feedback(request, self._id_factory)
        created_ids = await self.gateway.submit(schema_id, [record])

        logger.info(f"⭐ Feedback created: {created_ids[0]} for booking {request.booking_id}")
        return f"Feedback created successfully\nFeedback ID: {created_ids[0]}"

    @action_boundary("Error resolving feedback")
    async def resolve_feedback(self, args: Mapping[str, Any]) -> str:
        request = self._parse(ResolveFeedbackInput, args)
        self.schema_ids.require(SchemaKind.FEEDBACK)

        # Not persisted
        return f"Feedback resolved with status: {request.resolution_status.value}"

    @action_boundary("Error getting feedback")
    async def get_feedback(self, args: Mapping[str, Any]) -> str:
        self._parse(GetFeedbackInput, args)
        self.schema_ids.require(SchemaKind.FEEDBACK)

        return f"Feedback details:\n{json.dumps(EXAMPLE_FEEDBACK, indent=2)}"

    @action_boundary("Error generating identifier")
    async def generate_identifier(self, args: Mapping[str, Any]) -> str:
        self._parse(GenerateIdentifierInput, args)
        return self._id_factory()

    # Tools

    def _build_tool(self, action: ActionSpec) -> StructuredTool:
        handler = getattr(self, action.method)

        async def run_action(**kwargs) -> str:
            return await handler(kwargs)

        return StructuredTool.from_function(
            coroutine=run_action,
            name=action.name,
            description=action.description,
            args_schema=action.input_model,
            handle_validation_error=_tool_validation_error,
        )

    def get_tools(self) -> List[StructuredTool]:
        """Build one LangChain tool per action."""
        return [self._build_tool(action) for action in ACTION_SPECS]
