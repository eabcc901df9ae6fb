"""Marketplace domain: input schemas, record builders and the action surface."""

from .schemas import (
    ListingStatus,
    PaymentStatus,
    ServiceStatus,
    ResolutionStatus,
    ConfigureConnectionInput,
    CreateSchemaInput,
    CreateServiceListingInput,
    QueryServiceListingsInput,
    CreateBookingInput,
    UpdateBookingStatusInput,
    GetBookingDetailsInput,
    CreateFeedbackInput,
    ResolveFeedbackInput,
    GetFeedbackInput,
    GenerateIdentifierInput,
)
from .records import build_service_listing, build_booking, build_feedback, generate_id
from .actions import MarketplaceActions, ACTION_SPECS

__all__ = [
    "ListingStatus",
    "PaymentStatus",
    "ServiceStatus",
    "ResolutionStatus",
    "ConfigureConnectionInput",
    "CreateSchemaInput",
    "CreateServiceListingInput",
    "QueryServiceListingsInput",
    "CreateBookingInput",
    "UpdateBookingStatusInput",
    "GetBookingDetailsInput",
    "CreateFeedbackInput",
    "ResolveFeedbackInput",
    "GetFeedbackInput",
    "GenerateIdentifierInput",
    "build_service_listing",
    "build_booking",
    "build_feedback",
    "generate_id",
    "MarketplaceActions",
    "ACTION_SPECS",
]
