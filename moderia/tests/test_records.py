"""
Tests for the input schemas and record builders.

Run with: pytest moderia/tests/test_records.py
"""

import unittest
from datetime import datetime, timezone

from pydantic import ValidationError

from moderia.marketplace.records import (
    build_booking,
    build_feedback,
    build_service_listing,
    generate_id,
)
from moderia.marketplace.schemas import (
    CreateBookingInput,
    CreateFeedbackInput,
    CreateServiceListingInput,
    UpdateBookingStatusInput,
)


def listing_args(**overrides):
    args = {
        "provider_name": "Maria Garcia",
        "provider_id": "provider-123",
        "service_type": "language_lesson",
        "service_details": {
            "title": "Spanish Language Lessons",
            "description": "Learn Spanish with a native speaker.",
            "duration_minutes": 60,
        },
        "availability": {
            "date": "2023-05-15",
            "start_time": "15:00",
            "end_time": "18:00",
            "timezone": "America/Mexico_City",
        },
        "price": {"amount": 30, "currency": "USD"},
        "contact_info": "maria@example.com",
    }
    args.update(overrides)
    return args


class TestInputSchemas(unittest.TestCase):
    """Validation at the boundary."""

    def test_listing_duration_minimum(self):
        """A 10 minute service is rejected (minimum is 15)."""
        args = listing_args()
        args["service_details"]["duration_minutes"] = 10

        with self.assertRaises(ValidationError):
            CreateServiceListingInput.model_validate(args)

        args["service_details"]["duration_minutes"] = 15
        CreateServiceListingInput.model_validate(args)
        print("\n✓ duration_minutes below 15 rejected")

    def test_listing_price_must_be_positive(self):
        with self.assertRaises(ValidationError):
            CreateServiceListingInput.model_validate(listing_args(price={"amount": 0, "currency": "USD"}))

    def test_unknown_fields_rejected(self):
        with self.assertRaises(ValidationError):
            CreateServiceListingInput.model_validate(listing_args(surprise="field"))

        args = listing_args()
        args["price"]["discount"] = 5
        with self.assertRaises(ValidationError):
            CreateServiceListingInput.model_validate(args)
        print("\n✓ Extra fields rejected at top level and nested")

    def test_rating_range(self):
        with self.assertRaises(ValidationError):
            CreateFeedbackInput(booking_id="b-1", provider_rating=6)
        with self.assertRaises(ValidationError):
            CreateFeedbackInput(booking_id="b-1", customer_rating=0)
        CreateFeedbackInput(booking_id="b-1", provider_rating=1, customer_rating=5)

    def test_status_enums(self):
        with self.assertRaises(ValidationError):
            UpdateBookingStatusInput(booking_id="b-1", service_status="finished")
        request = UpdateBookingStatusInput(booking_id="b-1", service_status="in_progress")
        self.assertEqual(request.service_status.value, "in_progress")


class TestRecordBuilders(unittest.TestCase):
    """Test building records for each kind."""

    def test_generate_id(self):
        first, second = generate_id(), generate_id()
        self.assertTrue(first)
        self.assertNotEqual(first, second)

    def test_build_service_listing(self):
        """Listing gets an id, status available and encrypted provider fields."""
        request = CreateServiceListingInput.model_validate(listing_args())
        record = build_service_listing(request, id_factory=lambda: "listing-1")

        self.assertEqual(record["_id"], "listing-1")
        self.assertEqual(record["status"], "available")
        self.assertEqual(record["provider_name"], {"%allot": "Maria Garcia"})
        self.assertEqual(record["provider_id"], {"%allot": "provider-123"})
        self.assertEqual(record["contact_info"], {"%allot": "maria@example.com"})
        self.assertEqual(record["service_type"], "language_lesson")
        self.assertEqual(record["service_details"]["duration_minutes"], 60)
        self.assertEqual(record["price"], {"amount": 30.0, "currency": "USD"})
        print("\n✓ Service listing built with encrypted provider fields")

    def test_build_booking_without_meeting_link(self):
        """No meeting link supplied: no meeting_link field at all."""
        request = CreateBookingInput(service_id="listing-1", customer_id="customer-456", customer_name="John Smith")
        now = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        record = build_booking(request, id_factory=lambda: "booking-1", now=now)

        self.assertEqual(record["_id"], "booking-1")
        self.assertEqual(record["service_id"], "listing-1")
        self.assertEqual(record["customer_id"], {"%allot": "customer-456"})
        self.assertEqual(record["customer_name"], {"%allot": "John Smith"})
        self.assertEqual(record["payment_status"], "pending")
        self.assertEqual(record["service_status"], "scheduled")
        self.assertEqual(record["notes"], "")
        self.assertEqual(record["booking_time"], "2024-01-02T03:04:05+00:00")
        self.assertNotIn("meeting_link", record)
        print("\n✓ Booking without meeting link has no meeting_link field")

    def test_build_booking_with_meeting_link(self):
        request = CreateBookingInput(
            service_id="listing-1",
            customer_id="customer-456",
            customer_name="John Smith",
            meeting_link="https://x",
        )
        record = build_booking(request)

        self.assertEqual(record["meeting_link"], {"%allot": "https://x"})
        self.assertTrue(record["_id"])
        print("\n✓ Supplied meeting link is marked for encryption")

    def test_build_booking_empty_meeting_link_dropped(self):
        request = CreateBookingInput(service_id="s", customer_id="c", customer_name="n", meeting_link="")
        self.assertNotIn("meeting_link", build_booking(request))

    def test_build_feedback_minimal(self):
        """Minimal feedback: pending, no optional fields."""
        request = CreateFeedbackInput(booking_id="booking-1")
        record = build_feedback(request, id_factory=lambda: "feedback-1")

        self.assertEqual(record, {
            "_id": "feedback-1",
            "booking_id": "booking-1",
            "resolution_status": "pending",
        })

    def test_build_feedback_with_agent_notes(self):
        request = CreateFeedbackInput(
            booking_id="booking-1",
            customer_rating=5,
            customer_feedback="Excellent tutor",
            agent_notes="High satisfaction from customer",
        )
        record = build_feedback(request)

        self.assertEqual(record["agent_notes"], {"%allot": "High satisfaction from customer"})
        self.assertEqual(record["customer_rating"], 5)
        self.assertEqual(record["customer_feedback"], "Excellent tutor")
        self.assertNotIn("provider_rating", record)
        self.assertEqual(record["resolution_status"], "pending")
        print("\n✓ Feedback agent notes marked for encryption")


if __name__ == "__main__":
    unittest.main()
