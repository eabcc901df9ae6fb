"""
Tests for the schema templates and the schema id registry.

Run with: pytest moderia/tests/test_schema_templates.py
"""

import unittest

from moderia.infrastructure.errors import MissingSchemaError
from moderia.infrastructure.schema_templates import (
    SchemaKind,
    SchemaRegistry,
    get_schema_template,
)
from moderia.marketplace.records import (
    BOOKING_ENCRYPTED_FIELDS,
    LISTING_ENCRYPTED_FIELDS,
)


class TestSchemaTemplates(unittest.TestCase):

    def test_confidential_fields_are_shares(self):
        """Every encrypted field is declared as a %share object."""
        listing = get_schema_template(SchemaKind.SERVICE_LISTING)["items"]["properties"]
        for field in LISTING_ENCRYPTED_FIELDS:
            self.assertEqual(listing[field]["required"], ["%share"])

        booking = get_schema_template(SchemaKind.BOOKING)["items"]["properties"]
        for field in BOOKING_ENCRYPTED_FIELDS + ["meeting_link"]:
            self.assertEqual(booking[field]["required"], ["%share"])

        feedback = get_schema_template(SchemaKind.FEEDBACK)["items"]["properties"]
        self.assertEqual(feedback["agent_notes"]["required"], ["%share"])
        print("\n✓ Confidential fields declared as shares")

    def test_optional_fields_not_required(self):
        booking = get_schema_template(SchemaKind.BOOKING)["items"]
        self.assertNotIn("meeting_link", booking["required"])

        feedback = get_schema_template(SchemaKind.FEEDBACK)["items"]
        self.assertEqual(feedback["required"], ["_id", "booking_id", "resolution_status"])

    def test_minimum_duration(self):
        listing = get_schema_template(SchemaKind.SERVICE_LISTING)["items"]["properties"]
        self.assertEqual(listing["service_details"]["properties"]["duration_minutes"]["minimum"], 15)

    def test_template_is_a_copy(self):
        template = get_schema_template(SchemaKind.BOOKING)
        template["title"] = "changed"
        self.assertEqual(get_schema_template(SchemaKind.BOOKING)["title"], "Service Booking")


class TestSchemaRegistry(unittest.TestCase):

    def test_require_missing(self):
        registry = SchemaRegistry()
        with self.assertRaises(MissingSchemaError) as ctx:
            registry.require(SchemaKind.BOOKING)

        self.assertEqual(ctx.exception.schema_type, "BOOKING")
        self.assertEqual(
            str(ctx.exception),
            "Schema ID for BOOKING is missing. Please create the schema first."
        )

    def test_empty_id_counts_as_missing(self):
        registry = SchemaRegistry({SchemaKind.FEEDBACK: ""})
        self.assertIsNone(registry.get(SchemaKind.FEEDBACK))
        self.assertIn(SchemaKind.FEEDBACK, registry.missing())

    def test_set_and_require(self):
        registry = SchemaRegistry()
        registry.set("SERVICE_LISTING", "listing-schema")

        self.assertEqual(registry.require(SchemaKind.SERVICE_LISTING), "listing-schema")
        self.assertEqual(registry.missing(), [SchemaKind.BOOKING, SchemaKind.FEEDBACK])
        self.assertEqual(registry.to_dict(), {
            "SERVICE_LISTING": "listing-schema",
            "BOOKING": "",
            "FEEDBACK": "",
        })


if __name__ == "__main__":
    unittest.main()
