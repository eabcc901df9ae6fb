"""
Tests for the error messages returned to the agent.

Run with: pytest moderia/tests/test_errors.py
"""

import unittest

from moderia.infrastructure.errors import (
    BookingError,
    ConfigurationError,
    DataReadError,
    DataWriteError,
    FeedbackError,
    InitializationError,
    InvalidDataError,
    MarketplaceError,
    MissingSchemaError,
    SchemaCreationError,
)


class TestErrorMessages(unittest.TestCase):

    def test_prefixes(self):
        cases = [
            (InitializationError("x"), "Failed to initialize SecretVault: x"),
            (SchemaCreationError("x"), "Failed to create schema: x"),
            (DataWriteError("x"), "Failed to write data to SecretVault: x"),
            (DataReadError("x"), "Failed to read data from SecretVault: x"),
            (InvalidDataError("x"), "Invalid data provided: x"),
            (ConfigurationError("x"), "Configuration error: x"),
            (BookingError("x"), "Booking error: x"),
            (FeedbackError("x"), "Feedback error: x"),
        ]
        for error, message in cases:
            self.assertIsInstance(error, MarketplaceError)
            self.assertEqual(str(error), message)
            self.assertEqual(error.message, message)
        print(f"\n✓ {len(cases)} error prefixes checked")

    def test_missing_schema(self):
        error = MissingSchemaError("FEEDBACK")
        self.assertEqual(str(error), "Schema ID for FEEDBACK is missing. Please create the schema first.")
        self.assertEqual(error.schema_type, "FEEDBACK")


if __name__ == "__main__":
    unittest.main()
