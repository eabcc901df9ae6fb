"""
Tests for field-encryption marking.

Run with: pytest moderia/tests/test_encryption.py
"""

import unittest

from moderia.infrastructure.encryption import (
    ENCRYPTION_MARKER,
    is_marked,
    mark_for_encryption,
    wrap_value,
)


def sample_record():
    return {
        "_id": "abc",
        "provider_name": "Maria Garcia",
        "contact_info": "maria@example.com",
        "service_details": {"title": "Spanish Lessons", "duration_minutes": 60},
        "status": "available",
    }


class TestMarkForEncryption(unittest.TestCase):
    """Test mark_for_encryption on flat and nested fields."""

    def test_marker_constant(self):
        self.assertEqual(ENCRYPTION_MARKER, "%allot")
        self.assertEqual(wrap_value("x"), {"%allot": "x"})

    def test_top_level_fields_wrapped(self):
        """Named top-level fields become single-key wrappers."""
        record = sample_record()
        result = mark_for_encryption(record, ["provider_name", "contact_info"])

        self.assertEqual(result["provider_name"], {"%allot": "Maria Garcia"})
        self.assertEqual(result["contact_info"], {"%allot": "maria@example.com"})
        self.assertEqual(result["status"], "available")
        self.assertEqual(result["_id"], "abc")
        print("\n✓ Top-level fields wrapped, others unchanged")

    def test_input_not_mutated(self):
        """The result is a new mapping and the input keeps its plain values."""
        record = sample_record()
        result = mark_for_encryption(record, ["provider_name", "service_details.title"])

        self.assertIsNot(result, record)
        self.assertEqual(record, sample_record())
        self.assertEqual(record["service_details"]["title"], "Spanish Lessons")
        print("\n✓ Input record left untouched")

    def test_nested_field_wrapped_in_parent_copy(self):
        """A dotted path only replaces the child inside a copy of the parent."""
        record = sample_record()
        result = mark_for_encryption(record, ["service_details.title"])

        self.assertEqual(result["service_details"]["title"], {"%allot": "Spanish Lessons"})
        self.assertEqual(result["service_details"]["duration_minutes"], 60)
        self.assertIsNot(result["service_details"], record["service_details"])
        print("\n✓ Nested field wrapped in a copied parent")

    def test_unmarked_values_are_shared(self):
        """Shallow copy: untouched nested values are the same objects."""
        record = sample_record()
        result = mark_for_encryption(record, ["provider_name"])
        self.assertIs(result["service_details"], record["service_details"])

    def test_absent_fields_skipped(self):
        """Missing fields, parents and children are not inserted."""
        record = sample_record()
        result = mark_for_encryption(
            record,
            ["meeting_link", "missing_parent.child", "service_details.missing", "status.child"]
        )

        self.assertNotIn("meeting_link", result)
        self.assertNotIn("missing_parent", result)
        self.assertNotIn("missing", result["service_details"])
        self.assertEqual(result["status"], "available")
        self.assertEqual(result, record)
        print("\n✓ Absent paths leave the record unchanged")

    def test_falsy_present_value_is_wrapped(self):
        result = mark_for_encryption({"notes": ""}, ["notes"])
        self.assertEqual(result["notes"], {"%allot": ""})

    def test_double_marking_wraps_twice(self):
        """Marking the same path twice is not guarded: the wrapper gets wrapped."""
        record = {"customer_name": "John Smith"}
        once = mark_for_encryption(record, ["customer_name"])
        twice = mark_for_encryption(once, ["customer_name"])

        self.assertEqual(twice["customer_name"], {"%allot": {"%allot": "John Smith"}})

        same_call = mark_for_encryption(record, ["customer_name", "customer_name"])
        self.assertEqual(same_call["customer_name"], {"%allot": {"%allot": "John Smith"}})
        print("\n✓ Double marking produces a nested wrapper")

    def test_double_marking_logged(self):
        with self.assertLogs("moderia.infrastructure.encryption", level="DEBUG") as logs:
            mark_for_encryption({"customer_name": {"%allot": "John Smith"}}, ["customer_name"])
        self.assertIn("customer_name", logs.output[0])

    def test_is_marked(self):
        self.assertTrue(is_marked({"%allot": "x"}))
        self.assertFalse(is_marked({"%allot": "x", "other": 1}))
        self.assertFalse(is_marked("x"))
        self.assertFalse(is_marked({"%share": "x"}))


if __name__ == "__main__":
    unittest.main()
