"""
Tests for the schema provisioning script.

Run with: pytest moderia/tests/test_create_schemas.py
"""

import argparse
import asyncio
import os
import unittest
from unittest.mock import patch

from moderia.infrastructure.schema_templates import SchemaKind
from moderia.infrastructure.vault_gateway import VaultCredentials, VaultGateway, VaultNode
from moderia.scripts import create_schemas
from moderia.tests.fakes import FakeClientFactory


def run_async(coro):
    """Helper to run async functions in sync tests."""
    return asyncio.run(coro)


class TestCreateSchemas(unittest.TestCase):

    def test_creates_all_kinds(self):
        factory = FakeClientFactory()
        gateway = VaultGateway(
            [VaultNode(url="https://nildb-1.example.com", did="did:nil:node1")],
            VaultCredentials(secret_key="a" * 64, org_did="did:nil:org"),
            client_factory=factory,
        )

        schema_ids = run_async(create_schemas.create_schemas(gateway))

        self.assertEqual(list(schema_ids), list(SchemaKind))
        titles = [title for _, title in factory.last.schemas]
        self.assertEqual(titles, ["Service Listing", "Service Booking", "Service Feedback"])
        print("\n✓ All three schemas registered")

    def test_only_selected_kinds(self):
        factory = FakeClientFactory()
        gateway = VaultGateway(
            [VaultNode(url="https://nildb-1.example.com", did="did:nil:node1")],
            VaultCredentials(secret_key="a" * 64, org_did="did:nil:org"),
            client_factory=factory,
        )

        schema_ids = run_async(create_schemas.create_schemas(gateway, [SchemaKind.BOOKING]))

        self.assertEqual(schema_ids, {SchemaKind.BOOKING: "schema-0001"})

    def test_main_requires_credentials(self):
        with patch.dict(os.environ, {}, clear=True):
            config = create_schemas.MarketplaceConfig(_env_file=None)

        with patch.object(create_schemas.MarketplaceConfig, "from_env", return_value=config):
            code = run_async(create_schemas.main(argparse.Namespace(only=None)))

        self.assertEqual(code, 1)

    def test_main_requires_three_nodes(self):
        with patch.dict(os.environ, {}, clear=True):
            config = create_schemas.MarketplaceConfig(
                _env_file=None,
                sv_org_did="did:nil:org",
                sv_private_key="a" * 64,
                sv_node1_url="https://nildb-1.example.com",
                sv_node1_did="did:nil:node1",
            )

        with patch.object(create_schemas.MarketplaceConfig, "from_env", return_value=config), \
                patch.object(create_schemas, "VaultGateway") as mock_gateway:
            code = run_async(create_schemas.main(argparse.Namespace(only=None)))

        self.assertEqual(code, 1)
        mock_gateway.assert_not_called()


if __name__ == "__main__":
    unittest.main()
