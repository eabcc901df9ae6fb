#!/usr/bin/env python3
"""
Register the marketplace schemas in SecretVault.

Creates the service listing, booking and feedback schemas with the
organization credentials from .env and prints the SCHEMA_ID_* values to add
to the .env file.

Usage:
    python -m moderia.scripts.create_schemas
    python -m moderia.scripts.create_schemas --only BOOKING
"""

import argparse
import asyncio
import logging
import sys
from typing import Dict, List, Optional

from moderia.config import MarketplaceConfig, SCHEMA_ID_VARS
from moderia.infrastructure.errors import MarketplaceError
from moderia.infrastructure.schema_templates import SchemaKind, get_schema_template
from moderia.infrastructure.vault_gateway import VaultGateway

logger = logging.getLogger(__name__)

SCHEMA_TITLES = {
    SchemaKind.SERVICE_LISTING: "Service Listing",
    SchemaKind.BOOKING: "Service Booking",
    SchemaKind.FEEDBACK: "Service Feedback",
}


async def create_schemas(
    gateway: VaultGateway,
    kinds: Optional[List[SchemaKind]] = None
) -> Dict[SchemaKind, str]:
    """
    Register schema templates and return the assigned ids.

    Args:
        gateway: Gateway connected with organization credentials
        kinds: Schemas to create (all three by default)

    Returns:
        Mapping of schema kind to remote schema id
    """
    schema_ids = {}
    for kind in kinds or list(SchemaKind):
        title = SCHEMA_TITLES[kind]
        print(f"\nCreating {title} Schema...")
        schema_ids[kind] = await gateway.create_schema(get_schema_template(kind), title)
        print(f"📝 {title} Schema created:")
        print(f"Schema ID: {schema_ids[kind]}")
        print(f"Set this value in your .env file as {SCHEMA_ID_VARS[kind]}")
    return schema_ids


async def main(args) -> int:
    config = MarketplaceConfig.from_env()

    missing = config.missing_required(["SV_ORG_DID", "SV_PRIVATE_KEY"])
    if missing:
        print(f"ERROR: Required environment variables must be set: {', '.join(missing)}")
        return 1

    if len(config.nodes()) < 3:
        print("ERROR: Node environment variables are missing.")
        print("Make sure SV_NODE1_URL, SV_NODE1_DID, SV_NODE2_URL, SV_NODE2_DID, "
              "SV_NODE3_URL, and SV_NODE3_DID are properly set.")
        return 1

    gateway = VaultGateway(config.nodes(), config.credentials())
    kinds = [SchemaKind(kind) for kind in args.only] if args.only else None

    try:
        print("Initializing SecretVault organization...")
        await gateway.ensure_ready()
        print("Organization initialized successfully")

        schema_ids = await create_schemas(gateway, kinds)
    except MarketplaceError as e:
        logger.error(f"❌ Error creating schemas: {e}")
        return 1

    print("\n✅ Schemas created successfully")
    print("\nTo configure your environment, add to your .env file:")
    for kind, schema_id in schema_ids.items():
        print(f'{SCHEMA_ID_VARS[kind]}="{schema_id}"')
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Register marketplace schemas in SecretVault")
    parser.add_argument("--only", nargs="+", choices=[kind.value for kind in SchemaKind],
                        help="Create only these schemas")
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    sys.exit(asyncio.run(main(args)))
