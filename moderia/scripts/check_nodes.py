#!/usr/bin/env python3
"""
Check that the configured SecretVault nodes are reachable.

Usage:
    python -m moderia.scripts.check_nodes
    python -m moderia.scripts.check_nodes --json
"""

import argparse
import asyncio
import json
import logging
import sys

from moderia.config import MarketplaceConfig
from moderia.infrastructure.node_health import NodeHealthChecker

logger = logging.getLogger(__name__)


async def main(args) -> int:
    config = MarketplaceConfig.from_env()
    nodes = config.nodes()
    if not nodes:
        print("ERROR: No SecretVault nodes configured (SV_NODE*_URL / SV_NODE*_DID)")
        return 1

    statuses = await NodeHealthChecker(nodes).check_all()

    if args.json:
        print(json.dumps([status.to_dict() for status in statuses], indent=2))
    else:
        for status in statuses:
            mark = "✅" if status.healthy else "❌"
            print(f"{mark} {status.url}")
            if status.reported_did:
                print(f"   Node DID: {status.reported_did}")
            if status.public_key:
                print(f"   Node Public Key: {status.public_key}")
            if status.error:
                print(f"   Error: {status.error}")

    healthy = all(status.healthy for status in statuses)
    print("\nAll nodes are healthy" if healthy else "\nSome nodes are not healthy")
    return 0 if healthy else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Check SecretVault node health")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    sys.exit(asyncio.run(main(args)))
