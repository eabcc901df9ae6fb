"""
Health probe for SecretVault nodes.

Checks each node's ``/health`` endpoint and reads its ``/about`` document
(node DID and public key) over plain HTTP.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import aiohttp

from .vault_gateway import VaultNode

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 10


@dataclass
class NodeStatus:
    """Result of probing a single node."""
    url: str
    did: str
    healthy: bool
    reported_did: Optional[str] = None
    public_key: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"url": self.url, "did": self.did, "healthy": self.healthy}
        if self.reported_did:
            data["reported_did"] = self.reported_did
        if self.public_key:
            data["public_key"] = self.public_key
        if self.error:
            data["error"] = self.error
        return data


class NodeHealthChecker:
    """Probes SecretVault nodes one after another."""

    def __init__(self, nodes: Sequence[VaultNode], session: Optional[aiohttp.ClientSession] = None):
        self.nodes = list(nodes)
        self._session = session

    async def _get(self, session, url: str):
        async with session.get(
            url,
            timeout=aiohttp.ClientTimeout(total=REQUEST_TIMEOUT_SECONDS)
        ) as response:
            if response.status != 200:
                return response.status, None
            if response.content_type == "application/json":
                return response.status, await response.json()
            return response.status, None

    async def check_node(self, session, node: VaultNode) -> NodeStatus:
        """Probe ``/health`` then ``/about`` for one node."""
        base_url = node.url.rstrip("/")
        status = NodeStatus(url=node.url, did=node.did, healthy=False)

        try:
            code, _ = await self._get(session, f"{base_url}/health")
            if code != 200:
                status.error = f"unexpected status {code}"
                logger.warning(f"Node {node.url} returned unexpected status: {code}")
                return status
            status.healthy = True

            code, about = await self._get(session, f"{base_url}/about")
            if about:
                status.reported_did = about.get("did")
                status.public_key = about.get("publicKey")
                if status.reported_did and status.reported_did != node.did:
                    logger.warning(
                        f"Node {node.url} reports DID {status.reported_did}, configured {node.did}"
                    )
        except Exception as e:
            status.healthy = False
            status.error = str(e)
            logger.error(f"Failed to check health of node {node.url}: {e}")

        return status

    async def check_all(self) -> List[NodeStatus]:
        """Probe every configured node."""
        if self._session is not None:
            return [await self.check_node(self._session, node) for node in self.nodes]

        async with aiohttp.ClientSession() as session:
            return [await self.check_node(session, node) for node in self.nodes]

    async def all_healthy(self) -> bool:
        statuses = await self.check_all()
        return bool(statuses) and all(status.healthy for status in statuses)
