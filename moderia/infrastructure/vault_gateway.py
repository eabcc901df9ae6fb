"""
Gateway to the Nillion SecretVault encrypted storage network.

Provides:
- VaultNode / VaultCredentials: connection parameters for the storage nodes
- VaultClient: the narrow capability interface the marketplace needs
- SecretVaultClient: adapter over the ``secretvaults`` SDK
- VaultGateway: lazily connected handle with submit/query passthroughs

The gateway owns no retry, caching or consistency logic. Secret sharing,
distribution across nodes and reconstruction all happen inside the SDK.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .errors import (
    DataReadError,
    DataWriteError,
    InitializationError,
    MarketplaceError,
    SchemaCreationError,
)

logger = logging.getLogger(__name__)


class VaultNode(BaseModel):
    """A single SecretVault storage node."""

    model_config = ConfigDict(extra="forbid")

    url: str = Field(description="Base URL of the node API")
    did: str = Field(description="Decentralized identifier of the node")


class VaultCredentials(BaseModel):
    """Organization credentials used to authenticate against every node."""

    model_config = ConfigDict(extra="forbid")

    secret_key: str = Field(description="Organization secret key (hex)")
    org_did: str = Field(description="Organization decentralized identifier")


class VaultClient(Protocol):
    """Capabilities the gateway needs from an encrypted storage client."""

    async def init(self) -> None: ...

    async def create_schema(self, schema: Dict[str, Any], title: str) -> Any: ...

    async def write(self, schema_id: str, records: List[Dict[str, Any]]) -> Any: ...

    async def read(self, schema_id: str, filter: Dict[str, Any]) -> List[Dict[str, Any]]: ...


class SecretVaultClient:
    """
    VaultClient backed by ``secretvaults.SecretVaultWrapper``.

    The SDK binds one wrapper to one schema, so a wrapper is initialised per
    schema id on first use and reused afterwards.
    """

    def __init__(self, nodes: Sequence[VaultNode], credentials: VaultCredentials):
        self.nodes = [{"url": node.url, "did": node.did} for node in nodes]
        self.credentials = {
            "secret_key": credentials.secret_key,
            "org_did": credentials.org_did,
        }
        self._org = None
        self._collections: Dict[str, Any] = {}

    def _wrapper(self, schema_id: Optional[str] = None):
        from secretvaults import OperationType, SecretVaultWrapper

        return SecretVaultWrapper(
            self.nodes,
            self.credentials,
            schema_id=schema_id,
            operation=OperationType.STORE,
        )

    async def init(self) -> None:
        self._org = self._wrapper()
        await self._org.init()

    async def create_schema(self, schema: Dict[str, Any], title: str) -> Any:
        return await self._org.create_schema(schema, title)

    async def _collection(self, schema_id: str):
        collection = self._collections.get(schema_id)
        if collection is None:
            collection = self._wrapper(schema_id)
            await collection.init()
            self._collections[schema_id] = collection
        return collection

    async def write(self, schema_id: str, records: List[Dict[str, Any]]) -> Any:
        collection = await self._collection(schema_id)
        return await collection.write_to_nodes(records)

    async def read(self, schema_id: str, filter: Dict[str, Any]) -> List[Dict[str, Any]]:
        collection = await self._collection(schema_id)
        return await collection.read_from_nodes(filter)


ClientFactory = Callable[[Sequence[VaultNode], VaultCredentials], VaultClient]


class GatewayState(str, Enum):
    """Connection state of the gateway."""
    UNINITIALIZED = "uninitialized"
    READY = "ready"


def extract_schema_id(response: Any) -> str:
    """
    Get the schema id from a create-schema response.

    Accepts a bare id, a single node response, or a list of per-node
    responses. All nodes must agree on the id.
    """
    if isinstance(response, str):
        return response

    if isinstance(response, Mapping):
        response = [response]

    ids = []
    for node_response in response or []:
        if not isinstance(node_response, Mapping):
            continue
        schema_id = node_response.get("schemaId") or node_response.get("schema_id")
        if schema_id:
            ids.append(schema_id)

    if not ids:
        raise SchemaCreationError("Invalid response format from SecretVault API")
    if any(schema_id != ids[0] for schema_id in ids):
        raise SchemaCreationError("Inconsistent schema IDs returned from nodes")
    return ids[0]


def extract_write_errors(response: Any) -> List[str]:
    """
    Collect node failures from a write response.

    The SDK reports a failed node as ``{"node": url, "error": ...}`` instead
    of raising, and a node that rejected records lists them under
    ``data.errors``.
    """
    if isinstance(response, Mapping):
        response = [response]

    errors: List[str] = []
    for node_response in response or []:
        if not isinstance(node_response, Mapping):
            continue
        node = node_response.get("node", "unknown node")
        if node_response.get("error"):
            errors.append(f"{node}: {node_response['error']}")
            continue
        payload = node_response.get("result", node_response)
        data = payload.get("data") if isinstance(payload, Mapping) else None
        if isinstance(data, Mapping) and data.get("errors"):
            errors.append(f"{node}: {data['errors']}")
    return errors


def extract_created_ids(response: Any) -> List[str]:
    """Collect created record ids from a write response, across all nodes."""
    if isinstance(response, Mapping):
        response = [response]

    created_ids: List[str] = []
    for node_response in response or []:
        if not isinstance(node_response, Mapping):
            continue
        payload = node_response.get("result", node_response)
        data = payload.get("data") if isinstance(payload, Mapping) else None
        if not isinstance(data, Mapping):
            continue
        for record_id in data.get("created") or []:
            if record_id not in created_ids:
                created_ids.append(record_id)
    return created_ids


class VaultGateway:
    """
    Lazily connected SecretVault handle.

    The connection is established on first use with the current node list and
    credentials. A failed attempt leaves the gateway uninitialized so the next
    operation tries again. ``configure`` drops the connection so the next
    operation reconnects with the new parameters.

    Not safe for concurrent reconfiguration: callers sharing a gateway across
    tasks must not call ``configure`` while operations are in flight.
    """

    def __init__(
        self,
        nodes: Sequence[VaultNode],
        credentials: Optional[VaultCredentials],
        client_factory: Optional[ClientFactory] = None,
    ):
        self.nodes: List[VaultNode] = list(nodes)
        self.credentials = credentials
        self._client_factory = client_factory or SecretVaultClient
        self._client: Optional[VaultClient] = None
        self.state = GatewayState.UNINITIALIZED

    @property
    def is_ready(self) -> bool:
        return self.state is GatewayState.READY and self._client is not None

    def configure(self, nodes: Sequence[VaultNode], credentials: VaultCredentials):
        """Replace the connection parameters and force re-initialization."""
        self.nodes = list(nodes)
        self.credentials = credentials
        self._client = None
        self.state = GatewayState.UNINITIALIZED
        logger.info(f"SecretVault reconfigured with {len(self.nodes)} nodes")

    async def ensure_ready(self) -> VaultClient:
        """Return the connected client, connecting first if needed."""
        if self.is_ready:
            return self._client

        if not self.nodes:
            raise InitializationError("no SecretVault nodes configured")
        if self.credentials is None:
            raise InitializationError("organization credentials are not configured")

        try:
            client = self._client_factory(self.nodes, self.credentials)
            await client.init()
        except Exception as e:
            logger.error(f"SecretVault initialization failed: {e}")
            raise InitializationError(str(e)) from e

        self._client = client
        self.state = GatewayState.READY
        logger.info(f"✅ SecretVault connected ({len(self.nodes)} nodes)")
        return client

    async def create_schema(self, schema: Dict[str, Any], title: str) -> str:
        """Register a JSON schema and return its id."""
        client = await self.ensure_ready()
        try:
            response = await client.create_schema(schema, title)
        except MarketplaceError:
            raise
        except Exception as e:
            logger.error(f"Schema creation failed for '{title}': {e}")
            raise SchemaCreationError(str(e)) from e

        schema_id = extract_schema_id(response)
        logger.info(f"📝 Schema '{title}' registered: {schema_id}")
        return schema_id

    async def submit(self, schema_id: str, records: List[Dict[str, Any]]) -> List[str]:
        """Write a batch of prepared records and return the created ids."""
        client = await self.ensure_ready()
        try:
            response = await client.write(schema_id, records)
        except Exception as e:
            logger.error(f"Write to schema {schema_id} failed: {e}")
            raise DataWriteError(str(e)) from e

        # Every node must hold its share of each record
        node_errors = extract_write_errors(response)
        if node_errors:
            logger.error(f"Write to schema {schema_id} failed on {len(node_errors)} node(s): {node_errors}")
            raise DataWriteError("; ".join(node_errors))

        created_ids = extract_created_ids(response)
        if not created_ids:
            raise DataWriteError("no records were created")
        logger.debug(f"Created {len(created_ids)} records in schema {schema_id}")
        return created_ids

    async def query(self, schema_id: str, filter: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Read the records matching ``filter`` as delivered by the client."""
        client = await self.ensure_ready()
        try:
            records = await client.read(schema_id, dict(filter or {}))
        except Exception as e:
            logger.error(f"Read from schema {schema_id} failed: {e}")
            raise DataReadError(str(e)) from e
        return list(records or [])
