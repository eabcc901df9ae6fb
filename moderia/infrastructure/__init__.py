"""Shared infrastructure: SecretVault gateway, encryption marking, schemas and errors."""

from .errors import (
    MarketplaceError,
    InitializationError,
    SchemaCreationError,
    DataWriteError,
    DataReadError,
    InvalidDataError,
    MissingSchemaError,
    ConfigurationError,
    BookingError,
    FeedbackError,
)
from .encryption import ENCRYPTION_MARKER, mark_for_encryption, wrap_value, is_marked
from .schema_templates import SchemaKind, SchemaRegistry, get_schema_template
from .vault_gateway import (
    VaultNode,
    VaultCredentials,
    VaultClient,
    SecretVaultClient,
    VaultGateway,
    GatewayState,
)
from .node_health import NodeHealthChecker, NodeStatus
from .prompts import get_prompt

__all__ = [
    "MarketplaceError",
    "InitializationError",
    "SchemaCreationError",
    "DataWriteError",
    "DataReadError",
    "InvalidDataError",
    "MissingSchemaError",
    "ConfigurationError",
    "BookingError",
    "FeedbackError",
    "ENCRYPTION_MARKER",
    "mark_for_encryption",
    "wrap_value",
    "is_marked",
    "SchemaKind",
    "SchemaRegistry",
    "get_schema_template",
    "VaultNode",
    "VaultCredentials",
    "VaultClient",
    "SecretVaultClient",
    "VaultGateway",
    "GatewayState",
    "NodeHealthChecker",
    "NodeStatus",
    "get_prompt",
]
