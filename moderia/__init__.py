"""
Moderia - private service marketplace mediator.

An AI agent that brokers services between providers and customers, keeping
personal data confidential in Nillion SecretVault.

Structure:
- infrastructure/: SecretVault gateway, encryption marking, schema templates, errors
- marketplace/: input schemas, record builders and the action surface (agent tools)
- mediator_agent/: LangGraph ReAct agent over the marketplace actions
- scripts/: schema provisioning and node health checks
- config.py: settings from environment / .env
"""

__version__ = "0.1.0"

from .config import MarketplaceConfig
from .infrastructure import (
    MarketplaceError,
    MissingSchemaError,
    SchemaKind,
    SchemaRegistry,
    VaultCredentials,
    VaultGateway,
    VaultNode,
    mark_for_encryption,
)
from .marketplace import MarketplaceActions
from .mediator_agent import MediatorAgent

__all__ = [
    "MarketplaceConfig",
    "MarketplaceError",
    "MissingSchemaError",
    "SchemaKind",
    "SchemaRegistry",
    "VaultCredentials",
    "VaultGateway",
    "VaultNode",
    "mark_for_encryption",
    "MarketplaceActions",
    "MediatorAgent",
    "__version__"
]
