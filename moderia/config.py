"""Configuration management for the Moderia marketplace agent."""

from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from eth_account import Account
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .infrastructure.errors import ConfigurationError
from .infrastructure.schema_templates import SchemaKind, SchemaRegistry
from .infrastructure.vault_gateway import VaultCredentials, VaultNode

# The .env file lives in the project root, next to the package
PROJECT_DIR = Path(__file__).parent.parent
ENV_FILE_PATH = PROJECT_DIR / ".env"

# Export .env values to the process environment for the SDK and scripts
load_dotenv(ENV_FILE_PATH)

REQUIRED_VARS = [
    "OPENAI_API_KEY",
    "WALLET_PRIVATE_KEY",
    "SV_ORG_DID",
    "SV_PRIVATE_KEY",
    "SV_NODE1_URL",
    "SV_NODE1_DID",
    "SV_NODE2_URL",
    "SV_NODE2_DID",
    "SV_NODE3_URL",
    "SV_NODE3_DID",
    "SCHEMA_ID_SERVICE_LISTING",
    "SCHEMA_ID_BOOKING",
    "SCHEMA_ID_FEEDBACK",
]

SCHEMA_ID_VARS = {
    SchemaKind.SERVICE_LISTING: "SCHEMA_ID_SERVICE_LISTING",
    SchemaKind.BOOKING: "SCHEMA_ID_BOOKING",
    SchemaKind.FEEDBACK: "SCHEMA_ID_FEEDBACK",
}


class MarketplaceConfig(BaseSettings):
    """
    Settings for the mediator agent and its SecretVault connection.

    Read from environment variables and the project's .env file. Instances are
    passed around explicitly; nothing in the package holds a global copy.
    """

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Language model
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    llm_model: str = Field(default="gpt-4o-mini", description="Chat model used by the mediator")
    llm_temperature: float = Field(default=0.0, description="Sampling temperature")
    agent_thread_id: str = Field(default="Moderia AI Agent", description="Conversation thread id")

    # Wallet
    wallet_private_key: Optional[str] = Field(default=None, description="Signing key for blockchain interactions")

    # SecretVault organization
    sv_org_did: Optional[str] = Field(default=None, description="Organization DID")
    sv_private_key: Optional[str] = Field(default=None, description="Organization secret key")

    # SecretVault nodes
    sv_node1_url: Optional[str] = None
    sv_node1_did: Optional[str] = None
    sv_node2_url: Optional[str] = None
    sv_node2_did: Optional[str] = None
    sv_node3_url: Optional[str] = None
    sv_node3_did: Optional[str] = None

    # Remote schema ids (empty until create_schemas has been run)
    schema_id_service_listing: str = Field(default="", description="Schema id for service listings")
    schema_id_booking: str = Field(default="", description="Schema id for bookings")
    schema_id_feedback: str = Field(default="", description="Schema id for feedback")

    # Environment
    environment: str = Field(default="development", description="Environment (development, production)")
    debug: bool = Field(default=True, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level for entry points")

    @classmethod
    def from_env(cls) -> "MarketplaceConfig":
        """Create configuration from environment variables."""
        return cls()

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    def nodes(self) -> List[VaultNode]:
        """Configured SecretVault nodes, skipping incomplete entries."""
        pairs = [
            (self.sv_node1_url, self.sv_node1_did),
            (self.sv_node2_url, self.sv_node2_did),
            (self.sv_node3_url, self.sv_node3_did),
        ]
        return [VaultNode(url=url, did=did) for url, did in pairs if url and did]

    def credentials(self) -> Optional[VaultCredentials]:
        """Organization credentials, or None when either part is missing."""
        if not self.sv_private_key or not self.sv_org_did:
            return None
        return VaultCredentials(secret_key=self.sv_private_key, org_did=self.sv_org_did)

    def schema_registry(self) -> SchemaRegistry:
        return SchemaRegistry({
            SchemaKind.SERVICE_LISTING: self.schema_id_service_listing,
            SchemaKind.BOOKING: self.schema_id_booking,
            SchemaKind.FEEDBACK: self.schema_id_feedback,
        })

    def missing_required(self, names: Optional[List[str]] = None) -> List[str]:
        """Names of required environment variables that have no value."""
        names = names or REQUIRED_VARS
        return [name for name in names if not getattr(self, name.lower(), None)]

    def wallet_address(self) -> Optional[str]:
        """Address derived from the wallet signing key."""
        if not self.wallet_private_key:
            return None
        try:
            return Account.from_key(self.wallet_private_key).address
        except Exception as e:
            raise ConfigurationError(f"invalid WALLET_PRIVATE_KEY: {e}") from e

    def check_required(self) -> bool:
        """
        Validate that required configuration is present.

        Returns:
            True if valid, False otherwise
        """
        missing = self.missing_required()
        if not missing:
            return True

        print("⚠️  Required environment variables are not set:")
        for name in missing:
            print(f"   {name}=your_{name.lower()}_here")

        if any(name in missing for name in SCHEMA_ID_VARS.values()):
            print("\nMissing schema IDs. Run the schema creation script to generate them:")
            print("   python -m moderia.scripts.create_schemas")
        return False

    def display(self):
        """Display current configuration (hiding sensitive data)."""
        print("Configuration:")
        print(f"  OpenAI API Key: {'✓ Set' if self.openai_api_key else '✗ Not set'}")
        print(f"  LLM Model: {self.llm_model}")
        print(f"  Wallet Key: {'✓ Set' if self.wallet_private_key else '✗ Not set'}")
        if self.wallet_private_key:
            try:
                print(f"  Wallet Address: {self.wallet_address()}")
            except ConfigurationError as e:
                print(f"  Wallet Address: ✗ {e}")
        print(f"  SecretVault Org DID: {self.sv_org_did or '✗ Not set'}")
        print(f"  SecretVault Key: {'✓ Set' if self.sv_private_key else '✗ Not set'}")
        for index, node in enumerate(self.nodes(), start=1):
            print(f"  Node {index}: {node.url} ({node.did})")
        for kind, schema_id in self.schema_registry().to_dict().items():
            print(f"  Schema {kind}: {schema_id or '✗ Not set'}")
        print(f"  Environment: {self.environment}")
        print(f"  Debug: {self.debug}")
