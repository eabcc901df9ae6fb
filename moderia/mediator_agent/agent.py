"""
MediatorAgent - LangGraph ReAct agent that brokers marketplace deals.

The agent reasons with an OpenAI chat model and acts through the marketplace
action tools. Conversation memory is kept per thread by a MemorySaver
checkpointer.
"""

import logging
from typing import Any, Dict, List, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_openai import ChatOpenAI
from langgraph.checkpoint.memory import MemorySaver
from langgraph.prebuilt import create_react_agent

from ..config import MarketplaceConfig
from ..infrastructure.errors import ConfigurationError
from ..infrastructure.prompts import get_prompt
from ..infrastructure.vault_gateway import ClientFactory, VaultGateway
from ..marketplace.actions import MarketplaceActions

logger = logging.getLogger(__name__)


def create_llm(config: MarketplaceConfig) -> BaseChatModel:
    """Create the chat model used by the mediator."""
    if not config.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY is required")

    return ChatOpenAI(
        model=config.llm_model,
        api_key=config.openai_api_key,
        temperature=config.llm_temperature,
    )


def create_actions(
    config: MarketplaceConfig,
    client_factory: Optional[ClientFactory] = None
) -> MarketplaceActions:
    """Wire a gateway and schema registry from configuration into the action surface."""
    gateway = VaultGateway(config.nodes(), config.credentials(), client_factory=client_factory)
    return MarketplaceActions(gateway, config.schema_registry())


def _message_text(message: Any) -> str:
    content = getattr(message, "content", message)
    if isinstance(content, list):
        parts = [part.get("text", "") if isinstance(part, dict) else str(part) for part in content]
        return "".join(parts)
    return str(content) if content is not None else ""


class MediatorAgent:
    """
    Moderia mediator agent.

    Wraps a prebuilt ReAct graph over the marketplace tools and feeds it one
    user message at a time.
    """

    def __init__(
        self,
        config: MarketplaceConfig,
        actions: Optional[MarketplaceActions] = None,
        llm: Optional[BaseChatModel] = None
    ):
        self.config = config
        self.actions = actions or create_actions(config)
        self.llm = llm or create_llm(config)
        self.tools = self.actions.get_tools()
        self.memory = MemorySaver()

        self.graph = create_react_agent(
            self.llm,
            self.tools,
            checkpointer=self.memory,
            prompt=get_prompt("system"),
        )
        self.run_config: Dict[str, Any] = {
            "configurable": {"thread_id": config.agent_thread_id}
        }

        logger.info(f"MediatorAgent initialized with {len(self.tools)} tools")

    async def run_prompt(self, message: str) -> List[str]:
        """
        Send one user message through the agent.

        Args:
            message: User input

        Returns:
            Texts produced by the agent and its tools, in order
        """
        outputs: List[str] = []

        async for chunk in self.graph.astream(
            {"messages": [HumanMessage(content=message)]},
            self.run_config,
            stream_mode="updates",
        ):
            for source in ("agent", "tools"):
                update = chunk.get(source) if isinstance(chunk, dict) else None
                if not update:
                    continue
                for reply in update.get("messages", []):
                    text = _message_text(reply)
                    if text:
                        logger.info(f"[{source}] {text}")
                        outputs.append(text)

        return outputs

    async def check_pending_tasks(self) -> List[str]:
        """Ask the agent to look for bookings, feedback or disputes that need attention."""
        return await self.run_prompt(get_prompt("pending_tasks"))
