"""Mediator agent - LangGraph ReAct agent over the marketplace actions."""

from .agent import MediatorAgent, create_actions, create_llm

__all__ = [
    "MediatorAgent",
    "create_actions",
    "create_llm",
]
