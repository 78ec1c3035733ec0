"""Persistence backends for sessions, messages and ending credits."""

from app.stores.base import ConversationStore
from app.stores.memory import InMemoryConversationStore
from app.stores.sql import SqlConversationStore

__all__ = ["ConversationStore", "InMemoryConversationStore", "SqlConversationStore"]
