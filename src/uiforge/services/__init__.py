"""
Services Package

This package contains the service layer:
- Completion client for the hosted chat-completion endpoint
- Generation service (prompt orchestration with fallbacks)
- User store, authentication and Google OAuth services
"""

from .completion_client import AzureChatCompletionClient, CompletionError, CompletionHTTPError
from .generation_service import GenerationService
from .user_store import InMemoryUserStore, SQLAlchemyUserStore, UserStore

__all__ = [
    'AzureChatCompletionClient',
    'CompletionError',
    'CompletionHTTPError',
    'GenerationService',
    'UserStore',
    'SQLAlchemyUserStore',
    'InMemoryUserStore',
]
