from .base import Base
from .context import RepositoryContext
from .session import create_engine_from_settings, create_session_factory

__all__ = [
    "Base",
    "RepositoryContext",
    "create_engine_from_settings",
    "create_session_factory",
]
