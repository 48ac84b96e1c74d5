from .memory import MemoryClient
from .search import SearchClient
from .user import UserClient


__all__ = ["MemoryClient", "SearchClient", "UserClient"]
