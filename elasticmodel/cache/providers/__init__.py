from .memory import Memory
from .redis import Redis

__all__ = ["Memory", "Redis"]
