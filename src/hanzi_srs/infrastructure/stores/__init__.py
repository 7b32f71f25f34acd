# Infrastructure Progress Store Adapters Package
from .json_store import JsonProgressStore
from .memory_store import InMemoryProgressStore

__all__ = ["JsonProgressStore", "InMemoryProgressStore"]
