from .http import HttpDataTransport
from .memory import InMemoryDataTransport, QueryCall

__all__ = [
    "HttpDataTransport",
    "InMemoryDataTransport",
    "QueryCall",
]
