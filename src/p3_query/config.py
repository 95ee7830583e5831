"""Engine and transport configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import InvalidSpecificationError

DEFAULT_API_URL = "https://www.bv-brc.org/api"

# Largest key batch the data API accepts in a single in() clause.
MAX_BATCH_SIZE = 200


@dataclass(frozen=True)
class TransportConfig:
    """Configuration for the HTTP data transport.

    Attributes:
        base_url: Root URL of the data API.
        timeout: Per-request timeout in seconds.
        page_size: Records requested per page.
        verify: Verify SSL certificates.
        user_agent: ``User-Agent`` header sent with every request.
    """

    base_url: str = DEFAULT_API_URL
    timeout: float = 60.0
    page_size: int = 25000
    verify: bool = True
    user_agent: str = "p3-query/0.1.0"


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for the query engine.

    Attributes:
        batch_size: Keys per chunk for keyed fetches and related-field
            look-ups.
    """

    batch_size: int = MAX_BATCH_SIZE

    def __post_init__(self) -> None:
        if not 1 <= self.batch_size <= MAX_BATCH_SIZE:
            raise InvalidSpecificationError(
                f"batch_size must be between 1 and {MAX_BATCH_SIZE}, "
                f"got {self.batch_size}",
                option="batch_size",
            )
