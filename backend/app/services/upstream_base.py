"""
Copenhagen Beaches Proxy — Abstract Beach Data Source
======================================================

What:  Abstract base class defining the contract for beach dataset providers.
Why:   BeachService depends on this interface, not on httpx, so tests can hand
       it a fake source and a second provider could be added without touching
       the filter/projection logic.
How:   Concrete implementations inherit from BeachDataSource and implement
       fetch_beaches().
Who:   Called by BeachService once per GET request.
"""

from abc import ABC, abstractmethod
from typing import List

from app.schemas.beach import UpstreamBeachRecord


class BeachDataSource(ABC):
    """
    Abstract interface for a provider of raw beach records.

    Contract:
        - fetch_beaches() makes exactly one upstream attempt (no retries)
        - Implementation-specific errors are translated into UpstreamError
          subclasses before they leave the provider
        - Records are returned in upstream order
    """

    @abstractmethod
    async def fetch_beaches(self) -> List[UpstreamBeachRecord]:
        """
        Fetch the full, unfiltered beach dataset.

        Returns:
            Every record the upstream published, in its original order.

        Raises:
            UpstreamNetworkError: Connection failure or timeout.
            UpstreamStatusError:  Upstream answered with a non-2xx status.
            UpstreamParseError:   Body is not a JSON array of objects.
        """
        ...

    @property
    @abstractmethod
    def host(self) -> str:
        """Host name of the upstream, for logs and the health endpoint."""
        ...
