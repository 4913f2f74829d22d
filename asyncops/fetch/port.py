"""
FetchPort protocol.

A port treats identifiers as opaque, never retries, and surfaces a failed
unit of work as a single fault.
"""

from typing import Optional, Protocol, runtime_checkable

from asyncops.async_infrastructure.cancellation import CancellationToken
from asyncops.models import WorkResult


@runtime_checkable
class FetchPort(Protocol):
    """Performs one unit of work for an identifier."""

    def fetch(self, identifier: str) -> WorkResult:
        """Blocking form."""
        ...

    async def fetch_async(
        self, identifier: str, token: Optional[CancellationToken] = None
    ) -> WorkResult:
        """Cancellable async form."""
        ...
