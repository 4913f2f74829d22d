"""
Fetch ports: the injected capability that performs one unit of work.
"""

from .http import HttpFetchPort
from .port import FetchPort

__all__ = ["FetchPort", "HttpFetchPort"]
