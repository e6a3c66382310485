"""
Shared slowapi limiter for the pricing routes.

Uses in-memory storage; with several workers each keeps its own counters.
For production with multiple workers, use Redis:
Limiter(key_func=..., storage_uri="redis://...")
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import RATE_LIMIT_ENABLED

limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)
