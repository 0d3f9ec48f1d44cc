"""
Developer token caching.
"""

from .token_cache import TokenCache

__all__ = ["TokenCache"]
