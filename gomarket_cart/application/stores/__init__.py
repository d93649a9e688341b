"""
In-memory cart state
"""

from .cart_store import CartStore

__all__ = ["CartStore"]
