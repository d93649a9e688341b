"""
Application Layer

Orchestrates the cart: snapshot encoding, the in-memory store, the cart
service that keeps storage in sync, and the facade exposed to callers.
"""
