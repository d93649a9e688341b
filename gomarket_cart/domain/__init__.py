"""
Domain Layer

Cart entities, value objects and the persistence port they depend on.
"""
