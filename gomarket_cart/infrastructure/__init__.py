"""
Infrastructure Layer

Contains all external dependencies and implementations:
- Persistence gateway implementations
- Configuration management
- Logging infrastructure
- Dependency wiring
"""
