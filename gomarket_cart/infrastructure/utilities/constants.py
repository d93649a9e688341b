"""
Application constants for the GoMarket cart

Centralizes storage keys, codec versions and logging limits.
"""

from typing import Final


class StorageSettings:
    """Persistence keys and backends"""

    PRODUCTS_KEY: Final[str] = "@GoMarketplace:products"
    MEMORY_BACKEND: Final[str] = "memory"
    SQLALCHEMY_BACKEND: Final[str] = "sqlalchemy"
    DEFAULT_DATABASE_URL: Final[str] = "sqlite:///data/gomarket_cart.db"
    TABLE_NAME: Final[str] = "cart_storage"
    MAX_KEY_LENGTH: Final[int] = 255


class SnapshotSettings:
    """Snapshot codec versions"""

    CURRENT_VERSION: Final[int] = 1
    # Bare JSON arrays written before snapshots carried a version
    LEGACY_VERSION: Final[int] = 0


class LoggingSettings:
    """Logging file sizes and rotation settings"""

    MAX_LOG_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MB
    MAIN_LOG_BACKUP_COUNT: Final[int] = 10
    JSON_LOG_BACKUP_COUNT: Final[int] = 5
    MAIN_LOG_FILE: Final[str] = "gomarket_cart.log"
    JSON_LOG_FILE: Final[str] = "gomarket_cart.json.log"


class PerformanceSettings:
    """Performance thresholds"""

    SLOW_WRITE_THRESHOLD_MS: Final[int] = 500
