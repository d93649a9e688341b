"""
Custom exceptions for the GoMarket cart
"""

from typing import Optional


class CartError(Exception):
    """Base exception for the cart"""

    def __init__(self, message: str, user_message: str = None, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or "An error occurred. Please try again."
        self.error_code = error_code or "GENERAL_ERROR"


class CartConfigurationError(CartError):
    """Cart used outside its initialized lifecycle (programmer error)"""

    def __init__(self, message: str):
        super().__init__(
            message,
            "The cart is not ready yet.",
            "CONFIGURATION_ERROR",
        )


class SnapshotDecodeError(CartError):
    """Stored cart snapshot cannot be decoded into line items"""

    def __init__(self, message: str):
        super().__init__(
            message,
            "Your saved cart could not be restored.",
            "SNAPSHOT_DECODE_ERROR",
        )


class StorageError(CartError):
    """Persistence gateway errors"""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        user_message: str = None,
        error_code: str = None,
    ):
        super().__init__(
            message,
            user_message or "Sorry, there was a problem saving your cart.",
            error_code or "STORAGE_ERROR",
        )
        self.key = key


class StorageReadError(StorageError):
    """Reading the cart snapshot failed"""

    def __init__(self, key: str, reason: str = None):
        super().__init__(
            f"Failed to read cart snapshot '{key}': {reason}",
            key,
            "Sorry, your saved cart could not be loaded.",
            "STORAGE_READ_ERROR",
        )


class StorageWriteError(StorageError):
    """The persistence gateway rejected a cart snapshot write"""

    def __init__(self, key: str, reason: str = None):
        super().__init__(
            f"Failed to write cart snapshot '{key}': {reason or 'write rejected'}",
            key,
            "Your cart was updated but could not be saved. Please try again.",
            "STORAGE_WRITE_ERROR",
        )


class CartStoreError(CartError):
    """Cart store used outside a transaction"""

    def __init__(self, message: str):
        super().__init__(message, error_code="STORE_ERROR")
