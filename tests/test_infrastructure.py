"""
Tests for configuration, logging, wiring and error types
"""

import json
import logging
import logging.handlers
import os
from unittest.mock import patch

import pytest
import structlog
from pydantic import ValidationError

from gomarket_cart.application.cart_api import CartAPI
from gomarket_cart.infrastructure.configuration.config import (
    Settings,
    get_config,
    reset_config,
)
from gomarket_cart.infrastructure.container.dependency_injection import (
    DependencyContainer,
)
from gomarket_cart.infrastructure.logging.logger_config import (
    LoggingConfigOptions,
    OperationTimer,
    get_structured_logger,
    setup_logging,
)
from gomarket_cart.infrastructure.persistence.in_memory_gateway import (
    InMemoryPersistenceGateway,
)
from gomarket_cart.infrastructure.persistence.sqlalchemy_gateway import (
    SQLAlchemyPersistenceGateway,
)
from gomarket_cart.infrastructure.utilities.exceptions import (
    CartError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)


class TestSettings:
    """Test Settings model"""

    def test_settings_default_values(self):
        settings = Settings()
        assert settings.storage_key == "@GoMarketplace:products"
        assert settings.storage_backend == "memory"
        assert settings.environment == "test"
        assert settings.log_level == "DEBUG"

    def test_settings_custom_values(self):
        with patch.dict(os.environ, {
            'GOMARKET_CART_STORAGE_KEY': '@Shop:cart',
            'GOMARKET_CART_STORAGE_BACKEND': 'sqlalchemy',
            'GOMARKET_CART_DATABASE_URL': 'sqlite:///:memory:',
            'GOMARKET_CART_LOG_LEVEL': 'warning',
        }):
            settings = Settings()
            assert settings.storage_key == '@Shop:cart'
            assert settings.storage_backend == 'sqlalchemy'
            assert settings.database_url == 'sqlite:///:memory:'
            assert settings.log_level == 'WARNING'

    def test_settings_validation_error(self):
        with pytest.raises(ValidationError):
            Settings(storage_backend="redis")
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")
        with pytest.raises(ValidationError):
            Settings(storage_key="")

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reset_config(self):
        first = get_config()
        reset_config()
        assert get_config() is not first


class TestDependencyContainer:
    """Test dependency wiring"""

    def test_default_memory_backend(self):
        container = DependencyContainer()
        assert isinstance(container.get_gateway(), InMemoryPersistenceGateway)
        assert isinstance(container.get_cart_api(), CartAPI)
        assert container.get_cart_service().storage_key == "@GoMarketplace:products"

    def test_injected_gateway(self):
        gateway = InMemoryPersistenceGateway()
        container = DependencyContainer(gateway=gateway)
        assert container.get_gateway() is gateway

    def test_containers_do_not_share_state(self):
        first = DependencyContainer()
        second = DependencyContainer()
        assert first.get_cart_store() is not second.get_cart_store()
        assert first.get_cart_api() is not second.get_cart_api()

    @pytest.mark.asyncio
    async def test_sqlalchemy_backend(self, shoe):
        settings = Settings(
            storage_backend="sqlalchemy",
            database_url="sqlite:///:memory:",
            storage_key="@Test:products",
        )
        container = DependencyContainer(settings=settings)
        gateway = container.get_gateway()
        assert isinstance(gateway, SQLAlchemyPersistenceGateway)

        async with container.get_cart_api() as api:
            await api.add_to_cart(shoe)

        stored = json.loads(await gateway.get("@Test:products"))
        assert stored["items"][0]["id"] == "1"
        gateway.dispose()


class TestLogging:
    """Test logging setup"""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
                if isinstance(handler, logging.handlers.RotatingFileHandler):
                    handler.close()
        root.setLevel(level)
        structlog.reset_defaults()

    def test_setup_logging_writes_files(self, tmp_path):
        options = LoggingConfigOptions(log_level="INFO", log_dir=str(tmp_path), enable_console=False)
        setup_logging(options)

        logging.getLogger("cart-test").info("hello", extra={"storage_key": "k"})
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello" in (tmp_path / "gomarket_cart.log").read_text(encoding="utf-8")
        json_line = (tmp_path / "gomarket_cart.json.log").read_text(encoding="utf-8").splitlines()[-1]
        record = json.loads(json_line)
        assert record["message"] == "hello"
        assert record["storage_key"] == "k"
        assert record["level"] == "INFO"

    def test_console_only(self, tmp_path):
        options = LoggingConfigOptions(
            log_dir=str(tmp_path / "unused"), enable_file=False, enable_json=False
        )
        setup_logging(options)
        assert len(logging.getLogger().handlers) == 1
        assert not (tmp_path / "unused").exists()

    def test_get_structured_logger(self):
        assert get_structured_logger("cart") is not None

    def test_operation_timer_records_duration(self, caplog):
        logger = logging.getLogger("timer-test")
        with caplog.at_level(logging.DEBUG, logger="timer-test"):
            with OperationTimer("persist_cart", logger) as timer:
                pass
        assert timer.duration_ms >= 0
        assert "persist_cart" in caplog.text

    def test_operation_timer_logs_failure(self, caplog):
        logger = logging.getLogger("timer-test")
        with caplog.at_level(logging.DEBUG, logger="timer-test"):
            with pytest.raises(RuntimeError):
                with OperationTimer("persist_cart", logger):
                    raise RuntimeError("boom")
        assert "Failed operation" in caplog.text


class TestExceptions:
    """Test the error hierarchy"""

    def test_storage_errors(self):
        read_error = StorageReadError("key", "offline")
        write_error = StorageWriteError("key")

        assert isinstance(read_error, StorageError)
        assert isinstance(write_error, CartError)
        assert write_error.key == "key"
        assert "write rejected" in str(write_error)
        assert read_error.error_code == "STORAGE_READ_ERROR"
        assert write_error.user_message
