"""
Configuration settings for the LTO Chain Indexer.

This module provides the configuration for the indexer: which node to follow and
from which height, how often to poll it, which storage backend to write to, and
the static trust network role definitions.

Every setting can be overridden through an environment variable. The environment
(development, production, testing) is selected with LTO_INDEXER_ENV.
"""

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("memory", "sqlite", "redis")


class Settings:
    """Indexer configuration settings"""

    # Node settings
    NODE_URL = os.getenv("LTO_NODE_URL", "https://nodes.lto.network")
    NODE_API_KEY = os.getenv("LTO_NODE_API_KEY", "")
    NODE_TIMEOUT = float(os.getenv("LTO_NODE_TIMEOUT", "30"))
    NODE_STARTING_BLOCK = os.getenv("NODE_STARTING_BLOCK", "last")  # "last" or a height

    # Monitor settings
    MONITOR_INTERVAL = int(os.getenv("MONITOR_INTERVAL", "5000"))  # milliseconds
    ANCHOR_TRANSACTION_TYPES = [12, 15]
    ANCHOR_TOKEN = "⚓"

    # Storage settings
    STORAGE_TYPE = os.getenv("STORAGE_TYPE", "sqlite")  # memory, sqlite, redis
    SQLITE_PATH = os.getenv("SQLITE_PATH", "lto-index.db")
    REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
    REDIS_DB = int(os.getenv("REDIS_DB", "0"))
    REDIS_PASSWORD = os.getenv("REDIS_PASSWORD") or None

    # Trust network settings
    TRUST_NETWORK_ROLES_FILE = os.getenv("TRUST_NETWORK_ROLES_FILE", "")
    TRUST_NETWORK_ROLES: dict[str, Any] = {}

    # API settings
    API_VERSION = "v1"
    API_HOST = os.getenv("API_HOST", "localhost")
    API_PORT = int(os.getenv("API_PORT", "8000"))

    # Logging settings
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def __init__(self):
        self._trust_network_roles: dict[str, Any] | None = None

    def get_node_starting_block(self) -> int | str:
        """Configured starting height, or "last" to start from the node's current height"""
        value = str(self.NODE_STARTING_BLOCK).strip()
        if value == "last":
            return "last"
        return int(value)

    def get_monitor_interval(self) -> int:
        """Delay between scan passes in milliseconds"""
        return int(self.MONITOR_INTERVAL)

    def get_storage_type(self) -> str:
        return str(self.STORAGE_TYPE).lower()

    def get_trust_network_roles(self) -> dict[str, Any]:
        """
        Role definition table: role name -> {"issues": [...], "authorization": [...]}.

        Loaded once from TRUST_NETWORK_ROLES_FILE, inline TRUST_NETWORK_ROLES JSON,
        or the TRUST_NETWORK_ROLES class attribute, in that order.
        """
        if self._trust_network_roles is None:
            self._trust_network_roles = self._load_trust_network_roles()
        return self._trust_network_roles

    def _load_trust_network_roles(self) -> dict[str, Any]:
        if self.TRUST_NETWORK_ROLES_FILE:
            with open(self.TRUST_NETWORK_ROLES_FILE, "r", encoding="utf-8") as f:
                roles = json.load(f)
            logger.info(f"Loaded {len(roles)} trust network roles from {self.TRUST_NETWORK_ROLES_FILE}")
            return roles

        inline = os.getenv("TRUST_NETWORK_ROLES")
        if inline:
            return json.loads(inline)

        return dict(self.TRUST_NETWORK_ROLES)

    def get_storage_config(self) -> dict[str, Any]:
        """Get storage configuration"""
        return {
            "backend": self.get_storage_type(),
            "sqlite_path": self.SQLITE_PATH,
            "redis": {
                "host": self.REDIS_HOST,
                "port": self.REDIS_PORT,
                "db": self.REDIS_DB,
                "password": self.REDIS_PASSWORD
            }
        }

    def get_node_config(self) -> dict[str, Any]:
        """Get node client configuration"""
        return {
            "url": self.NODE_URL,
            "api_key": self.NODE_API_KEY,
            "timeout": self.NODE_TIMEOUT
        }

    def get_api_config(self) -> dict[str, Any]:
        """Get API configuration"""
        return {
            "version": self.API_VERSION,
            "host": self.API_HOST,
            "port": self.API_PORT
        }

    def validate_config(self) -> list[str]:
        """Validate configuration and return list of errors"""
        errors = []

        if self.get_storage_type() not in STORAGE_BACKENDS:
            errors.append(f"STORAGE_TYPE must be one of: {', '.join(STORAGE_BACKENDS)}")

        if self.get_monitor_interval() <= 0:
            errors.append("MONITOR_INTERVAL must be positive")

        try:
            starting_block = self.get_node_starting_block()
            if starting_block != "last" and starting_block < 0:
                errors.append("NODE_STARTING_BLOCK must be 'last' or a non-negative height")
        except ValueError:
            errors.append("NODE_STARTING_BLOCK must be 'last' or a non-negative height")

        if self.API_PORT <= 0 or self.API_PORT > 65535:
            errors.append("API_PORT must be between 1 and 65535")

        return errors


# Environment-specific settings
class DevelopmentSettings(Settings):
    """Development environment settings"""
    LOG_LEVEL = "DEBUG"
    STORAGE_TYPE = os.getenv("STORAGE_TYPE", "sqlite")


class ProductionSettings(Settings):
    """Production environment settings"""
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    STORAGE_TYPE = os.getenv("STORAGE_TYPE", "redis")


class TestingSettings(Settings):
    """Testing environment settings"""
    LOG_LEVEL = "DEBUG"
    STORAGE_TYPE = "memory"
    NODE_STARTING_BLOCK = "0"
    MONITOR_INTERVAL = 10


def get_settings() -> Settings:
    """Get settings based on environment variable"""
    env = os.getenv("LTO_INDEXER_ENV", "development").lower()

    if env == "production":
        return ProductionSettings()
    elif env == "testing":
        return TestingSettings()
    else:
        return DevelopmentSettings()
