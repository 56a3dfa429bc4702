"""
Configuration loader for the storefront service
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from storefront.auth.admin import ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD
from storefront.catalog.models import DEFAULT_PRICE, PLACEHOLDER_IMAGE

logger = logging.getLogger(__name__)


class AppConfig(BaseModel):
    """HTTP application settings"""

    title: str = "Storefront Catalog API"
    version: str = "1.0.0"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


class CatalogConfig(BaseModel):
    """Catalog store defaults"""

    seed_default_catalog: bool = True
    default_price: str = DEFAULT_PRICE
    placeholder_image: str = PLACEHOLDER_IMAGE


class AdminConfig(BaseModel):
    username: str = ADMIN_USERNAME
    default_password: str = DEFAULT_ADMIN_PASSWORD


class LiveUpdatesConfig(BaseModel):
    """Push channel settings shared by the server endpoint and viewer sessions"""

    path: str = "/ws"
    max_queue_size: int = Field(default=100, ge=1, le=100000)
    reconnect_delay_seconds: float = Field(default=3.0, ge=0.0)


class StorefrontConfig(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    admin: AdminConfig = Field(default_factory=AdminConfig)
    live_updates: LiveUpdatesConfig = Field(default_factory=LiveUpdatesConfig)


def _default_config_path() -> Path:
    env_path = os.getenv("STOREFRONT_CONFIG")
    if env_path:
        return Path(env_path)
    return Path(__file__).parent.parent.parent / "config" / "storefront_config.yml"


def _apply_env_overrides(cfg: StorefrontConfig) -> StorefrontConfig:
    password = os.getenv("ADMIN_DEFAULT_PASSWORD")
    if password:
        cfg.admin.default_password = password

    origins = os.getenv("CORS_ORIGINS")
    if origins:
        cfg.app.cors_origins = [o.strip() for o in origins.split(",") if o.strip()]

    log_level = os.getenv("LOG_LEVEL")
    if log_level:
        cfg.app.log_level = log_level.strip().upper()
    return cfg


def load_storefront_config(config_path: Optional[Path] = None) -> StorefrontConfig:
    """
    Load and validate the storefront configuration.

    Args:
        config_path: Path to config file. Defaults to $STOREFRONT_CONFIG or
            config/storefront_config.yml

    Returns:
        Validated StorefrontConfig with environment overrides applied

    Raises:
        ValidationError: If the file doesn't match the schema
    """
    if config_path is None:
        config_path = _default_config_path()

    if not config_path.exists():
        logger.warning("Storefront config not found at %s; using defaults", config_path)
        return _apply_env_overrides(StorefrontConfig())

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        cfg = StorefrontConfig(**data)
    except ValidationError as e:
        logger.error("Storefront config validation failed: %s", e)
        raise

    logger.info("Loaded storefront config from %s", config_path)
    return _apply_env_overrides(cfg)
