"""
Configuration loader for the storefront proxy
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "proxy_config.yml"

# env var -> (section, key)
_ENV_OVERRIDES = {
    "WC_API_URL": ("upstream", "api_url"),
    "WC_CONSUMER_KEY": ("upstream", "consumer_key"),
    "WC_CONSUMER_SECRET": ("upstream", "consumer_secret"),
    "WC_TIMEOUT_SECONDS": ("upstream", "timeout_seconds"),
    "PORT": ("server", "port"),
    "INTEGRATIONS_MODE": ("integrations", "mode"),
}


class UpstreamConfig(BaseModel):
    """WooCommerce REST API connection"""

    api_url: str = ""
    consumer_key: str = ""
    consumer_secret: str = ""
    timeout_seconds: float = Field(default=20.0, gt=0, le=300)


class ShippingConfig(BaseModel):
    """Shipping zone selection"""

    catch_all_zone_name: str = "Locations not covered by your other zones"


class CatalogConfig(BaseModel):
    """Default page sizes for product listings"""

    per_page: int = Field(default=10, ge=1, le=100)
    featured_per_page: int = Field(default=6, ge=1, le=100)
    related_per_page: int = Field(default=3, ge=1, le=100)


class ServerConfig(BaseModel):
    port: int = Field(default=5000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class IntegrationsConfig(BaseModel):
    mode: str = ""


class ProxyConfig(BaseModel):
    """Complete proxy configuration"""

    upstream: UpstreamConfig = Field(default_factory=UpstreamConfig)
    shipping: ShippingConfig = Field(default_factory=ShippingConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    integrations: IntegrationsConfig = Field(default_factory=IntegrationsConfig)

    def use_real_integrations(self) -> bool:
        mode = self.integrations.mode.strip().lower()
        if mode in {"real", "live"}:
            return True
        if mode in {"mock", "test"}:
            return False
        return bool(self.upstream.api_url)


def load_proxy_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ProxyConfig:
    """
    Load and validate proxy configuration from YAML file plus environment overrides

    Args:
        config_path: Path to config file. Defaults to config/proxy_config.yml,
            which may be absent.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Validated ProxyConfig object

    Raises:
        FileNotFoundError: If an explicit config_path doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
        required = False
    else:
        required = True

    config_data: Dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
    elif required:
        raise FileNotFoundError(f"Config file not found: {config_path}")

    env = os.environ if environ is None else environ
    for var, (section, key) in _ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            section_data = dict(config_data.get(section) or {})
            section_data[key] = value
            config_data[section] = section_data

    try:
        config = ProxyConfig(**config_data)
        logger.info("Successfully loaded proxy config from %s", config_path if config_path.exists() else "environment")
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise
