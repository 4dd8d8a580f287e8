import logging
from functools import lru_cache

from dotenv import load_dotenv

from src.integrations.clients.mocks.woocommerce import MockWooCommerceClient
from src.integrations.clients.real_http.woocommerce import WooCommerceClient
from src.integrations.contracts.commerce import CommerceClient
from src.utils.config_loader import ProxyConfig, load_proxy_config

load_dotenv()

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_proxy_config() -> ProxyConfig:
    return load_proxy_config()


@lru_cache(maxsize=1)
def _mock_client() -> MockWooCommerceClient:
    """Process-wide mock store. Its ``orders`` and ``calls`` lists grow until restart; dev only."""
    return MockWooCommerceClient()


def get_commerce_client() -> CommerceClient:
    """Select the mock or real commerce client. The ONLY place this choice is made."""
    cfg = get_proxy_config()
    if cfg.use_real_integrations():
        return WooCommerceClient(
            base_url=cfg.upstream.api_url,
            consumer_key=cfg.upstream.consumer_key,
            consumer_secret=cfg.upstream.consumer_secret,
            timeout_seconds=cfg.upstream.timeout_seconds,
        )
    return _mock_client()
