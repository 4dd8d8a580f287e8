"""
Utility modules for the storefront proxy
"""
from .config_loader import ProxyConfig, load_proxy_config
from .text import strip_html

__all__ = [
    'ProxyConfig',
    'load_proxy_config',
    'strip_html',
]
