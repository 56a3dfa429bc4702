"""
Utility modules for the storefront service
"""
from .config_loader import StorefrontConfig, load_storefront_config

__all__ = [
    'StorefrontConfig',
    'load_storefront_config',
]
