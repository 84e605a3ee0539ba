"""Synchronize WooCommerce stock levels from supplier product pages."""

__version__ = "0.1.0"
