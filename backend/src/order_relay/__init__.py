"""Order Relay - authenticated draft order relay for the Shopify Admin API."""

__version__ = "0.1.0"
