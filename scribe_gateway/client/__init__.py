"""
Client package for communicating with the gateway server.
"""

from .api_client import GatewayClient, extract_summary

__all__ = ["GatewayClient", "extract_summary"]
