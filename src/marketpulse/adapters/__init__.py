"""
Adapters Layer - External Interfaces

This package contains the adapters for external systems:
- Upstream (single HTTP JSON client)
- Providers (one decoder per public data source)
"""

__all__ = []
