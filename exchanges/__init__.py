"""
Exchange Backends Package

This package contains one subpackage per DEX backend. Each has:
- api_client.py: Fetches the backend's raw pool documents
- __init__.py: Exchange class implementing ExchangeInterface

Adding a backend means adding a subpackage and registering its class in
ExchangeManager; the ingestion pipeline stays untouched.
"""
