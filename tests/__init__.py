"""
Test Suite

Contains unit tests for the scraper.

Structure:
- tests/unit/: Tests for individual components (ranking, classification,
  registries, resolution, ingestion, exchange backends, API)

Upstream HTTP calls are always mocked. Uses pytest with pytest-asyncio for
testing async functionality.
"""
