"""
Configuration

Settings are read from environment variables (or a .env file in the working
directory) through Pydantic Settings, which also handles type conversion.

Groups:
- Osmosis data sources and ranking cap
- Chain asset list location and the networks that can be scraped
- HTTP server and logging

Usage:
    from core.config import settings

    print(settings.osmosis_pool_url)
    print(settings.networks_map)  # {"osmosis-1": "osmosis"}

validate_configuration() is run once at application startup.
"""

from typing import Dict, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Application Settings

    Values are automatically loaded from environment variables or .env file.

    Attributes:
        osmosis_pool_url: Endpoint returning the full Osmosis pool list
        osmosis_volume_url: Endpoint returning pool volumes (empty = rank by weight)
        osmosis_max_pools: Number of pools kept when ranking by volume
        asset_list_url: Chain asset list location, formatted with {chain_id}
        supported_networks: Comma-separated "chain_id:chain_name" pairs
        request_timeout: Timeout for HTTP requests in seconds
        app_host: Host address for FastAPI server
        app_port: Port number for FastAPI server
        environment: Current environment (development, production)
        debug: Enable debug mode with verbose logging
        log_level: Logging level
    """

    # ============================================
    # Osmosis Data Sources
    # ============================================

    osmosis_pool_url: str = Field(
        default="https://lcd.osmosis.zone/osmosis/gamm/v1beta1/pools?pagination.limit=1000",
        description="Osmosis LCD endpoint listing all pools"
    )

    osmosis_volume_url: str = Field(
        default="https://api-osmosis.imperator.co/fees/v1/pools",
        description="Pool volume statistics (empty string disables volume ranking)"
    )

    osmosis_max_pools: Optional[int] = Field(
        default=75,
        description="Pools kept after volume ranking (None = size of the volume dataset)"
    )

    # ============================================
    # Asset Metadata
    # ============================================

    asset_list_url: str = Field(
        default="https://raw.githubusercontent.com/osmosis-labs/assetlists/main/{chain_id}/{chain_id}.assetlist.json",
        description="Chain asset list URL template, {chain_id} is substituted"
    )

    supported_networks: str = Field(
        default="osmosis-1:osmosis",
        description="Comma-separated list of chain_id:chain_name pairs"
    )

    # ============================================
    # Application Configuration
    # ============================================

    app_host: str = Field(
        default="0.0.0.0",
        description="FastAPI server host address"
    )

    app_port: int = Field(
        default=8000,
        description="FastAPI server port"
    )

    environment: str = Field(
        default="development",
        description="Application environment (development, production)"
    )

    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    request_timeout: int = Field(
        default=30,
        description="HTTP request timeout in seconds"
    )

    # ============================================
    # Pydantic Settings Configuration
    # ============================================

    model_config = SettingsConfigDict(
        # Look for .env file in the project root
        env_file=".env",
        # Ignore extra fields in .env that aren't defined here
        extra="ignore",
        # Case-insensitive environment variable matching
        case_sensitive=False
    )

    # ============================================
    # Derived Properties
    # ============================================

    @property
    def networks_map(self) -> Dict[str, str]:
        """
        Convert the comma-separated network list into a mapping.

        Returns:
            Dict of chain id to chain name

        Example:
            >>> settings.networks_map
            {'osmosis-1': 'osmosis'}
        """
        networks = {}
        for item in self.supported_networks.split(","):
            item = item.strip()
            if not item:
                continue
            chain_id, _, chain_name = item.partition(":")
            networks[chain_id.strip()] = chain_name.strip()
        return networks

    @property
    def volume_ranking_enabled(self) -> bool:
        """True if a volume endpoint is configured."""
        return bool(self.osmosis_volume_url)


# ============================================
# Global Settings Instance
# ============================================

# Create a single instance of settings to be imported throughout the application
settings = Settings()


# ============================================
# Configuration Validation
# ============================================

def validate_configuration() -> None:
    """
    Validate critical configuration settings on application startup.

    Raises:
        ValueError: If required configuration is missing or invalid
    """
    # Import logger here to avoid circular import
    # (logging.py imports config.py, so we can't import at module level)
    from core.logging import logger

    urls = {"OSMOSIS_POOL_URL": settings.osmosis_pool_url}
    if settings.osmosis_volume_url:
        urls["OSMOSIS_VOLUME_URL"] = settings.osmosis_volume_url
    urls["ASSET_LIST_URL"] = settings.asset_list_url

    for key, url in urls.items():
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"{key} must be an http(s) URL, got '{url}'")

    if "{chain_id}" not in settings.asset_list_url:
        raise ValueError("ASSET_LIST_URL must contain a '{chain_id}' placeholder")

    if settings.osmosis_max_pools is not None and settings.osmosis_max_pools < 1:
        raise ValueError(f"OSMOSIS_MAX_POOLS must be at least 1, got {settings.osmosis_max_pools}")

    networks = settings.networks_map
    if not networks:
        raise ValueError("SUPPORTED_NETWORKS must contain at least one chain_id:chain_name pair")
    for chain_id, chain_name in networks.items():
        if not chain_id or not chain_name:
            raise ValueError(
                f"Invalid network entry '{chain_id}:{chain_name}'. "
                f"Expected format chain_id:chain_name"
            )

    if not (1 <= settings.app_port <= 65535):
        raise ValueError(f"APP_PORT must be between 1 and 65535, got {settings.app_port}")

    if settings.log_level.upper() not in LOG_LEVELS:
        raise ValueError(f"Invalid LOG_LEVEL '{settings.log_level}', expected one of {', '.join(LOG_LEVELS)}")

    logger.info("✓ Configuration valid")
    logger.info(f"Networks: {', '.join(f'{k} ({v})' for k, v in networks.items())}")
    logger.info(f"Osmosis pools: {settings.osmosis_pool_url}")
    logger.info(f"Pool ranking: {'volume' if settings.volume_ranking_enabled else 'weight'}")
    logger.info(f"Server: {settings.app_host}:{settings.app_port}")
    logger.info(f"Log level: {settings.log_level.upper()}")
