"""
Core Package

Contains the exchange-agnostic ingestion logic including:
- ExchangeInterface: Abstract base class defining the contract for all DEX backends
- ExchangeManager: Central coordinator that runs backends against a network
- PoolRanker, determine_pool_type, AssetResolver, PoolIngestor: the pipeline stages
- Registries and Pydantic schemas for pools, assets and contracts
"""
