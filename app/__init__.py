"""
FastAPI Application Package

HTTP entry point for triggering scrapes and reading the resulting registries.
"""
