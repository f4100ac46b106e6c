"""
API module for the quote service.
Provides the FastAPI-based REST API over the quote catalog.
"""

__all__ = ['app', 'routes', 'models', 'middleware']
