"""
Quote App Test Suite
====================

This package contains tests for the Quote App including:
- Unit tests for individual components
- Integration tests for the HTTP API end to end
"""
