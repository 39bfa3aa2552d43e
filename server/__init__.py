"""
Server package for the LAN remote file store.

This package contains all server-side functionality including:
- Connection acceptance
- Per-connection command sessions
- Configuration and utilities
"""
