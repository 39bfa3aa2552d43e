"""
Client package for the LAN remote file store.

This package contains all client-side functionality including:
- File store operations
- File records and display helpers
- User interface
- Configuration and utilities
"""
