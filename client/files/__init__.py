"""
File operation module for the client.

Handles:
- Listing, uploading, downloading, deleting and renaming files
- File transfer progress tracking
- Observable file records for the user interface
"""
