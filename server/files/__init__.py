"""
File session module for server-side file operations.

Handles:
- Listing the storage root
- Receiving uploads
- Streaming downloads
- Deleting and renaming stored files
"""
