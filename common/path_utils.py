"""
Path handling for client-supplied storage paths.

sanitize() is a purely textual transform and must run before any join with
the storage root. It does not resolve symbolic links.
"""

from pathlib import Path


def sanitize(raw_path: str) -> str:
    """Defang a client path: drop every '..', strip leading separators, use '/'."""
    path = raw_path.replace('..', '')
    path = path.lstrip('/\\')
    return path.replace('\\', '/')


def resolve_in_root(root: Path, raw_path: str) -> Path:
    """Join a sanitized client path to the storage root."""
    return Path(root) / sanitize(raw_path)


def relative_wire_path(root: Path, file_path: Path) -> str:
    """Path of a stored file relative to the root, with '/' separators."""
    return file_path.relative_to(root).as_posix()
