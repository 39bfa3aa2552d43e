"""
Client-side file records.

A ClientFileRecord is the row the presentation layer shows for one stored or
in-transfer file. The operation driver updates it; views subscribe to it.
"""

import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from common.protocol_definitions import FileEntry


class TransferStatus:
    STORED = '✅'
    UPLOADING = 'Uploading...'
    UPLOADED = 'Uploaded'
    DOWNLOADING = 'Downloading...'
    DOWNLOADED = 'Downloaded'
    FAILED = 'Failed'


class StatusColor:
    IDLE = 'Gray'
    STORED = 'Blue'
    ACTIVE = 'Orange'
    DONE = 'Green'
    FAILED = 'Red'


RecordListener = Callable[['ClientFileRecord', List[str]], None]


def format_size(size: int) -> str:
    """Human readable size text: B below 1 KB, whole KB below 1 MB, else whole MB."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size // 1024} KB"
    return f"{size // 1024 // 1024} MB"


def icon_for(name: str) -> str:
    """Pick a display icon from the file extension."""
    ext = os.path.splitext(name)[1].lower()
    if 'png' in ext or 'jpg' in ext:
        return '🖼'
    if 'zip' in ext or 'rar' in ext:
        return '📦'
    return '📄'


def progress_percent(done: int, total: int) -> int:
    """floor(done * 100 / total); an empty transfer counts as complete."""
    if total <= 0:
        return 100
    return done * 100 // total


def build_rename_target(old_path: str, new_name: str) -> Optional[str]:
    """
    Build the new wire path for renaming `old_path` to `new_name`.

    The folder of the old path is kept. A name typed without an extension
    keeps the old one. Returns None for a blank name.
    """
    new_name = (new_name or '').strip()
    if not new_name:
        return None

    folder, old_name = old_path.rpartition('/')[::2]
    if not os.path.splitext(new_name)[1]:
        new_name += os.path.splitext(old_name)[1]

    return f"{folder}/{new_name}" if folder else new_name


@dataclass
class ClientFileRecord:
    """Observable row for one file."""
    path: str
    name: str = ''
    size_text: str = ''
    icon: str = '📄'
    status: str = ''
    color: str = StatusColor.IDLE
    progress: int = 0
    _listeners: List[RecordListener] = field(default_factory=list, repr=False, compare=False)

    def __post_init__(self):
        if not self.name:
            self.name = self.path.rpartition('/')[2]

    @classmethod
    def from_entry(cls, entry: FileEntry) -> 'ClientFileRecord':
        """Record for a file reported by LIST."""
        name = entry.path.rpartition('/')[2]
        return cls(
            path=entry.path,
            name=name,
            size_text=format_size(entry.size),
            icon=icon_for(name),
            status=TransferStatus.STORED,
            color=StatusColor.STORED,
            progress=100
        )

    @classmethod
    def for_upload(cls, remote_path: str, size: int) -> 'ClientFileRecord':
        """Record for a file about to be uploaded."""
        name = remote_path.rpartition('/')[2]
        return cls(
            path=remote_path,
            name=name,
            size_text=format_size(size),
            icon=icon_for(name),
            status=TransferStatus.UPLOADING,
            color=StatusColor.ACTIVE,
            progress=0
        )

    def subscribe(self, listener: RecordListener) -> Callable[[], None]:
        """Register a change listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **changes):
        """Apply field changes and notify listeners of the ones that differ."""
        changed = []
        for name, value in changes.items():
            if name.startswith('_') or not hasattr(self, name):
                raise AttributeError(f"Unknown record field: {name}")
            if getattr(self, name) != value:
                setattr(self, name, value)
                changed.append(name)

        if changed:
            for listener in list(self._listeners):
                listener(self, changed)
        return changed

    def set_progress(self, done: int, total: int):
        """Progress callback adapter for the operation driver."""
        self.update(progress=progress_percent(done, total))
