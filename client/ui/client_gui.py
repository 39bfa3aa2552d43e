#!/usr/bin/env python3
"""
LAN Remote File Store - PyQt6 Client GUI

Shows the server's file list with per-file transfer progress. Each user
action runs one FileClient operation on its own worker thread; the outcome
comes back through Qt signals, which also drive the connected/disconnected
state.
"""

import asyncio
import os
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit,
    QPushButton, QTableWidget, QTableWidgetItem, QProgressBar, QTextEdit,
    QHeaderView, QFileDialog, QInputDialog
)
from PyQt6.QtCore import QThread, pyqtSignal
from PyQt6.QtGui import QColor

from common.exceptions import ConnectionLost, NotFound
from common.constants import Commands
from client.files.file_client import FileClient
from client.files.file_record import (
    ClientFileRecord, TransferStatus, StatusColor, build_rename_target
)
from client.utils.config import ClientConfig
from client.utils.logger import logger


# ============================================================================
# WORKER THREAD
# ============================================================================

class AsyncTaskWorker(QThread):
    """Worker thread for running one async file operation."""

    task_done = pyqtSignal(bool, object, object)  # success, error, result
    progress = pyqtSignal(int, int)  # bytes_transferred, total_bytes

    def __init__(self, operation: str, async_func: Callable, *args, **kwargs):
        super().__init__()
        self.operation = operation
        self.async_func = async_func
        self.args = args
        self.kwargs = kwargs
        self.on_done: Optional[Callable] = None
        self.on_progress: Optional[Callable] = None

    def report_progress(self, done: int, total: int):
        """Progress callback handed to the file client; safe from this thread."""
        self.progress.emit(done, total)

    def run(self):
        """Run the async task in this thread's event loop."""
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)

        try:
            result = loop.run_until_complete(self.async_func(*self.args, **self.kwargs))
            self.task_done.emit(True, None, result)
        except Exception as e:
            self.task_done.emit(False, e, None)
        finally:
            loop.close()


# ============================================================================
# FILE TABLE
# ============================================================================

class FileTable(QTableWidget):
    """Table of file records with per-row actions."""

    download_requested = pyqtSignal(object)  # ClientFileRecord
    rename_requested = pyqtSignal(object)
    delete_requested = pyqtSignal(object)

    COLUMNS = ['', 'Name', 'Path', 'Size', 'Status', 'Progress', 'Actions']

    def __init__(self):
        super().__init__(0, len(self.COLUMNS))
        self.records: List[ClientFileRecord] = []
        self._unsubscribers: List[Callable[[], None]] = []
        self.setHorizontalHeaderLabels(self.COLUMNS)
        self.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self.verticalHeader().setVisible(False)
        self.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)

    def set_records(self, records: List[ClientFileRecord]):
        """Replace every row."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self.records = []
        self.setRowCount(0)
        for record in records:
            self.add_record(record)

    def add_record(self, record: ClientFileRecord):
        """Append a row bound to `record`."""
        row = self.rowCount()
        self.insertRow(row)
        self.records.append(record)

        self.setItem(row, 0, QTableWidgetItem(record.icon))
        self.setItem(row, 1, QTableWidgetItem(record.name))
        self.setItem(row, 2, QTableWidgetItem(record.path))
        self.setItem(row, 3, QTableWidgetItem(record.size_text))
        self.setItem(row, 4, QTableWidgetItem(record.status))

        bar = QProgressBar()
        bar.setRange(0, 100)
        bar.setValue(record.progress)
        self.setCellWidget(row, 5, bar)

        actions = QWidget()
        layout = QHBoxLayout(actions)
        layout.setContentsMargins(0, 0, 0, 0)
        for label, signal in (("Download", self.download_requested),
                              ("Rename", self.rename_requested),
                              ("Delete", self.delete_requested)):
            button = QPushButton(label)
            button.clicked.connect(lambda _checked=False, s=signal, r=record: s.emit(r))
            layout.addWidget(button)
        self.setCellWidget(row, 6, actions)

        self._apply_color(row, record.color)
        self._unsubscribers.append(record.subscribe(self._on_record_changed))

    def _on_record_changed(self, record: ClientFileRecord, changed: List[str]):
        if record not in self.records:
            return
        row = self.records.index(record)
        if 'status' in changed:
            self.item(row, 4).setText(record.status)
        if 'progress' in changed:
            self.cellWidget(row, 5).setValue(record.progress)
        if 'color' in changed:
            self._apply_color(row, record.color)

    def _apply_color(self, row: int, color: str):
        item = self.item(row, 4)
        if item:
            item.setForeground(QColor(color.lower()))


# ============================================================================
# MAIN WINDOW
# ============================================================================

class ClientMainWindow(QMainWindow):
    """Main window of the file store client."""

    def __init__(self, server_host: str = 'localhost', server_port: int = 9000):
        super().__init__()
        self.config = ClientConfig(server_host, server_port)
        self.file_client = FileClient(server_host, server_port, self.config.chunk_size, self.config.probe_timeout)
        self.connected = False
        self.active_workers: List[AsyncTaskWorker] = []

        self.setWindowTitle("LAN File Store")
        self.resize(900, 600)
        self.setup_ui()
        self.setup_connections()

    def setup_ui(self):
        central = QWidget()
        layout = QVBoxLayout(central)

        server_row = QHBoxLayout()
        server_row.addWidget(QLabel("Server IP:"))
        self.host_input = QLineEdit(self.config.host)
        server_row.addWidget(self.host_input)
        server_row.addWidget(QLabel("Port:"))
        self.port_input = QLineEdit(str(self.config.port))
        self.port_input.setMaximumWidth(80)
        server_row.addWidget(self.port_input)
        self.connect_button = QPushButton("CONNECT")
        server_row.addWidget(self.connect_button)
        layout.addLayout(server_row)

        action_row = QHBoxLayout()
        self.upload_button = QPushButton("Upload")
        self.refresh_button = QPushButton("Refresh")
        action_row.addWidget(self.upload_button)
        action_row.addWidget(self.refresh_button)
        action_row.addStretch()
        layout.addLayout(action_row)

        self.file_table = FileTable()
        layout.addWidget(self.file_table, stretch=3)

        self.log_view = QTextEdit()
        self.log_view.setReadOnly(True)
        layout.addWidget(self.log_view, stretch=1)

        self.setCentralWidget(central)

    def setup_connections(self):
        self.connect_button.clicked.connect(self.on_connect)
        self.upload_button.clicked.connect(self.on_upload)
        self.refresh_button.clicked.connect(self.on_refresh)
        self.file_table.download_requested.connect(self.on_download)
        self.file_table.rename_requested.connect(self.on_rename)
        self.file_table.delete_requested.connect(self.on_delete)

    # ------------------------------------------------------------------ state

    def log(self, message: str):
        """Append a timestamped line to the on-screen log."""
        self.log_view.append(f"[{datetime.now():%H:%M:%S}] {message}")
        logger.info(message)

    def set_connected(self, connected: bool, reason: str = ''):
        """Single place where the connected indicator changes."""
        self.connected = connected
        self.connect_button.setEnabled(not connected)
        self.connect_button.setText("CONNECTED" if connected else "CONNECT")
        if reason:
            self.log(reason)

    def require_connection(self) -> bool:
        if not self.connected:
            self.log("Not connected to server")
        return self.connected

    def run_operation(self, operation: str, async_func: Callable, *args,
                      on_done: Optional[Callable] = None, on_progress: Optional[Callable] = None, **kwargs):
        """Run one file client coroutine on a worker thread."""
        worker = AsyncTaskWorker(operation, async_func, *args, **kwargs)
        worker.on_done = on_done
        worker.on_progress = on_progress
        if on_progress:
            worker.kwargs['progress'] = worker.report_progress
            worker.progress.connect(self._on_task_progress)
        worker.task_done.connect(self._on_task_done)
        self.active_workers.append(worker)
        worker.start()
        return worker

    def _on_task_progress(self, done: int, total: int):
        worker = self.sender()
        if worker is not None and worker.on_progress:
            worker.on_progress(done, total)

    def _on_task_done(self, success: bool, error, result):
        """Handle a worker's outcome on the GUI thread."""
        worker = self.sender()
        if worker in self.active_workers:
            self.active_workers.remove(worker)
        worker.wait()
        worker.deleteLater()

        if not success and isinstance(error, ConnectionLost):
            self.set_connected(False, str(error))
        elif not success and not isinstance(error, NotFound):
            self.log(f"{worker.operation} failed: {error}")

        if worker.on_done:
            worker.on_done(success, error, result)

    # ------------------------------------------------------------- operations

    def on_connect(self):
        host = self.host_input.text().strip()
        try:
            port = int(self.port_input.text())
        except ValueError:
            self.log(f"Invalid port: {self.port_input.text()}")
            return

        self.config.update_server(host, port)
        self.file_client.set_server(host, port)
        self.connect_button.setEnabled(False)
        self.connect_button.setText("CONNECTING...")

        def done(success, error, reachable):
            if success and reachable:
                self.set_connected(True, "Connected to server")
                self.on_refresh()
            else:
                self.set_connected(False, "Could not connect to server")

        self.run_operation("CONNECT", self.file_client.probe, on_done=done)

    def on_refresh(self):
        if not self.require_connection():
            return

        def done(success, error, entries):
            if not success:
                return
            active = {r.path: r for r in self.file_table.records
                      if r.status in (TransferStatus.UPLOADING, TransferStatus.DOWNLOADING)}
            records = [active.pop(entry.path, None) or ClientFileRecord.from_entry(entry) for entry in entries]
            self.file_table.set_records(records + list(active.values()))

        self.run_operation(Commands.LIST, self.file_client.list_files, on_done=done)

    def on_upload(self):
        if not self.require_connection():
            return

        local_path, _ = QFileDialog.getOpenFileName(self, "Upload File")
        if not local_path:
            return

        remote_path = os.path.basename(local_path)
        record = ClientFileRecord.for_upload(remote_path, Path(local_path).stat().st_size)
        self.file_table.add_record(record)

        def done(success, error, sent):
            if success:
                record.update(status=TransferStatus.UPLOADED, color=StatusColor.DONE, progress=100)
                self.log(f"Uploaded: {remote_path} ({sent} bytes)")
                self.on_refresh()
            else:
                record.update(status=TransferStatus.FAILED, color=StatusColor.FAILED)

        self.run_operation(Commands.UPLOAD, self.file_client.upload_file, local_path, remote_path,
                           on_done=done, on_progress=record.set_progress)

    def on_download(self, record: ClientFileRecord):
        if not self.require_connection():
            return

        save_path, _ = QFileDialog.getSaveFileName(self, "Save File", record.name)
        if not save_path:
            return

        record.update(status=TransferStatus.DOWNLOADING, color=StatusColor.ACTIVE, progress=0)

        def done(success, error, received):
            if success:
                record.update(status=TransferStatus.DOWNLOADED, color=StatusColor.DONE, progress=100)
                self.log(f"Downloaded: {record.path} -> {save_path}")
            else:
                record.update(status=TransferStatus.FAILED, color=StatusColor.FAILED)
                if isinstance(error, NotFound):
                    self.log(f"File no longer on server: {record.path}")

        self.run_operation(Commands.DOWNLOAD, self.file_client.download_file, record.path, save_path,
                           on_done=done, on_progress=record.set_progress)

    def on_delete(self, record: ClientFileRecord):
        if not self.require_connection():
            return

        def done(success, error, result):
            if success:
                self.log(f"Deleted: {record.path}")
                self.on_refresh()

        self.run_operation(Commands.DELETE, self.file_client.delete_file, record.path, on_done=done)

    def on_rename(self, record: ClientFileRecord):
        if not self.require_connection():
            return

        new_name, ok = QInputDialog.getText(self, "Rename file", "New name:", QLineEdit.EchoMode.Normal, record.name)
        new_path = build_rename_target(record.path, new_name) if ok else None
        if not new_path:
            return

        def done(success, error, result):
            if success:
                self.log(f"Rename: {record.path} → {new_path}")
                self.on_refresh()

        self.run_operation(Commands.RENAME, self.file_client.rename_file, record.path, new_path, on_done=done)

    def closeEvent(self, event):
        """Give running transfers a moment, then stop their threads."""
        for worker in list(self.active_workers):
            if not worker.wait(3000):
                logger.warning(f"{worker.operation} still running at exit, terminating")
                worker.terminate()
                worker.wait(1000)
        super().closeEvent(event)
