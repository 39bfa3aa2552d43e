#!/usr/bin/env python3
"""
Command-line file store client.

Runs a single operation against the server and prints the outcome. Used by
`main_client.py --cli`.
"""

import asyncio
import os
from typing import List

from client.files.file_client import FileClient
from client.files.file_record import format_size, progress_percent
from client.utils.config import ClientConfig
from client.utils.logger import logger
from common.exceptions import CloudStoreError

USAGE = """Commands:
  list
  upload LOCAL_PATH [REMOTE_PATH]
  download REMOTE_PATH [SAVE_PATH]
  delete REMOTE_PATH
  rename OLD_PATH NEW_PATH"""


def show_progress(done: int, total: int):
    print(f"\r{progress_percent(done, total):3d}% ({done}/{total} bytes)", end='', flush=True)


async def run_command(client: FileClient, config: ClientConfig, command: str, args: List[str]) -> int:
    """Run one command; returns the process exit status."""
    if command == 'list':
        for entry in await client.list_files():
            print(f"{entry.path}\t{format_size(entry.size)}")
    elif command == 'upload' and len(args) in (1, 2):
        remote_path = args[1] if len(args) == 2 else None
        await client.upload_file(args[0], remote_path, progress=show_progress)
        print()
    elif command == 'download' and len(args) in (1, 2):
        if len(args) == 2:
            save_path = args[1]
        else:
            save_path = os.path.join(config.download_dir, os.path.basename(args[0]))
        await client.download_file(args[0], save_path, progress=show_progress)
        print()
    elif command == 'delete' and len(args) == 1:
        await client.delete_file(args[0])
    elif command == 'rename' and len(args) == 2:
        await client.rename_file(args[0], args[1])
    else:
        print(f"[ERROR] Invalid command: {' '.join([command] + args)}")
        print(USAGE)
        return 2
    return 0


def run_cli(host: str, port: int, argv: List[str]) -> int:
    """Run the CLI client for one command line."""
    if not argv:
        print(USAGE)
        return 2

    config = ClientConfig(host, port)
    client = FileClient(config.host, config.port, config.chunk_size, config.probe_timeout)
    try:
        return asyncio.run(run_command(client, config, argv[0], argv[1:]))
    except (CloudStoreError, OSError) as e:
        print()
        logger.log_error(argv[0], e)
        return 1
    except KeyboardInterrupt:
        print("\n[INFO] Interrupted by user")
        return 1
