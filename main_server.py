#!/usr/bin/env python3
"""
LAN Remote File Store Server - Main Entry Point

Serves a storage directory over the line-based file store protocol:
- LIST / UPLOAD / DOWNLOAD / DELETE / RENAME
- One command per connection, one task per connection

Usage:
    python main_server.py

Optional arguments:
    --host HOST           Bind address (default: 0.0.0.0)
    --port PORT           TCP port (default: 9000)
    --storage-dir DIR     Storage root (default: cloud-data)
    --logs-dir DIR        Transfer audit log directory (default: logs)
"""

import asyncio
import argparse


def main():
    """Main entry point."""
    from server.main_server import StorageServer
    from server.utils.logger import logger

    # Parse command line arguments
    parser = argparse.ArgumentParser(description='LAN Remote File Store Server')
    parser.add_argument('--host', type=str, default='0.0.0.0',
                        help='Host to bind to (default: 0.0.0.0)')
    parser.add_argument('--port', type=int, default=9000,
                        help='TCP port (default: 9000)')
    parser.add_argument('--storage-dir', type=str, default='cloud-data',
                        help='Directory holding stored files (default: cloud-data)')
    parser.add_argument('--logs-dir', type=str, default='logs',
                        help='Directory for the transfer audit log (default: logs)')

    args = parser.parse_args()

    # Create and start the server
    server = StorageServer(host=args.host, port=args.port, storage_dir=args.storage_dir,
                           logs_dir=args.logs_dir)
    try:
        asyncio.run(server.serve_forever())
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    except OSError as e:
        logger.error(f"Server failed to start: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
