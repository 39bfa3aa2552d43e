#!/usr/bin/env python3
"""
LAN Remote File Store Client - Main Entry Point

Usage:
    python main_client.py [--server-ip HOST] [--port PORT] [--cli COMMAND ARGS...]

Modes:
    (default)    Launch the PyQt6 GUI
    --cli        Run one command and exit:
                   list
                   upload LOCAL_PATH [REMOTE_PATH]
                   download REMOTE_PATH [SAVE_PATH]
                   delete REMOTE_PATH
                   rename OLD_PATH NEW_PATH
"""

import sys
import argparse


def run_gui_client(server_host: str = 'localhost', server_port: int = 9000) -> int:
    """Run the GUI client."""
    from PyQt6.QtWidgets import QApplication
    from client.ui.client_gui import ClientMainWindow

    app = QApplication(sys.argv)

    # Create and show window
    window = ClientMainWindow(server_host, server_port)
    window.show()

    # Run application
    return app.exec()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description='LAN Remote File Store Client')
    parser.add_argument('--server-ip', type=str, default='localhost',
                        help='Server IP address (default: localhost)')
    parser.add_argument('--port', type=int, default=9000,
                        help='Server port (default: 9000)')
    parser.add_argument('--cli', nargs=argparse.REMAINDER, metavar='COMMAND',
                        help='Run one command instead of the GUI')

    args = parser.parse_args()

    if args.cli is not None:
        from client.main_client import run_cli
        sys.exit(run_cli(args.server_ip, args.port, args.cli))
    sys.exit(run_gui_client(args.server_ip, args.port))


if __name__ == "__main__":
    main()
