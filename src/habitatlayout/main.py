"""
Application Initialization
==========================
This module builds the store, the main window and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging from the command line flags.
2. Instantiates the Global Store (design snapshot + signals).
3. Passes the Store into the Main Window so every view reads the same state.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from habitatlayout.logging_config import setup_logging


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="habitatlayout", description="Space habitat layout editor.")
    parser.add_argument("--debug", action="store_true", help="log everything (DEBUG level)")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    # Qt/VTK imports are deferred so `--help` works without a display
    from habitatlayout.app.application import create_app
    from habitatlayout.app.state import Store
    from habitatlayout.app.ui.main_window import MainWindow

    # 2. Create the Qt Application
    app = create_app([sys.argv[0]])

    # 3. Initialize the Store
    store = Store()

    # 4. Initialize the Main Window, passing the store
    window = MainWindow(store)
    window.show()

    # 5. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
