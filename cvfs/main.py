#!/usr/bin/env python3
"""
CVFS - Customized Virtual File System

Main entry point.

Usage:
    cvfs [config.json]

Author: YSNRFD
Version: 1.0.0
"""

import sys
from typing import List, Optional

from cvfs.core.config_loader import ConfigLoader
from cvfs.exceptions import ConfigException
from cvfs.filesystem.vfs import FileSystem
from cvfs.logger import Logger, LogLevel
from cvfs.shell.shell import Shell


def boot(config_path: Optional[str] = None) -> FileSystem:
    """
    Load configuration, set up logging and build a file system.

    Boot sequence:
    1. Load configuration
    2. Initialize logging
    3. Create and initialize the file system
    """
    loader = ConfigLoader()
    if config_path:
        loader.load(config_path)
    config = loader.config

    Logger.initialize(
        level=LogLevel.from_name(config.logging.level),
        log_file=config.logging.log_file,
        console_output=config.logging.console_output,
    )

    filesystem = FileSystem()
    filesystem.initialize()
    filesystem.start()
    return filesystem


def main(argv: Optional[List[str]] = None) -> int:
    """Boot the file system and run the shell until exit."""
    args = sys.argv[1:] if argv is None else argv
    config_path = args[0] if args else None

    try:
        filesystem = boot(config_path)
    except ConfigException as e:
        print(f"Boot failed: {e}", file=sys.stderr)
        return 1

    shell = Shell(filesystem)

    try:
        shell.run()
    except KeyboardInterrupt:
        print("\n\nInterrupted")
    finally:
        filesystem.cleanup()
        filesystem.stop()

    return 0


if __name__ == '__main__':
    sys.exit(main())
