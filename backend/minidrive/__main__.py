"""Command line entry point: ``python -m minidrive [--config PATH]``."""
import argparse
from pathlib import Path

import uvicorn

from minidrive.config import SETTINGS_FILE, load_config
from minidrive.main import create_app


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the MiniDrive file-sharing server.")
    parser.add_argument(
        "--config",
        type=Path,
        default=SETTINGS_FILE,
        help=f"settings YAML file (default: {SETTINGS_FILE})",
    )
    args = parser.parse_args()

    config = load_config(settings_path=args.config)
    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level,
    )


if __name__ == "__main__":
    main()
