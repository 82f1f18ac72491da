"""Command that validates the configuration and runs the backend server."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from krillin.config import DEFAULT_CONFIG_PATH, ConfigError, check_config, load_config
from krillin.server import start_backend

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """Load and check the configuration, then serve; return the exit status."""
    parser = argparse.ArgumentParser(prog="krillin", description="Run the backend server.")
    parser.add_argument(
        "--config", default=str(DEFAULT_CONFIG_PATH), help="path of the TOML configuration"
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    config = load_config(args.config)
    try:
        check_config(config)
    except ConfigError as exc:
        logger.error("加载配置失败: %s", exc)
        return 1

    try:
        start_backend(config)
    except OSError as exc:
        logger.error("后端服务启动失败: %s", exc)
        return 1
    return 0