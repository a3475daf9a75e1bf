"""Runtime infrastructure for receiptscan.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Parser rules loading via load_receipt_parser_rules()
- The remote correction client via request_remote_correction() and its async twin

Usage:
    from receiptscan.runtime import get_logger, load_receipt_parser_rules

    logger = get_logger(__name__)
    rules = load_receipt_parser_rules()
"""

from receiptscan.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from receiptscan.runtime.parser_rules import load_receipt_parser_rules
from receiptscan.runtime.paths import (
    ProjectPaths,
    get_paths,
    reset_paths,
)
from receiptscan.runtime.remote_correction import (
    RemoteCorrectionUnavailable,
    request_remote_correction,
    request_remote_correction_async,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Rules
    "load_receipt_parser_rules",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
    # Remote correction
    "RemoteCorrectionUnavailable",
    "request_remote_correction",
    "request_remote_correction_async",
]
