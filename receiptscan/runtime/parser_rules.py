"""Runtime loader for receipt parser rules."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from receiptscan.receipt.parser_rules import ParserRulesError, ReceiptParserRules, build_receipt_parser_rules
from receiptscan.runtime.logging import get_logger
from receiptscan.runtime.paths import get_paths

logger = get_logger(__name__)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        return {}

    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ParserRulesError(f"Invalid TOML in {path}: {e}") from e
    return data if isinstance(data, dict) else {}


@lru_cache(maxsize=8)
def load_receipt_parser_rules(rule_paths: tuple[str, ...] | None = None) -> ReceiptParserRules:
    """Load parser rules from runtime-configured files into one frozen rules value.

    Args:
        rule_paths: Optional TOML paths, lowest priority first. If None, uses the
            packaged defaults followed by the project's config/parser_rules.toml.

    Returns:
        Rules built from the built-in tables with every file layered on top.
    """
    p = get_paths()

    if rule_paths is None:
        seen_paths: set[Path] = set()
        rule_files: list[Path] = []
        for candidate in (p.default_parser_rules, p.parser_rules):
            resolved = candidate.resolve()
            if resolved in seen_paths:
                continue
            seen_paths.add(resolved)
            rule_files.append(candidate)
    else:
        rule_files = [Path(path) for path in rule_paths]

    configs = []
    for path in rule_files:
        config = _load_toml(path)
        if config:
            logger.debug("Loaded parser rules from %s", path)
        configs.append(config)

    try:
        return build_receipt_parser_rules(configs)
    except ParserRulesError as e:
        raise ParserRulesError(f"{e} (in {', '.join(str(f) for f in rule_files)})") from e
