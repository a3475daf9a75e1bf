"""Immutable parser configuration: vocabulary, role keywords and tunables.

Everything the pipeline consults besides its input lives in one frozen
``ReceiptParserRules`` value, built once and passed into every call. The
builder only merges in-memory configs; reading TOML files is the job of
``receiptscan.runtime.parser_rules``.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from .classifier import DEFAULT_ROLE_KEYWORDS, MIN_ITEM_NAME_LENGTH, LineRole, RoleKeywords
from .dictionary import DEFAULT_VOCABULARY, DictionaryEntry, ReceiptDictionary, build_dictionary
from .token_corrector import MAX_EDIT_DISTANCE

# Trailing lines searched for a total when no line is marked as one
FALLBACK_WINDOW = 12

# Weight given to role keyword words the vocabulary does not list yet ("hst", "sub")
KEYWORD_WORD_FREQUENCY = 50

_SUMMARY_ROLES = (LineRole.TOTAL, LineRole.TAX, LineRole.SUBTOTAL)


class ParserRulesError(ValueError):
    """Raised when a parser rules config is structurally invalid."""


@dataclass(frozen=True)
class ReceiptParserRules:
    """Configuration shared by every stage of the receipt pipeline."""

    dictionary: ReceiptDictionary
    role_keywords: tuple[RoleKeywords, ...] = DEFAULT_ROLE_KEYWORDS
    min_item_name_length: int = MIN_ITEM_NAME_LENGTH
    fallback_window: int = FALLBACK_WINDOW
    max_edit_distance: int = MAX_EDIT_DISTANCE
    scale_keyword_tolerance: bool = False


def _normalize_phrases(raw: Any, where: str) -> tuple[str, ...]:
    """Normalize a keyword list from config into lower-cased, non-empty phrases."""
    if raw is None:
        return tuple()
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        raise ParserRulesError(f"{where} must be a string or a list of strings")
    phrases = [" ".join(str(v).lower().split()) for v in raw]
    return tuple(p for p in phrases if p)


def _setting(settings: Mapping[str, Any], name: str, current: int, minimum: int) -> int:
    if name not in settings:
        return current
    value = settings[name]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParserRulesError(f"settings.{name} must be an integer")
    if value < minimum:
        raise ParserRulesError(f"settings.{name} must be >= {minimum}")
    return value


def _flag(settings: Mapping[str, Any], name: str, current: bool) -> bool:
    if name not in settings:
        return current
    value = settings[name]
    if not isinstance(value, bool):
        raise ParserRulesError(f"settings.{name} must be true or false")
    return value


def _words_from_config(config: Mapping[str, Any]) -> list[DictionaryEntry]:
    words = config.get("words", [])
    if not isinstance(words, list):
        raise ParserRulesError("words must be an array of tables")
    entries: list[DictionaryEntry] = []
    for idx, raw in enumerate(words):
        if isinstance(raw, str):
            entries.append(DictionaryEntry(word=raw, frequency=1))
            continue
        if not isinstance(raw, Mapping):
            raise ParserRulesError(f"words[{idx}] must be a table or a string")
        word = str(raw.get("word", "")).strip()
        if not word:
            continue
        frequency = raw.get("frequency", 1)
        if isinstance(frequency, bool) or not isinstance(frequency, int):
            raise ParserRulesError(f"words[{idx}].frequency must be an integer")
        entries.append(DictionaryEntry(word=word, frequency=frequency))
    return entries


def _keyword_vocabulary(role_keywords: Sequence[RoleKeywords], dictionary: ReceiptDictionary) -> list[DictionaryEntry]:
    """Words of role keywords and exclusions that the vocabulary lacks.

    Without them the normalizer would snap "HST" to "HAM" or "SUB" to "DUE"
    before the classifier ever sees the line.
    """
    missing: dict[str, DictionaryEntry] = {}
    for entry in role_keywords:
        for phrase in entry.keywords + entry.exclude:
            for word in phrase.split():
                if word.isalpha() and word not in dictionary and word not in missing:
                    missing[word] = DictionaryEntry(word=word, frequency=KEYWORD_WORD_FREQUENCY)
    return list(missing.values())


def build_receipt_parser_rules(configs: Sequence[Mapping[str, Any]] | None = None) -> ReceiptParserRules:
    """Layer in-memory configs over the built-in vocabulary and keyword table.

    Later configs win: words extend the vocabulary (a repeated word takes the
    new frequency), role keywords and exclusions are appended, settings
    replace earlier values. Every word of a role keyword or exclusion phrase
    ends up in the vocabulary so spelling correction cannot rewrite it.
    """
    vocabulary_layers: list[list[DictionaryEntry]] = []
    keywords = {entry.role: list(entry.keywords) for entry in DEFAULT_ROLE_KEYWORDS}
    excludes = {entry.role: list(entry.exclude) for entry in DEFAULT_ROLE_KEYWORDS}
    min_item_name_length = MIN_ITEM_NAME_LENGTH
    fallback_window = FALLBACK_WINDOW
    max_edit_distance = MAX_EDIT_DISTANCE
    scale_keyword_tolerance = False

    for config in configs or ():
        settings = config.get("settings", {})
        if not isinstance(settings, Mapping):
            raise ParserRulesError("settings must be a table")
        min_item_name_length = _setting(settings, "min_item_name_length", min_item_name_length, 1)
        fallback_window = _setting(settings, "fallback_window", fallback_window, 1)
        max_edit_distance = _setting(settings, "max_edit_distance", max_edit_distance, 0)
        scale_keyword_tolerance = _flag(settings, "scale_keyword_tolerance", scale_keyword_tolerance)

        vocabulary_layers.append(_words_from_config(config))

        roles = config.get("roles", {})
        if not isinstance(roles, Mapping):
            raise ParserRulesError("roles must be a table")
        for role_name, role_config in roles.items():
            try:
                role = LineRole(str(role_name).lower())
            except ValueError:
                raise ParserRulesError(f"unknown role: {role_name}") from None
            if role not in _SUMMARY_ROLES:
                raise ParserRulesError(f"role {role_name} cannot carry keywords")
            if not isinstance(role_config, Mapping):
                raise ParserRulesError(f"roles.{role_name} must be a table")
            for phrase in _normalize_phrases(role_config.get("keywords"), f"roles.{role_name}.keywords"):
                if phrase not in keywords[role]:
                    keywords[role].append(phrase)
            for phrase in _normalize_phrases(role_config.get("exclude"), f"roles.{role_name}.exclude"):
                if phrase not in excludes[role]:
                    excludes[role].append(phrase)

    role_keywords = tuple(
        RoleKeywords(role=role, keywords=tuple(keywords[role]), exclude=tuple(excludes[role]))
        for role in _SUMMARY_ROLES
    )
    dictionary = build_dictionary(DEFAULT_VOCABULARY, *vocabulary_layers)
    keyword_words = _keyword_vocabulary(role_keywords, dictionary)
    if keyword_words:
        dictionary = build_dictionary(dictionary.entries, keyword_words)

    return ReceiptParserRules(
        dictionary=dictionary,
        role_keywords=role_keywords,
        min_item_name_length=min_item_name_length,
        fallback_window=fallback_window,
        max_edit_distance=max_edit_distance,
        scale_keyword_tolerance=scale_keyword_tolerance,
    )


@lru_cache(maxsize=1)
def get_default_parser_rules() -> ReceiptParserRules:
    """Built-in rules only (no file I/O, no runtime deps)."""
    return build_receipt_parser_rules()
