"""Frequency-weighted vocabulary of receipt terms used for OCR spelling correction.

The built-in vocabulary covers receipt keywords, common grocery words,
units and well-known merchant names. Projects extend it with ``[[words]]``
tables in ``config/parser_rules.toml`` (see ``runtime.parser_rules``).

Frequencies are tie-break weights only: when two words are equally close
to a misread token, the more frequent one wins.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class DictionaryEntry:
    """One vocabulary word and its tie-break weight."""

    word: str
    frequency: int


# Receipt structure keywords
_KEYWORDS: tuple[tuple[str, int], ...] = (
    ("total", 100),
    ("subtotal", 95),
    ("tax", 95),
    ("balance", 80),
    ("amount", 80),
    ("due", 70),
    ("change", 70),
    ("cash", 70),
    ("credit", 60),
    ("debit", 60),
    ("visa", 55),
    ("mastercard", 50),
    ("receipt", 50),
    ("thank", 45),
    ("you", 45),
    ("date", 45),
    ("time", 40),
    ("store", 40),
    ("items", 40),
    ("item", 40),
    ("savings", 35),
    ("discount", 35),
    ("coupon", 35),
    ("member", 30),
    ("cashier", 30),
    ("qty", 30),
    ("each", 30),
    ("price", 30),
    ("sale", 30),
    ("deposit", 25),
    ("tendered", 25),
)

# Grocery words
_GROCERY: tuple[tuple[str, int], ...] = (
    ("milk", 60),
    ("bread", 60),
    ("eggs", 60),
    ("egg", 40),
    ("bananas", 55),
    ("banana", 45),
    ("apples", 50),
    ("apple", 45),
    ("oranges", 40),
    ("orange", 40),
    ("grapes", 35),
    ("lemons", 30),
    ("avocado", 30),
    ("tomatoes", 35),
    ("potatoes", 35),
    ("onions", 35),
    ("carrots", 35),
    ("lettuce", 30),
    ("spinach", 30),
    ("broccoli", 30),
    ("cheese", 50),
    ("butter", 50),
    ("yogurt", 40),
    ("cream", 40),
    ("chicken", 50),
    ("beef", 45),
    ("pork", 40),
    ("ground", 35),
    ("breast", 30),
    ("bacon", 35),
    ("ham", 30),
    ("turkey", 30),
    ("salmon", 30),
    ("shrimp", 30),
    ("rice", 45),
    ("pasta", 40),
    ("cereal", 40),
    ("flour", 30),
    ("sugar", 35),
    ("salt", 30),
    ("oil", 30),
    ("coffee", 45),
    ("tea", 35),
    ("juice", 40),
    ("water", 40),
    ("soda", 35),
    ("cola", 30),
    ("beer", 30),
    ("wine", 30),
    ("chips", 35),
    ("cookies", 30),
    ("crackers", 25),
    ("chocolate", 30),
    ("candy", 25),
    ("soup", 30),
    ("sauce", 30),
    ("beans", 30),
    ("corn", 25),
    ("peanut", 25),
    ("organic", 40),
    ("fresh", 35),
    ("frozen", 35),
    ("whole", 35),
    ("large", 35),
    ("small", 30),
    ("white", 30),
    ("wheat", 30),
    ("pizza", 30),
    ("paper", 30),
    ("towels", 25),
    ("tissue", 25),
    ("soap", 25),
    ("detergent", 25),
    ("bag", 30),
    ("bags", 30),
    ("box", 25),
    ("pack", 30),
)

# Units
_UNITS: tuple[tuple[str, int], ...] = (
    ("lb", 40),
    ("lbs", 35),
    ("oz", 35),
    ("kg", 30),
    ("gal", 25),
    ("gallon", 25),
    ("dozen", 25),
    ("pkg", 25),
    ("ct", 20),
)

# Merchant names
_MERCHANTS: tuple[tuple[str, int], ...] = (
    ("walmart", 90),
    ("safeway", 85),
    ("target", 85),
    ("costco", 85),
    ("kroger", 80),
    ("walgreens", 70),
    ("publix", 70),
    ("albertsons", 65),
    ("aldi", 65),
    ("lidl", 60),
    ("trader", 60),
    ("wholefoods", 55),
    ("foods", 50),
    ("market", 50),
    ("grocery", 50),
    ("pharmacy", 45),
    ("supermarket", 45),
    ("loblaws", 40),
    ("sobeys", 40),
    ("metro", 40),
)

DEFAULT_VOCABULARY: tuple[DictionaryEntry, ...] = tuple(
    DictionaryEntry(word=word, frequency=frequency)
    for word, frequency in _KEYWORDS + _GROCERY + _UNITS + _MERCHANTS
)


@dataclass(frozen=True)
class ReceiptDictionary:
    """Immutable vocabulary, unique by word, in enumeration order."""

    entries: tuple[DictionaryEntry, ...]
    index: Mapping[str, DictionaryEntry] = field(compare=False, hash=False, repr=False)

    def __contains__(self, word: object) -> bool:
        return word in self.index

    def __len__(self) -> int:
        return len(self.entries)

    def lookup(self, word: str) -> DictionaryEntry | None:
        return self.index.get(word)


def build_dictionary(*layers: Iterable[DictionaryEntry]) -> ReceiptDictionary:
    """Merge vocabulary layers into one dictionary.

    Words are lower-cased. A word repeated in a later layer keeps its
    original enumeration position but takes the later frequency.
    """
    merged: dict[str, DictionaryEntry] = {}
    for layer in layers:
        for entry in layer:
            word = entry.word.strip().lower()
            if not word:
                continue
            merged[word] = DictionaryEntry(word=word, frequency=int(entry.frequency))
    entries = tuple(merged.values())
    return ReceiptDictionary(
        entries=entries,
        index=MappingProxyType({entry.word: entry for entry in entries}),
    )
