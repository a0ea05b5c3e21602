"""
Word dictionaries indexed by word length.

Dictionary assets are plain text, one entry per line::

    4:able,acid,aged
    5:about,above,abuse

Lines that cannot be parsed are dropped; loading never fails.
"""

import logging
import os
from collections.abc import Mapping
from functools import lru_cache
from typing import Dict, Iterable, Iterator, List, Tuple, Union

from xkpasswd.core.settings import Language
from xkpasswd.utils.exceptions import DictionaryNotFoundError

logger = logging.getLogger(__name__)

ASSETS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "assets")


class Dictionary(Mapping):
    """Read-only mapping of word length to the words of that length"""

    def __init__(self, table: Dict[int, Iterable[str]]):
        self._table: Dict[int, Tuple[str, ...]] = {
            length: tuple(words) for length, words in sorted(table.items())
        }

    def __getitem__(self, length: int) -> Tuple[str, ...]:
        return self._table[length]

    def __iter__(self) -> Iterator[int]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        sizes = ", ".join(f"{length}: {len(words)}" for length, words in self._table.items())
        return f"Dictionary({{{sizes}}})"

    def pool(self, lengths: range) -> List[str]:
        """All words whose length lies in ``lengths``, shortest first"""
        result: List[str] = []
        for length in lengths:
            result.extend(self._table.get(length, ()))
        return result

    def word_count(self) -> int:
        return sum(len(words) for words in self._table.values())


def load_dict(raw: Union[str, bytes]) -> Dictionary:
    """Parse a dictionary asset

    Args:
        raw: Asset contents; bytes are decoded as UTF-8

    Returns:
        Dictionary keyed by word length. Words keep their file order, and a
        length listed on several lines collects the words of all of them.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    table: Dict[int, List[str]] = {}
    for line_no, line in enumerate(raw.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue

        length_field, sep, words_field = line.partition(":")
        if not sep:
            logger.debug("Skipping dictionary line %d: no length field", line_no)
            continue

        length_field = length_field.strip()
        if not (length_field.isascii() and length_field.isdigit()):
            logger.debug("Skipping dictionary line %d: invalid length %r", line_no, length_field)
            continue
        length = int(length_field)

        words = []
        for word in words_field.split(","):
            word = word.strip()
            if not word:
                continue
            if len(word) != length:
                logger.debug("Skipping dictionary word %r on line %d: expected length %d",
                             word, line_no, length)
                continue
            words.append(word)
        if words:
            table.setdefault(length, []).extend(words)

    return Dictionary(table)


def asset_path(language: Language) -> str:
    return os.path.join(ASSETS_DIR, f"{language.value}.txt")


@lru_cache(maxsize=None)
def load_language(language: Language) -> Dictionary:
    """Load the packaged dictionary for ``language``

    Raises:
        DictionaryNotFoundError: If the asset is not installed
    """
    path = asset_path(language)
    if not os.path.exists(path):
        raise DictionaryNotFoundError(f"Dictionary not found for language '{language.value}': {path}")

    with open(path, "rb") as f:
        dictionary = load_dict(f.read())

    logger.debug("Loaded %d words for language '%s'", dictionary.word_count(), language.value)
    return dictionary
