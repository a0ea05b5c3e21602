"""
Password assembler.

Builds ``symbols digits WORDS digits symbols`` passwords from a dictionary,
delegating every random choice to a ``Randomizer``.
"""

import logging
import random
from typing import Optional, Tuple

from xkpasswd.core.dictionary import Dictionary, load_language
from xkpasswd.core.entropy import Entropy
from xkpasswd.core.padding import Pad, TrimTo, Unchanged
from xkpasswd.core.randomizer import Randomizer, SettingsRandomizer
from xkpasswd.core.settings import Language, Settings

logger = logging.getLogger(__name__)


class Xkpasswd:
    """Generates passwords from a length-indexed dictionary

    The dictionary is read-only, so one instance can serve any number of
    generation calls.
    """

    def __init__(self, dictionary: Dictionary):
        self.dict = dictionary

    @classmethod
    def for_language(cls, language: Language = Language.ENGLISH) -> "Xkpasswd":
        """Create a generator backed by the packaged dictionary for ``language``"""
        return cls(load_language(language))

    def gen_pass(self, randomizer: Randomizer) -> Tuple[str, Entropy]:
        """Assemble one password

        Args:
            randomizer: Source of every random choice

        Returns:
            Tuple of (password, entropy report)

        Raises:
            NoCandidatesError: If words are requested but no dictionary word
                has an eligible length
        """
        pool = self.dict.pool(randomizer.word_lengths())
        words = randomizer.rand_words(pool)

        separator = randomizer.rand_separator()
        body = separator.join(randomizer.rand_transform(word) for word in words)

        prefix_symbols, prefix_digits = randomizer.rand_prefix()
        suffix_digits, suffix_symbols = randomizer.rand_suffix()
        if prefix_digits:
            prefix_digits += separator
        if suffix_digits:
            suffix_digits = separator + suffix_digits
        passwd = prefix_symbols + prefix_digits + body + suffix_digits + suffix_symbols

        adjustment = randomizer.adjust_padding(len(passwd))
        if isinstance(adjustment, Unchanged):
            pass
        elif isinstance(adjustment, TrimTo):
            passwd = passwd[:adjustment.length]
        elif isinstance(adjustment, Pad):
            passwd += adjustment.text
        else:
            raise TypeError(f"Unknown padding result: {adjustment!r}")

        entropy = randomizer.calc_entropy(len(passwd))
        logger.debug("Generated %d character password, entropy: %s", len(passwd), entropy)
        return passwd, entropy

    def generate(self, settings: Settings,
                 rng: Optional[random.Random] = None) -> Tuple[str, Entropy]:
        """Assemble one password for ``settings`` with the production randomizer"""
        return self.gen_pass(SettingsRandomizer(settings, rng))
