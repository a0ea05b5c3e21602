"""
Sources of randomness for the password assembler.

The assembler never touches a random number generator directly. Everything
random, plus the two computations that depend on the settings (padding
adjustment and entropy), goes through a ``Randomizer``. Tests substitute a
deterministic implementation.
"""

import random
import secrets
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple, Union

from xkpasswd.core.entropy import Entropy, calc_entropy
from xkpasswd.core.padding import AdaptivePadding, Pad, TrimTo, Unchanged
from xkpasswd.core.settings import Settings
from xkpasswd.utils.exceptions import NoCandidatesError

PaddingResult = Union[Unchanged, TrimTo, Pad]


class Randomizer(ABC):
    """Abstract base class for randomness providers"""

    @abstractmethod
    def word_lengths(self) -> range:
        """Inclusive range of eligible word lengths"""
        pass

    @abstractmethod
    def rand_words(self, pool: Sequence[str]) -> List[str]:
        """Draw exactly ``words_count`` words from ``pool``"""
        pass

    @abstractmethod
    def rand_separator(self) -> str:
        """A separator, or an empty string when there are none"""
        pass

    @abstractmethod
    def rand_prefix(self) -> Tuple[str, str]:
        """``(symbols, digits)`` placed before the words"""
        pass

    @abstractmethod
    def rand_suffix(self) -> Tuple[str, str]:
        """``(digits, symbols)`` placed after the words"""
        pass

    @abstractmethod
    def adjust_padding(self, current_length: int) -> PaddingResult:
        """Decide how to bring a password of ``current_length`` to its final length"""
        pass

    @abstractmethod
    def rand_transform(self, word: str) -> str:
        """``word`` with one casing rule applied"""
        pass

    @abstractmethod
    def calc_entropy(self, current_length: int) -> Entropy:
        """Entropy report for the final password"""
        pass


class SettingsRandomizer(Randomizer):
    """Randomizer driven by ``Settings`` and a ``random.Random`` compatible source"""

    def __init__(self, settings: Settings, rng: Optional[random.Random] = None):
        """Initialize with settings and an optional random source

        Args:
            settings: Password shape
            rng: Random source; defaults to ``secrets.SystemRandom()``. Pass a
                seeded ``random.Random`` for reproducible output.
        """
        self.settings = settings
        self.rng = rng or secrets.SystemRandom()
        self._transforms = settings.word_transforms.members()
        self._pool_size = 0
        self._unpadded_length: Optional[int] = None

    def _rand_chars(self, alphabet: str, count: int) -> str:
        if not alphabet or count <= 0:
            return ""
        return "".join(self.rng.choice(alphabet) for _ in range(count))

    def word_lengths(self) -> range:
        return self.settings.word_lengths

    def rand_words(self, pool: Sequence[str]) -> List[str]:
        self._pool_size = len(pool)
        if self.settings.words_count <= 0:
            return []
        if not pool:
            lengths = self.word_lengths()
            raise NoCandidatesError(
                f"No dictionary words with length between {lengths.start} and {lengths.stop - 1}"
            )
        return [self.rng.choice(pool) for _ in range(self.settings.words_count)]

    def rand_separator(self) -> str:
        return self._rand_chars(self.settings.separators, 1)

    def rand_prefix(self) -> Tuple[str, str]:
        symbols = self._rand_chars(self.settings.padding_symbols, self.settings.padding_symbols_before)
        digits = self._rand_chars(self.settings.padding_digits, self.settings.padding_digits_before)
        return symbols, digits

    def rand_suffix(self) -> Tuple[str, str]:
        digits = self._rand_chars(self.settings.padding_digits, self.settings.padding_digits_after)
        symbols = self._rand_chars(self.settings.padding_symbols, self.settings.padding_symbols_after)
        return digits, symbols

    def rand_transform(self, word: str) -> str:
        if not self._transforms:
            return word
        return self.rng.choice(self._transforms).apply(word)

    def adjust_padding(self, current_length: int) -> PaddingResult:
        self._unpadded_length = current_length
        strategy = self.settings.padding_strategy
        if not isinstance(strategy, AdaptivePadding):
            return Unchanged()

        if current_length > strategy.length:
            return TrimTo(strategy.length)
        if current_length < strategy.length and self.settings.padding_symbols:
            symbol = self.rng.choice(self.settings.padding_symbols)
            return Pad(symbol * (strategy.length - current_length))
        return Unchanged()

    def calc_entropy(self, current_length: int) -> Entropy:
        unpadded_length = current_length if self._unpadded_length is None else self._unpadded_length
        return calc_entropy(self.settings, self._pool_size, current_length, unpadded_length)
