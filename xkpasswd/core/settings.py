"""
Settings for the passphrase generator.

Settings describe the shape of a password: how many words of which lengths,
how they are cased and separated, and how the result is padded. The core
never validates them; ``Settings.validate`` is provided for the outer
configuration layer.
"""

import copy
from enum import Enum, Flag
from typing import Iterable, List, Optional, Union

from xkpasswd.core.padding import AdaptivePadding, FixedPadding
from xkpasswd.utils.exceptions import InvalidSettingsError

DEFAULT_SYMBOLS = "!@$%^&*-_+=:|~?/.;"
DEFAULT_DIGITS = "0123456789"


class WordTransform(Flag):
    """Casing rules applied to each word; members can be combined with ``|``"""
    LOWERCASE = 1
    UPPERCASE = 2
    TITLECASE = 4
    INVERTED_TITLECASE = 8

    @classmethod
    def none(cls) -> "WordTransform":
        return cls(0)

    @classmethod
    def from_name(cls, name: str) -> "WordTransform":
        """Parse a name such as ``inverted-titlecase`` (case insensitive)"""
        key = name.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"invalid variant: {name}")

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "WordTransform":
        result = cls.none()
        for name in names:
            result |= cls.from_name(name)
        return result

    @property
    def cli_name(self) -> str:
        return self.name.lower().replace("_", "-")

    def members(self) -> List["WordTransform"]:
        """The single transforms enabled in this set, in declaration order"""
        return [member for member in WordTransform if member & self]

    def apply(self, word: str) -> str:
        """Apply a single transform to ``word``"""
        if self is WordTransform.LOWERCASE:
            return word.lower()
        if self is WordTransform.UPPERCASE:
            return word.upper()
        if self is WordTransform.TITLECASE:
            return word[:1].upper() + word[1:].lower()
        if self is WordTransform.INVERTED_TITLECASE:
            return word[:1].lower() + word[1:].upper()
        raise ValueError(f"Not a single transform: {self!r}")

    def letter_cases(self) -> int:
        """Number of distinct letter cases words may contain (1 or 2)"""
        members = self.members()
        if not members:
            return 1
        if members == [WordTransform.LOWERCASE] or members == [WordTransform.UPPERCASE]:
            return 1
        return 2


class Language(Enum):
    """Dictionary languages, valued by their asset code"""
    ENGLISH = "en"
    GERMAN = "de"
    SPANISH = "es"
    FRENCH = "fr"
    PORTUGUESE = "pt"

    @classmethod
    def from_code(cls, code: str) -> "Language":
        try:
            return cls(code.strip().lower())
        except ValueError:
            raise ValueError(f"invalid variant: {code}")


class Preset(Enum):
    """Named, ready-made settings"""
    DEFAULT = "default"
    APPLE_ID = "apple-id"
    WINDOWS_NTLM_V1 = "ntlm"
    SECURITY_QUESTIONS = "secq"
    WEB16 = "web16"
    WEB32 = "web32"
    WIFI = "wifi"
    XKCD = "xkcd"

    @classmethod
    def from_name(cls, name: str) -> "Preset":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"invalid variant: {name}")


PaddingStrategy = Union[FixedPadding, AdaptivePadding]


class Settings:
    """Shape parameters for one password"""

    def __init__(self,
                 words_count: int = 3,
                 word_length_min: int = 4,
                 word_length_max: int = 8,
                 separators: str = DEFAULT_SYMBOLS,
                 padding_digits: str = DEFAULT_DIGITS,
                 padding_digits_before: int = 2,
                 padding_digits_after: int = 2,
                 padding_symbols: str = DEFAULT_SYMBOLS,
                 padding_symbols_before: int = 2,
                 padding_symbols_after: int = 2,
                 padding_strategy: Optional[PaddingStrategy] = None,
                 word_transforms: Optional[WordTransform] = None,
                 language: Language = Language.ENGLISH):
        self.words_count = words_count
        self.word_length_min = word_length_min
        self.word_length_max = word_length_max
        self.separators = separators
        self.padding_digits = padding_digits
        self.padding_digits_before = padding_digits_before
        self.padding_digits_after = padding_digits_after
        self.padding_symbols = padding_symbols
        self.padding_symbols_before = padding_symbols_before
        self.padding_symbols_after = padding_symbols_after
        self.padding_strategy = padding_strategy or FixedPadding()
        if word_transforms is None:
            word_transforms = WordTransform.LOWERCASE | WordTransform.UPPERCASE
        self.word_transforms = word_transforms
        self.language = language

    @classmethod
    def from_preset(cls, preset: Preset) -> "Settings":
        """Build the settings for a named preset"""
        mixed_case = WordTransform.LOWERCASE | WordTransform.UPPERCASE

        if preset is Preset.DEFAULT:
            return cls()
        if preset is Preset.APPLE_ID:
            return cls(words_count=3, word_length_min=4, word_length_max=7,
                       separators="-:.,",
                       padding_digits_before=2, padding_digits_after=2,
                       padding_symbols="!?@&",
                       padding_symbols_before=1, padding_symbols_after=1,
                       word_transforms=mixed_case)
        if preset is Preset.WINDOWS_NTLM_V1:
            return cls(words_count=2, word_length_min=5, word_length_max=5,
                       separators="-+=.*_|~,",
                       padding_digits_before=1, padding_digits_after=0,
                       padding_symbols="!@$%^&*+=:|~?",
                       padding_symbols_before=0, padding_symbols_after=1,
                       word_transforms=WordTransform.INVERTED_TITLECASE)
        if preset is Preset.SECURITY_QUESTIONS:
            return cls(words_count=6, word_length_min=4, word_length_max=8,
                       separators=" ",
                       padding_digits_before=0, padding_digits_after=0,
                       padding_symbols=".!?",
                       padding_symbols_before=0, padding_symbols_after=1,
                       word_transforms=WordTransform.LOWERCASE)
        if preset is Preset.WEB16:
            return cls(words_count=3, word_length_min=4, word_length_max=4,
                       padding_digits_before=0, padding_digits_after=0,
                       padding_symbols_before=1, padding_symbols_after=1,
                       word_transforms=mixed_case)
        if preset is Preset.WEB32:
            return cls(words_count=4, word_length_min=4, word_length_max=5,
                       padding_digits_before=2, padding_digits_after=2,
                       padding_symbols_before=1, padding_symbols_after=1,
                       word_transforms=mixed_case)
        if preset is Preset.WIFI:
            return cls(words_count=6, word_length_min=4, word_length_max=8,
                       separators="-+=.*_|~,",
                       padding_digits_before=4, padding_digits_after=4,
                       padding_symbols="!@$%^&*+=:|~?",
                       padding_symbols_before=0, padding_symbols_after=0,
                       padding_strategy=AdaptivePadding(63),
                       word_transforms=mixed_case)
        if preset is Preset.XKCD:
            return cls(words_count=4, word_length_min=4, word_length_max=8,
                       separators="-",
                       padding_digits_before=0, padding_digits_after=0,
                       padding_symbols_before=0, padding_symbols_after=0,
                       word_transforms=mixed_case)
        raise ValueError(f"Unknown preset: {preset!r}")

    def _replace(self, **changes) -> "Settings":
        settings = copy.copy(self)
        for key, value in changes.items():
            setattr(settings, key, value)
        return settings

    def with_words_count(self, words_count: int) -> "Settings":
        return self._replace(words_count=words_count)

    def with_word_lengths(self, min_length: Optional[int] = None,
                          max_length: Optional[int] = None) -> "Settings":
        return self._replace(
            word_length_min=self.word_length_min if min_length is None else min_length,
            word_length_max=self.word_length_max if max_length is None else max_length,
        )

    def with_separators(self, separators: str) -> "Settings":
        return self._replace(separators=separators)

    def with_padding_digits(self, before: Optional[int] = None,
                            after: Optional[int] = None) -> "Settings":
        return self._replace(
            padding_digits_before=self.padding_digits_before if before is None else before,
            padding_digits_after=self.padding_digits_after if after is None else after,
        )

    def with_padding_digit_alphabet(self, digits: str) -> "Settings":
        return self._replace(padding_digits=digits)

    def with_padding_symbols(self, symbols: str) -> "Settings":
        return self._replace(padding_symbols=symbols)

    def with_padding_symbol_lengths(self, before: Optional[int] = None,
                                    after: Optional[int] = None) -> "Settings":
        return self._replace(
            padding_symbols_before=self.padding_symbols_before if before is None else before,
            padding_symbols_after=self.padding_symbols_after if after is None else after,
        )

    def with_fixed_padding(self) -> "Settings":
        return self._replace(padding_strategy=FixedPadding())

    def with_adaptive_padding(self, length: int) -> "Settings":
        return self._replace(padding_strategy=AdaptivePadding(length))

    def with_word_transforms(self, transforms: WordTransform) -> "Settings":
        return self._replace(word_transforms=transforms)

    def with_language(self, language: Language) -> "Settings":
        return self._replace(language=language)

    @property
    def word_lengths(self) -> range:
        """Inclusive word-length range"""
        return range(self.word_length_min, self.word_length_max + 1)

    @property
    def padding_digits_count(self) -> int:
        return self.padding_digits_before + self.padding_digits_after

    @property
    def padding_symbols_count(self) -> int:
        return self.padding_symbols_before + self.padding_symbols_after

    def validate(self) -> None:
        """Check the preconditions the generator relies on

        Raises:
            InvalidSettingsError: If the settings cannot produce a password
        """
        if self.word_length_min < 1:
            raise InvalidSettingsError("Minimum word length must be at least 1")
        if self.word_length_min > self.word_length_max:
            raise InvalidSettingsError(
                f"Minimum word length ({self.word_length_min}) is greater than "
                f"maximum word length ({self.word_length_max})"
            )
        counts = {
            "words count": self.words_count,
            "digits before": self.padding_digits_before,
            "digits after": self.padding_digits_after,
            "symbols before": self.padding_symbols_before,
            "symbols after": self.padding_symbols_after,
        }
        for label, value in counts.items():
            if value < 0:
                raise InvalidSettingsError(f"The {label} must not be negative")
        if self.padding_digits_count and not self.padding_digits:
            raise InvalidSettingsError("Digit padding requested with an empty digit alphabet")
        if self.padding_symbols_count and not self.padding_symbols:
            raise InvalidSettingsError("Symbol padding requested with an empty symbol alphabet")
        if isinstance(self.padding_strategy, AdaptivePadding) and self.padding_strategy.length < 1:
            raise InvalidSettingsError("Adaptive padding length must be at least 1")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Settings):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"Settings({fields})"
