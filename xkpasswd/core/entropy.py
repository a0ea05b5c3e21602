"""
Entropy and guess-time estimates for generated passwords.

Two views of entropy are reported:

- blind: the attacker knows the generation scheme and its parameter ranges
  (word lengths, alphabets, counts) but not the dictionary. Reported as a
  min/max pair evaluated at both ends of the word-length range.
- seen: the attacker knows the exact dictionary and configuration.

The guess time is derived from the pessimistic blind minimum.
"""

import math
from dataclasses import dataclass, field

GUESSES_PER_SECOND = 1_000
SECONDS_PER_DAY = 60 * 60 * 24
DAYS_PER_YEAR = 365.25
DAYS_PER_MONTH = 30

THOUSAND_YEARS = 1_000
MILLION_YEARS = 1_000_000
BILLION_YEARS = 1_000_000_000

LETTERS_PER_CASE = 26


@dataclass(frozen=True)
class GuessTime:
    """Time needed to exhaust a password space"""
    years: int = 0
    months: int = 0
    days: int = 0

    @classmethod
    def for_entropy(cls, bits: int) -> "GuessTime":
        """Estimate how long guessing ``2 ** bits`` passwords takes

        Anything above 44 bits falls into one of three "more than ..."
        buckets; the thresholds are exact.
        """
        if bits > 64:
            return cls(years=BILLION_YEARS + 1)
        if bits > 54:
            return cls(years=MILLION_YEARS + 1)
        if bits > 44:
            return cls(years=THOUSAND_YEARS + 1)

        seconds = 2 ** bits / GUESSES_PER_SECOND
        total_days = seconds / SECONDS_PER_DAY
        years = int(total_days // DAYS_PER_YEAR)
        remaining = total_days - years * DAYS_PER_YEAR
        months = int(remaining // DAYS_PER_MONTH)
        days = int(remaining - months * DAYS_PER_MONTH)
        return cls(years=years, months=months, days=days)

    def __str__(self) -> str:
        if self.years >= BILLION_YEARS:
            return "more than a billion years"
        if self.years >= MILLION_YEARS:
            return "more than a million years"
        if self.years >= THOUSAND_YEARS:
            return "more than a thousand years"

        parts = []
        if self.years:
            parts.append(f"{self.years} years")
        if self.months:
            parts.append(f"{self.months} months")
        if self.days:
            parts.append(f"{self.days} days")
        return " ".join(parts) if parts else "less than a day"


@dataclass(frozen=True)
class Entropy:
    """Entropy report for one generated password"""
    blind_min: int = 0
    blind_max: int = 0
    seen: int = 0
    guess_time: GuessTime = field(default_factory=GuessTime)

    def __str__(self) -> str:
        if self.blind_min == self.blind_max:
            blind = f"{self.blind_min} bits blind"
        else:
            blind = f"between {self.blind_min} & {self.blind_max} bits blind"
        return (f"{blind}, {self.seen} bits with full knowledge, "
                f"time to exhaust: {self.guess_time}")


def bits(space: int) -> int:
    """floor(log2(space)), exact for arbitrarily large integers"""
    if space < 1:
        return 0
    return space.bit_length() - 1


def choices(alphabet: str) -> int:
    """Number of distinct choices an alphabet offers; at least 1"""
    return max(1, len(set(alphabet)))


def blind_space(settings, word_length: int) -> int:
    """Size of the configuration space for words of ``word_length`` letters"""
    digits_count = settings.padding_digits_count
    symbols_count = settings.padding_symbols_count
    placements = (digits_count + 1) * (symbols_count + 1)
    word_alphabet = LETTERS_PER_CASE * settings.word_transforms.letter_cases()

    return (placements
            * choices(settings.separators)
            * choices(settings.padding_digits) ** digits_count
            * choices(settings.padding_symbols) ** symbols_count
            * (word_alphabet ** word_length) ** settings.words_count)


def seen_space(settings, pool_size: int) -> int:
    """Size of the space for an attacker who knows the dictionary"""
    return (max(1, pool_size) ** settings.words_count
            * choices(settings.separators)
            * choices(settings.padding_digits) ** settings.padding_digits_count
            * choices(settings.padding_symbols) ** settings.padding_symbols_count)


def char_alphabet_size(settings) -> int:
    """Distinct characters that can appear anywhere in a password"""
    punctuation = set(settings.separators) | set(settings.padding_digits) | set(settings.padding_symbols)
    return LETTERS_PER_CASE * settings.word_transforms.letter_cases() + len(punctuation)


def calc_entropy(settings, pool_size: int, pass_length: int,
                 unpadded_length: int) -> Entropy:
    """Build the entropy report for a password of ``pass_length`` characters

    Args:
        settings: Settings the password was generated with
        pool_size: Number of dictionary words the words were drawn from
        pass_length: Length of the final password
        unpadded_length: Length before adaptive trimming or padding

    Returns:
        Entropy report
    """
    blind_min = bits(blind_space(settings, settings.word_length_min))
    blind_max = bits(blind_space(settings, settings.word_length_max))
    seen = bits(seen_space(settings, pool_size))

    if pass_length > unpadded_length:
        # padded with one repeated symbol
        extra = bits(choices(settings.padding_symbols))
        blind_min += extra
        blind_max += extra
        seen += extra
    elif pass_length < unpadded_length:
        cap = math.floor(pass_length * math.log2(char_alphabet_size(settings)))
        blind_min = min(blind_min, cap)
        blind_max = min(blind_max, cap)
        seen = min(seen, cap)

    return Entropy(
        blind_min=blind_min,
        blind_max=blind_max,
        seen=seen,
        guess_time=GuessTime.for_entropy(blind_min),
    )
