"""
Padding strategies and the padding decision handed to the assembler.

A strategy is part of the user's settings; a result is produced once per
generation by the randomizer and consumed immediately by the assembler.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FixedPadding:
    """Use only the explicit digit/symbol counts"""


@dataclass(frozen=True)
class AdaptivePadding:
    """Trim or extend the assembled password to exactly ``length`` characters"""
    length: int


@dataclass(frozen=True)
class Unchanged:
    """Leave the assembled password as it is"""


@dataclass(frozen=True)
class TrimTo:
    """Keep only the first ``length`` characters"""
    length: int


@dataclass(frozen=True)
class Pad:
    """Append ``text`` verbatim"""
    text: str
