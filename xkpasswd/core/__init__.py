"""
Core functionality for xkpasswd: dictionaries, settings, randomness,
assembly and entropy.
"""

from .dictionary import Dictionary, load_dict, load_language
from .entropy import Entropy, GuessTime
from .generator import Xkpasswd
from .padding import AdaptivePadding, FixedPadding, Pad, TrimTo, Unchanged
from .randomizer import PaddingResult, Randomizer, SettingsRandomizer
from .settings import Language, Preset, Settings, WordTransform
