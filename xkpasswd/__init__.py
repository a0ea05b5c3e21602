"""
xkpasswd

XKCD-style passphrase generator with entropy estimates.
"""

from xkpasswd.core.dictionary import Dictionary, load_dict, load_language
from xkpasswd.core.entropy import Entropy, GuessTime
from xkpasswd.core.generator import Xkpasswd
from xkpasswd.core.randomizer import Randomizer, SettingsRandomizer
from xkpasswd.core.settings import Language, Preset, Settings, WordTransform

__version__ = "0.1.0"
