#!/usr/bin/env python3
"""
Command-line interface for xkpasswd.
"""

import argparse
import random
import sys
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from xkpasswd import __version__
from xkpasswd.core.generator import Xkpasswd
from xkpasswd.core.settings import Language, Preset, Settings, WordTransform
from xkpasswd.utils.config import Config, to_config_value
from xkpasswd.utils.exceptions import InvalidSettingsError, XkpasswdError
from xkpasswd.utils.logger import Logger

VERBOSITY_LEVELS = {
    "debug": Logger.DEBUG,
    "info": Logger.INFO,
    "warning": Logger.WARNING,
    "error": Logger.ERROR,
    "critical": Logger.CRITICAL,
}

EXAMPLES = """\
examples:
  xkpasswd
  xkpasswd -p xkcd -l de
  xkpasswd -w 4 --word-min 5 --word-max 7 -t titlecase -s "-"
  xkpasswd --padding adaptive --adaptive-length 32 -e
  xkpasswd -n 1000 --output-file passwords.txt
  xkpasswd -w 5 --save-config
"""


class HelpFormatter(argparse.ArgumentDefaultsHelpFormatter,
                    argparse.RawDescriptionHelpFormatter):
    pass


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser

    Every option defaults to None so that unset options can be filled from
    the config file, then from the preset.
    """
    parser = argparse.ArgumentParser(
        prog="xkpasswd",
        description="XKCD-style passphrase generator",
        epilog=EXAMPLES,
        formatter_class=HelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    word_group = parser.add_argument_group("Word Options")
    word_group.add_argument("-w", "--words", dest="words_count", type=int,
                            help="Number of words")
    word_group.add_argument("--word-min", dest="word_min", type=int,
                            help="Minimum word length")
    word_group.add_argument("--word-max", dest="word_max", type=int,
                            help="Maximum word length")
    word_group.add_argument(
        "-t",
        "--transforms",
        nargs="+",
        choices=[member.cli_name for member in WordTransform],
        help="Word casing rules; with several, one is picked per word",
    )
    word_group.add_argument("-s", "--separators",
                            help="Characters to pick the word separator from")

    padding_group = parser.add_argument_group("Padding Options")
    padding_group.add_argument("--digits-before", dest="digits_before", type=int,
                               help="Digits before the words")
    padding_group.add_argument("--digits-after", dest="digits_after", type=int,
                               help="Digits after the words")
    padding_group.add_argument("--digits", help="Characters to pick padding digits from")
    padding_group.add_argument("--symbols", help="Characters to pick padding symbols from")
    padding_group.add_argument("--symbols-before", dest="symbols_before", type=int,
                               help="Symbols before the digits")
    padding_group.add_argument("--symbols-after", dest="symbols_after", type=int,
                               help="Symbols after the digits")
    padding_group.add_argument("--padding", choices=["fixed", "adaptive"],
                               help="Padding strategy")
    padding_group.add_argument("--adaptive-length", dest="adaptive_length", type=int,
                               help="Total length for adaptive padding")

    preset_group = parser.add_argument_group("Presets")
    preset_group.add_argument("-p", "--preset", choices=[preset.value for preset in Preset],
                              help="Start from a named preset")
    preset_group.add_argument("-l", "--lang", choices=[language.value for language in Language],
                              help="Dictionary language")

    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument("-n", "--count", type=int, default=1,
                              help="Number of passwords to generate")
    output_group.add_argument("-e", "--entropy", action="store_true",
                              help="Show the entropy estimate")
    output_group.add_argument("--output-file", help="Write passwords to this file")
    output_group.add_argument("--seed", type=int,
                              help="Seed for reproducible output (not for real passwords)")
    output_group.add_argument(
        "-v",
        "--verbosity",
        choices=list(VERBOSITY_LEVELS),
        help="Logging verbosity level; warnings and errors only when unset",
    )
    output_group.add_argument("--log-file", dest="log_file", help="Save log output to this file")

    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument("--config", help="Path to configuration file")
    config_group.add_argument(
        "--save-config",
        action="store_true",
        help="Save the given options as default configuration",
    )

    return parser


def setup_logger(verbosity: Optional[str], log_file: Optional[str]) -> Logger:
    """Set up logging for the given verbosity name and optional log file"""
    return Logger(
        name="xkpasswd",
        log_file=log_file,
        level=VERBOSITY_LEVELS.get(verbosity or "warning", Logger.WARNING),
    )


def args_to_values(args: argparse.Namespace) -> Dict[str, Any]:
    """Option values from the command line, keyed like the config file"""
    values = {
        key: getattr(args, key)
        for key in (
            "words_count", "word_min", "word_max", "separators",
            "digits_before", "digits_after", "digits",
            "symbols", "symbols_before", "symbols_after",
            "padding", "adaptive_length", "verbosity", "log_file",
        )
    }
    values["transforms"] = WordTransform.from_names(args.transforms) if args.transforms else None
    values["preset"] = Preset.from_name(args.preset) if args.preset else None
    values["lang"] = Language.from_code(args.lang) if args.lang else None
    return values


def build_settings(values: Dict[str, Any]) -> Settings:
    """Build settings from merged option values

    Unset values come from the preset (or the built-in defaults).

    Raises:
        InvalidSettingsError: If the result cannot produce a password
    """
    settings = Settings.from_preset(values.get("preset") or Preset.DEFAULT)

    if values.get("lang") is not None:
        settings = settings.with_language(values["lang"])
    if values.get("words_count") is not None:
        settings = settings.with_words_count(values["words_count"])
    settings = settings.with_word_lengths(values.get("word_min"), values.get("word_max"))
    if values.get("transforms") is not None:
        settings = settings.with_word_transforms(values["transforms"])
    if values.get("separators") is not None:
        settings = settings.with_separators(values["separators"])
    if values.get("digits") is not None:
        settings = settings.with_padding_digit_alphabet(values["digits"])
    settings = settings.with_padding_digits(values.get("digits_before"), values.get("digits_after"))
    if values.get("symbols") is not None:
        settings = settings.with_padding_symbols(values["symbols"])
    settings = settings.with_padding_symbol_lengths(values.get("symbols_before"),
                                                    values.get("symbols_after"))

    padding = values.get("padding")
    adaptive_length = values.get("adaptive_length")
    if padding == "fixed":
        settings = settings.with_fixed_padding()
    elif padding == "adaptive" or adaptive_length is not None:
        if adaptive_length is None:
            current = getattr(settings.padding_strategy, "length", None)
            if current is None:
                raise InvalidSettingsError("Adaptive padding requires --adaptive-length")
            adaptive_length = current
        settings = settings.with_adaptive_padding(adaptive_length)

    settings.validate()
    return settings


def save_config_from_args(cli_values: Dict[str, Any], config: Config) -> None:
    """Save the options given on the command line to the config file"""
    for key, value in cli_values.items():
        if value is not None:
            config.set(key, to_config_value(value))
    config.save()


def generate_passwords(generator: Xkpasswd, settings: Settings, count: int,
                       rng: Optional[random.Random], show_entropy: bool,
                       output_file: Optional[str], logger) -> None:
    """Generate ``count`` passwords to stdout or to ``output_file``"""
    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            entropy = None
            for _ in tqdm(range(count), unit="pw", desc="Generating"):
                passwd, entropy = generator.generate(settings, rng)
                f.write(passwd + "\n")
        logger.info(f"{count} passwords saved to {output_file}")
        if show_entropy and entropy is not None:
            print(f"Entropy: {entropy}")
        return

    for _ in range(count):
        passwd, entropy = generator.generate(settings, rng)
        print(passwd)
        if show_entropy:
            print(f"Entropy: {entropy}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the xkpasswd CLI

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logger = setup_logger(args.verbosity, args.log_file).get_logger()

    try:
        config = Config(args.config)
        cli_values = args_to_values(args)
        values = config.merge(cli_values)

        if values.get("verbosity") != args.verbosity or values.get("log_file") != args.log_file:
            logger = setup_logger(values.get("verbosity"), values.get("log_file")).get_logger()

        if args.count < 1:
            raise InvalidSettingsError("Password count must be at least 1")

        settings = build_settings(values)
        logger.debug(f"Using {settings!r}")

        if args.save_config:
            save_config_from_args(cli_values, config)
            logger.info(f"Configuration saved to {config.config_path}")

        generator = Xkpasswd.for_language(settings.language)
        rng = random.Random(args.seed) if args.seed is not None else None

        generate_passwords(generator, settings, args.count, rng,
                           args.entropy, args.output_file, logger)
        return 0

    except XkpasswdError as e:
        logger.error(f"Error: {str(e)}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Unexpected error: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
