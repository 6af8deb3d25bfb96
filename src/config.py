# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Configuration module for the crossword layout generator.

Handles generator settings, loading configuration from YAML files and
command-line arguments, with proper merging and validation.
"""

import argparse
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Optional, List, Dict, Any

import yaml


VALID_WORD_ORDERS = ["longest_first", "input", "shuffled"]
VALID_OUTPUT_FORMATS = ["text", "yaml"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass(frozen=True)
class GeneratorSettings:
    """
    Options steering the placement search.

    Size caps are measured on the layout's bounding box. The forbid_*
    flags control how two words may touch when they do not intersect.
    """
    max_width: Optional[int] = None
    max_height: Optional[int] = None
    max_area: Optional[int] = None
    allow_disconnected_groups: bool = False
    forbid_flush_adjacency: bool = True
    forbid_end_to_end: bool = True
    forbid_end_to_side: bool = True
    forbid_corner_touch: bool = False
    min_words_used: int = 1
    require_all_words: bool = True
    word_order: str = "longest_first"
    shuffle_seed: Optional[int] = None
    explored_state_limit: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GeneratorSettings':
        """
        Create settings from a mapping.

        Raises:
            ConfigValidationError: If the mapping has unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown settings: {', '.join(unknown)}"
            )
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def validate(self) -> List[str]:
        """
        Validate settings values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        for name in ("max_width", "max_height", "max_area", "explored_state_limit"):
            value = getattr(self, name)
            if value is not None and (not isinstance(value, int) or value < 1):
                errors.append(f"{name} must be a positive integer, got {value!r}")

        if not isinstance(self.min_words_used, int) or self.min_words_used < 0:
            errors.append(
                f"min_words_used must be a non-negative integer, got {self.min_words_used!r}"
            )

        if self.word_order not in VALID_WORD_ORDERS:
            errors.append(
                f"Invalid word_order '{self.word_order}'. "
                f"Must be one of: {VALID_WORD_ORDERS}"
            )

        return errors


@dataclass
class OutputConfig:
    """Configuration for output and logging."""
    format: str = "text"
    log_dir: Optional[str] = None
    log_level: str = "INFO"
    log_file_prefix: str = "crossword_layouts"
    enable_console_logging: bool = True


@dataclass
class LayoutConfig:
    """Complete configuration for a layout generation run."""
    words: List[str] = field(default_factory=list)
    word_file: Optional[str] = None
    count: Optional[int] = 1  # None means all layouts

    settings: GeneratorSettings = field(default_factory=GeneratorSettings)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        """Convert dicts to dataclass instances if needed."""
        if isinstance(self.settings, dict):
            self.settings = GeneratorSettings.from_dict(self.settings)
        if isinstance(self.output, dict):
            self.output = OutputConfig(**self.output)

    @classmethod
    def from_yaml(cls, path: str) -> 'LayoutConfig':
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            LayoutConfig instance

        Raises:
            ConfigValidationError: If file doesn't exist or is invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigValidationError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Configuration file must contain a YAML mapping, got {type(data)}"
            )

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> 'LayoutConfig':
        """Create LayoutConfig from dictionary."""
        words = data.get('words', [])
        if not isinstance(words, list):
            raise ConfigValidationError("'words' must be a list")

        config = cls(
            words=[str(w) for w in words],
            word_file=data.get('word_file'),
            count=data.get('count', 1),
        )

        if 'settings' in data:
            settings_data = data['settings'] or {}
            if not isinstance(settings_data, dict):
                raise ConfigValidationError("'settings' must be a mapping")
            config.settings = GeneratorSettings.from_dict(settings_data)

        if 'output' in data:
            out_data = data['output'] or {}
            default = OutputConfig()
            config.output = OutputConfig(
                format=out_data.get('format', default.format),
                log_dir=out_data.get('log_dir', default.log_dir),
                log_level=out_data.get('log_level', default.log_level),
                log_file_prefix=out_data.get(
                    'log_file_prefix', default.log_file_prefix
                ),
                enable_console_logging=out_data.get(
                    'enable_console_logging',
                    default.enable_console_logging
                ),
            )

        return config

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'LayoutConfig':
        """
        Create configuration from command-line arguments.

        Args:
            args: Parsed command-line arguments

        Returns:
            LayoutConfig instance
        """
        config = cls()

        if getattr(args, 'words', None):
            config.words = list(args.words)
        if getattr(args, 'word_file', None):
            config.word_file = args.word_file
        if getattr(args, 'all', False):
            config.count = None
        elif getattr(args, 'count', None) is not None:
            config.count = args.count

        overrides: Dict[str, Any] = {}
        if getattr(args, 'max_width', None) is not None:
            overrides['max_width'] = args.max_width
        if getattr(args, 'max_height', None) is not None:
            overrides['max_height'] = args.max_height
        if getattr(args, 'max_area', None) is not None:
            overrides['max_area'] = args.max_area
        if getattr(args, 'allow_disconnected', False):
            overrides['allow_disconnected_groups'] = True
        if getattr(args, 'allow_flush', False):
            overrides['forbid_flush_adjacency'] = False
        if getattr(args, 'allow_end_to_end', False):
            overrides['forbid_end_to_end'] = False
        if getattr(args, 'allow_end_to_side', False):
            overrides['forbid_end_to_side'] = False
        if getattr(args, 'forbid_corner_touch', False):
            overrides['forbid_corner_touch'] = True
        if getattr(args, 'min_words', None) is not None:
            overrides['min_words_used'] = args.min_words
        if getattr(args, 'allow_subset', False):
            overrides['require_all_words'] = False
        if getattr(args, 'word_order', None):
            overrides['word_order'] = args.word_order
        if getattr(args, 'seed', None) is not None:
            overrides['shuffle_seed'] = args.seed
        if getattr(args, 'explored_limit', None) is not None:
            overrides['explored_state_limit'] = args.explored_limit
        if overrides:
            config.settings = GeneratorSettings(**overrides)

        if getattr(args, 'format', None):
            config.output.format = args.format
        if getattr(args, 'log_dir', None):
            config.output.log_dir = args.log_dir
        if getattr(args, 'verbose', False):
            config.output.log_level = "DEBUG"

        return config

    @classmethod
    def merge(
        cls,
        yaml_config: 'LayoutConfig',
        cli_config: 'LayoutConfig'
    ) -> 'LayoutConfig':
        """
        Merge configurations with CLI taking precedence over YAML.

        Args:
            yaml_config: Configuration loaded from YAML file
            cli_config: Configuration from command-line arguments

        Returns:
            Merged LayoutConfig instance
        """
        merged = LayoutConfig(
            words=list(yaml_config.words),
            word_file=yaml_config.word_file,
            count=yaml_config.count,
            settings=yaml_config.settings,
            output=yaml_config.output,
        )

        # Override with CLI values (non-default values)
        default = cls()

        if cli_config.words:
            merged.words = list(cli_config.words)
        if cli_config.word_file:
            merged.word_file = cli_config.word_file
        if cli_config.count != default.count:
            merged.count = cli_config.count

        settings_overrides = {
            name: value
            for name, value in cli_config.settings.to_dict().items()
            if value != getattr(default.settings, name)
        }
        if settings_overrides:
            merged.settings = GeneratorSettings(
                **{**merged.settings.to_dict(), **settings_overrides}
            )

        if cli_config.output.format != default.output.format:
            merged.output.format = cli_config.output.format
        if cli_config.output.log_dir:
            merged.output.log_dir = cli_config.output.log_dir
        if cli_config.output.log_level != default.output.log_level:
            merged.output.log_level = cli_config.output.log_level

        return merged

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = list(self.settings.validate())

        if self.count is not None and (not isinstance(self.count, int) or self.count < 1):
            errors.append(f"count must be a positive integer, got {self.count!r}")

        if self.output.format not in VALID_OUTPUT_FORMATS:
            errors.append(
                f"Invalid output format '{self.output.format}'. "
                f"Must be one of: {VALID_OUTPUT_FORMATS}"
            )

        if self.output.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level '{self.output.log_level}'. "
                f"Must be one of: {VALID_LOG_LEVELS}"
            )

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'words': list(self.words),
            'word_file': self.word_file,
            'count': self.count,
            'settings': self.settings.to_dict(),
            'output': asdict(self.output),
        }


def load_word_list(path: str) -> List[str]:
    """
    Load raw words from a file.

    A YAML file must hold a list (or a mapping with a 'words' list); any
    other file is read as one word per line, skipping blanks and lines
    starting with '#'.

    Raises:
        ConfigValidationError: If the file is missing or malformed
    """
    path = Path(path)
    if not path.exists():
        raise ConfigValidationError(f"Word file not found: {path}")

    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(path.read_text(encoding='utf-8'))
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {path}: {e}")
        if isinstance(data, dict):
            data = data.get('words')
        if not isinstance(data, list):
            raise ConfigValidationError(
                f"Word file {path} must contain a list of words"
            )
        return [str(w) for w in data]

    words = []
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            words.append(line)
    return words


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Generate crossword layouts from a list of words",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # First layout for four words
  crossword-layouts hello world foo raw

  # Every layout that fits in 7x7, as YAML
  crossword-layouts --word-file words.txt --all --max-width 7 --max-height 7 --format yaml

  # CLI arguments override YAML
  crossword-layouts --config layouts.yaml --count 5
"""
    )

    parser.add_argument(
        "words",
        nargs="*",
        metavar="WORD",
        help="Words to arrange"
    )
    parser.add_argument(
        "--config", "-c",
        metavar="PATH",
        help="YAML configuration file"
    )
    parser.add_argument(
        "--word-file", "-w",
        metavar="PATH",
        help="File with one word per line, or a YAML list"
    )

    # How many layouts
    count_group = parser.add_mutually_exclusive_group()
    count_group.add_argument(
        "--count", "-n",
        type=int,
        metavar="INT",
        help="Number of layouts to generate (default: 1)"
    )
    count_group.add_argument(
        "--all",
        action="store_true",
        help="Generate every distinct layout"
    )

    # Settings
    parser.add_argument("--max-width", type=int, metavar="INT", help="Maximum layout width")
    parser.add_argument("--max-height", type=int, metavar="INT", help="Maximum layout height")
    parser.add_argument("--max-area", type=int, metavar="INT", help="Maximum layout area")
    parser.add_argument(
        "--allow-disconnected",
        action="store_true",
        help="Allow words that do not intersect the rest"
    )
    parser.add_argument(
        "--allow-flush",
        action="store_true",
        help="Allow parallel words side by side"
    )
    parser.add_argument(
        "--allow-end-to-end",
        action="store_true",
        help="Allow collinear words touching end to end"
    )
    parser.add_argument(
        "--allow-end-to-side",
        action="store_true",
        help="Allow a word end touching the side of another word"
    )
    parser.add_argument(
        "--forbid-corner-touch",
        action="store_true",
        help="Forbid words touching diagonally at a corner"
    )
    parser.add_argument(
        "--min-words",
        type=int,
        metavar="INT",
        help="Minimum words in a partial layout"
    )
    parser.add_argument(
        "--allow-subset",
        action="store_true",
        help="Accept layouts that leave some words out"
    )
    parser.add_argument(
        "--word-order",
        choices=VALID_WORD_ORDERS,
        help="Order in which words are tried"
    )
    parser.add_argument(
        "--seed",
        type=int,
        metavar="INT",
        help="Seed for --word-order shuffled"
    )
    parser.add_argument(
        "--explored-limit",
        type=int,
        metavar="INT",
        help="Forget explored search states after this many (default: keep all)"
    )

    # Output settings
    parser.add_argument(
        "--format", "-f",
        choices=VALID_OUTPUT_FORMATS,
        help="Output format (default: text)"
    )
    parser.add_argument(
        "--log-dir",
        metavar="PATH",
        help="Directory for the rotating log file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate config without generating"
    )

    return parser


def load_config(args: Optional[argparse.Namespace] = None) -> LayoutConfig:
    """
    Load configuration from command-line and/or YAML file.

    Args:
        args: Parsed command-line arguments (if None, parses sys.argv)

    Returns:
        Fully resolved LayoutConfig

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if args is None:
        parser = create_argument_parser()
        args = parser.parse_args()

    yaml_config = None
    if getattr(args, 'config', None):
        yaml_config = LayoutConfig.from_yaml(args.config)

    cli_config = LayoutConfig.from_args(args)

    if yaml_config:
        config = LayoutConfig.merge(yaml_config, cli_config)
    else:
        config = cli_config

    errors = config.validate()
    if errors:
        raise ConfigValidationError(
            "Configuration validation failed:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )

    return config
