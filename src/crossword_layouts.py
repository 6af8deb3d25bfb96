#!/usr/bin/env python3
# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Crossword Layout Generator

Arranges a list of words into crossword layouts:
1. Words are normalized and de-duplicated
2. A backtracking search places them on an open plane
3. Layouts are pulled on demand, one batch at a time
4. Results are printed as character tables or YAML

Usage:
    # First layout for a few words:
    python crossword_layouts.py hello world foo raw

    # With YAML configuration:
    python crossword_layouts.py --config layouts.yaml

    # Every layout within a 7x7 box, as YAML:
    python crossword_layouts.py --word-file words.txt --all --max-width 7 --max-height 7 --format yaml
"""

import logging
import sys
import time
from typing import List, Optional

from config import (
    LayoutConfig, ConfigValidationError, create_argument_parser,
    load_config, load_word_list
)
from crossword_stream import ALL, CrosswordStream
from crossword_view import render_text
from logging_config import setup_logging
from models import Crossword, InvalidWordError, normalize_words
from placement_search import SearchAbortedError
from yaml_exporter import CrosswordYAMLExporter


class LayoutGenerator:
    """
    Runs one generation session from a LayoutConfig.

    Workflow:
    1. Collect words from the config and the optional word file
    2. Open a CrosswordStream with the configured settings
    3. Request the configured number of layouts (or all of them)
    4. Format the result for output
    """

    def __init__(self, config: LayoutConfig):
        """
        Initialize the generator.

        Args:
            config: LayoutConfig instance with all settings

        Raises:
            ConfigValidationError: If the word file cannot be read
            InvalidWordError: If a word is empty or malformed
            SearchAbortedError: If the settings can never be satisfied
        """
        self.config = config
        self.logger = logging.getLogger(__name__)

        raw_words: List[str] = list(config.words)
        if config.word_file:
            raw_words.extend(load_word_list(config.word_file))
            self.logger.debug(f"Loaded words from {config.word_file}")

        self.words = normalize_words(raw_words)
        self.logger.info(f"Arranging {len(self.words)} words")

        self.stream = CrosswordStream(self.words, config.settings)
        self.crosswords: List[Crossword] = []
        self.elapsed = 0.0

    def generate(self) -> List[Crossword]:
        """Pull the configured number of layouts from the stream."""
        start = time.time()
        count = ALL if self.config.count is None else self.config.count
        result = self.stream.request(count)
        self.crosswords = result.crosswords
        self.elapsed = time.time() - start

        self.logger.info(
            f"Generated {len(self.crosswords)} layout(s) in {self.elapsed:.2f}s"
            f"{' (search exhausted)' if result.exhausted else ''}"
        )
        return self.crosswords

    def format_output(self) -> str:
        """Render the generated layouts in the configured format."""
        if self.config.output.format == "yaml":
            return CrosswordYAMLExporter().export(
                self.crosswords,
                stats=self.stream.stats,
                settings=self.stream.settings,
            )

        blocks = []
        for index, crossword in enumerate(self.crosswords, start=1):
            header = (f"Layout {index}: {crossword.word_count} words, "
                      f"{crossword.width}x{crossword.height}")
            blocks.append(header + "\n" + render_text(crossword))
        if not blocks:
            return "No layouts found."
        return "\n\n".join(blocks)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)

        setup_logging(
            output_dir=config.output.log_dir,
            log_level=config.output.log_level,
            log_file_prefix=config.output.log_file_prefix,
            enable_console=config.output.enable_console_logging,
        )
        logger = logging.getLogger(__name__)

        if args.dry_run:
            print("Configuration valid:")
            print(f"  Words: {len(config.words)}")
            print(f"  Word file: {config.word_file}")
            print(f"  Count: {'all' if config.count is None else config.count}")
            print(f"  Format: {config.output.format}")
            for name, value in config.settings.to_dict().items():
                print(f"  {name}: {value}")
            return 0

        generator = LayoutGenerator(config)
        generator.generate()
        print(generator.format_output())
        logger.debug(f"Search stats: {generator.stream.stats}")
        return 0

    except ConfigValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except InvalidWordError as e:
        print(f"Invalid word: {e}", file=sys.stderr)
        return 1
    except SearchAbortedError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nGeneration cancelled.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
