# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
YAML exporter for crossword layouts.

Turns retrieved crosswords into a YAML document for printing. Nothing is
written to disk here; callers decide where the text goes.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import yaml

from config import GeneratorSettings
from models import Crossword


class CrosswordYAMLExporter:
    """
    Exports crosswords to YAML.

    Usage:
        exporter = CrosswordYAMLExporter()
        yaml_str = exporter.export(crosswords, stats=stream.stats)
    """

    def build_document(
        self,
        crosswords: Sequence[Crossword],
        stats: Optional[Dict[str, Any]] = None,
        settings: Optional[GeneratorSettings] = None
    ) -> Dict[str, Any]:
        """Build the plain mapping that gets serialized."""
        document: Dict[str, Any] = {
            'metadata': {
                'date': datetime.now().strftime("%Y-%m-%d"),
                'crossword_count': len(crosswords),
            },
        }
        if settings is not None:
            document['settings'] = settings.to_dict()
        if stats:
            document['stats'] = dict(stats)

        layouts: List[Dict[str, Any]] = []
        for index, crossword in enumerate(crosswords, start=1):
            entry = {'index': index}
            entry.update(crossword.to_dict())
            layouts.append(entry)
        document['crosswords'] = layouts

        return document

    def export(
        self,
        crosswords: Sequence[Crossword],
        stats: Optional[Dict[str, Any]] = None,
        settings: Optional[GeneratorSettings] = None
    ) -> str:
        """
        Export crosswords to a YAML string.

        Args:
            crosswords: Crosswords to export
            stats: Optional search statistics
            settings: Optional settings used for the search

        Returns:
            YAML document
        """
        header = "# Crossword layouts\n\n"
        yaml_content = yaml.safe_dump(
            self.build_document(crosswords, stats, settings),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            indent=2,
            width=80,
        )
        return header + yaml_content
