#!/usr/bin/env python3
"""
Document loader for layouts and metric data.

Layout and metric data documents are JSON or YAML files; both are read
through PyYAML, which accepts JSON as a subset of YAML.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional

import yaml

from keymeow.context import MetricData
from keymeow.exceptions import KeymeowError
from keymeow.layout_data import LayoutData

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Handles loading and caching of one JSON/YAML document."""

    def __init__(self, config_path: str):
        """
        Initialize document loader.

        Args:
            config_path: Path to the JSON or YAML document
        """
        self.config_path = Path(config_path)
        self._config_cache: Optional[Any] = None

    def load_config(self) -> Any:
        """
        Load the document.

        Returns:
            Parsed document ({} for an empty file)

        Raises:
            FileNotFoundError: If the document doesn't exist
            yaml.YAMLError: If parsing fails
        """
        if self._config_cache is not None:
            return self._config_cache

        if not self.config_path.exists():
            raise FileNotFoundError(f"Document not found: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing {self.config_path}: {e}")

        if config is None:
            config = {}

        logger.info(f"Loaded {self.config_path}")
        self._config_cache = config
        return config

    def get_layout_data(self) -> LayoutData:
        """
        Decode the document as a layout.

        Raises:
            LayoutFormatError: If the document is not a valid layout
        """
        return LayoutData.from_dict(self.load_config())

    def get_metric_data(self) -> MetricData:
        """
        Decode the document as metric data (metrics, strokes, keyboard).

        Raises:
            MetricDataError: If a section is missing or malformed
            GeometryIntegrityError: If a combo uses a position with no key
        """
        return MetricData.from_dict(self.load_config())

    def validate_metric_data(self) -> List[str]:
        """
        Check the document as metric data and return any issues found.

        Returns:
            List of validation error messages (empty if valid)
        """
        try:
            metric_data = self.get_metric_data()
        except (KeymeowError, FileNotFoundError, yaml.YAMLError) as e:
            return [f"Metric data error: {e}"]

        issues = []

        if not metric_data.metrics:
            issues.append("No metrics declared")

        for finger, keys in metric_data.keyboard.keys.items():
            for key in keys:
                if key.finger != finger:
                    issues.append(
                        f"Key at (col={key.pos.col}, row={key.pos.row}) is listed under "
                        f"{finger.value} but assigned to {key.finger.value}"
                    )

        used = set()
        for stroke in metric_data.strokes:
            used.update(a.metric for a in stroke.amounts)
        for i, metric in enumerate(metric_data.metrics):
            if i not in used:
                issues.append(f"Metric '{metric.short}' has no strokes")

        return issues


# Global document loader instance
_config_loader: Optional[ConfigLoader] = None

def get_config_loader(config_path: str) -> ConfigLoader:
    """
    Get the global loader, replacing it when a different path is asked for.

    Args:
        config_path: Path to the document

    Returns:
        ConfigLoader instance
    """
    global _config_loader

    if _config_loader is None or _config_loader.config_path != Path(config_path):
        _config_loader = ConfigLoader(config_path)

    return _config_loader

def load_layout_data(config_path: str) -> LayoutData:
    """Convenience function to load a layout document."""
    return get_config_loader(config_path).get_layout_data()

def load_metric_data(config_path: str) -> MetricData:
    """Convenience function to load a metric data document."""
    return get_config_loader(config_path).get_metric_data()

def validate_metric_data(config_path: str) -> List[str]:
    """Convenience function to list the issues in a metric data document."""
    return get_config_loader(config_path).validate_metric_data()
