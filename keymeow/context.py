#!/usr/bin/env python3
"""
Metric context: keyboard, metrics, current layout and Analyzer in one place.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from keymeow.analysis import Analyzer, AnalyzerData, Layout, NgramType, NstrokeData, Swap
from keymeow.assignment import resolve_layout
from keymeow.corpus import Corpus
from keymeow.exceptions import MetricDataError
from keymeow.geometry import Keyboard
from keymeow.layout_data import LayoutData
from keymeow.projection import fixed_from_layout, flexible_from_keyboard_layout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Metric:
    name: str
    short: str
    ngram_type: NgramType

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Metric':
        try:
            return cls(
                name=str(data['name']),
                short=str(data.get('short', data['name'])),
                ngram_type=NgramType.parse(data['ngram_type']),
            )
        except (KeyError, TypeError) as e:
            raise MetricDataError(f"Invalid metric {data!r}: missing {e}")


@dataclass
class MetricData:
    """Contents of a metric data document."""
    metrics: List[Metric]
    strokes: List[NstrokeData]
    keyboard: Keyboard

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MetricData':
        """
        Decode metrics, strokes and keyboard.

        Raises:
            MetricDataError: If a section is missing or malformed
            GeometryIntegrityError: If a combo uses a position with no key
        """
        if not isinstance(data, dict):
            raise MetricDataError(f"Metric data must be an object, got {type(data).__name__}")
        if 'keyboard' not in data:
            raise MetricDataError("Metric data has no 'keyboard' section")

        return cls(
            metrics=[Metric.from_dict(m) for m in data.get('metrics') or []],
            strokes=[NstrokeData.from_dict(s) for s in data.get('strokes') or []],
            keyboard=Keyboard.from_dict(data['keyboard']),
        )


class MetricContext:
    """
    Owns the keyboard, metric declarations, the resolved layout and the
    Analyzer built over them.

    The layout is only ever replaced as a whole by set_layout; in-place
    changes come from swap.
    """

    def __init__(self, metrics: List[Metric], keyboard: Keyboard, analyzer: Analyzer, layout: Layout):
        self.metrics = metrics
        self.keyboard = keyboard
        self.analyzer = analyzer
        self.layout = layout

    @classmethod
    def new(cls, layout_data: LayoutData, metric_data: MetricData, corpus: Corpus) -> Optional['MetricContext']:
        """
        Resolve the initial layout and build the Analyzer over it.

        Args:
            layout_data: Initial layout document
            metric_data: Metrics, strokes and keyboard
            corpus: Symbol interner and frequencies, handed to the Analyzer

        Returns:
            New context, or None if the layout does not fit the keyboard

        Raises:
            GeometryIntegrityError: If a combo uses a position with no key
            MetricDataError: If strokes do not match the metrics or matrix size
        """
        # Combos may have been edited since the keyboard was built
        metric_data.keyboard.process_combo_indexes()
        layout = resolve_layout(layout_data, metric_data.keyboard, corpus)
        if layout is None:
            logger.debug(f"Layout '{layout_data.name}' does not fit the keyboard")
            return None

        analyzer_data = AnalyzerData.from_metrics(
            [m.ngram_type for m in metric_data.metrics],
            metric_data.strokes,
            len(layout),
        )
        return cls(
            metrics=metric_data.metrics,
            keyboard=metric_data.keyboard,
            analyzer=Analyzer(analyzer_data, corpus),
            layout=layout,
        )

    @property
    def corpus(self) -> Corpus:
        return self.analyzer.corpus

    def set_layout(self, layout_data: LayoutData) -> Optional[bool]:
        """
        Replace the current layout with a newly resolved one.

        Returns:
            True on success, None if the layout does not fit (state unchanged)
        """
        layout = resolve_layout(layout_data, self.keyboard, self.corpus)
        if layout is None:
            return None
        self.layout = layout
        return True

    def fixed_layout_data(self) -> LayoutData:
        return fixed_from_layout(self.layout, self.corpus)

    def flexible_layout_data(self) -> LayoutData:
        return flexible_from_keyboard_layout(self.keyboard, self.layout, self.corpus)

    def calc_stats(self) -> List[float]:
        return self.analyzer.calc_stats(self.layout)

    def swap(self, a: int, b: int) -> None:
        self.layout.swap(Swap(a, b))

    def matrix_chars(self) -> List[str]:
        """Current matrix decoded to characters (EMPTY_CHAR for empty slots)."""
        return [self.corpus.uncorpus_unigram(s) for s in self.layout.matrix]
