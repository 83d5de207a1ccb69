#!/usr/bin/env python3
"""
Resolved layouts and the statistics engine that reads them.

A Layout is the flat symbol matrix produced by layout assignment: one entry
per physical key in finger-flattened order, then one per combo. The Analyzer
sums, for each metric, the corpus frequency of the ngrams currently sitting
on each declared stroke, weighted by the stroke's amount for that metric.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from keymeow.corpus import EMPTY_SYMBOL, Corpus
from keymeow.exceptions import MetricDataError

logger = logging.getLogger(__name__)


class NgramType(Enum):
    MONOGRAM = 'Monogram'
    BIGRAM = 'Bigram'
    TRIGRAM = 'Trigram'

    @property
    def length(self) -> int:
        return {'Monogram': 1, 'Bigram': 2, 'Trigram': 3}[self.value]

    @classmethod
    def parse(cls, value: Any) -> 'NgramType':
        if isinstance(value, NgramType):
            return value
        for ngram_type in cls:
            if str(value).lower() == ngram_type.value.lower():
                return ngram_type
        raise MetricDataError(f"Unknown ngram type '{value}'. Expected one of: {[t.value for t in cls]}")


_NSTROKE_NAMES = {'Monostroke': 1, 'Bistroke': 2, 'Tristroke': 3}


@dataclass(frozen=True)
class Swap:
    a: int
    b: int


@dataclass(frozen=True)
class MetricAmount:
    metric: int
    amount: float


@dataclass(frozen=True)
class NstrokeData:
    """A sequence of 1-3 matrix positions and what it contributes to each metric."""
    positions: Tuple[int, ...]
    amounts: Tuple[MetricAmount, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NstrokeData':
        """
        Decode a stroke such as {'nstroke': {'Bistroke': [0, 1]}, 'amounts': [...]}.

        Raises:
            MetricDataError: If the stroke is malformed
        """
        nstroke = data.get('nstroke') if isinstance(data, dict) else None
        if not isinstance(nstroke, dict) or len(nstroke) != 1:
            raise MetricDataError(f"Stroke must hold one of {list(_NSTROKE_NAMES)}: {data!r}")

        (kind, raw_positions), = nstroke.items()
        if kind not in _NSTROKE_NAMES:
            raise MetricDataError(f"Unknown stroke kind '{kind}'. Expected one of: {list(_NSTROKE_NAMES)}")
        positions = raw_positions if isinstance(raw_positions, list) else [raw_positions]
        if len(positions) != _NSTROKE_NAMES[kind]:
            raise MetricDataError(f"{kind} needs {_NSTROKE_NAMES[kind]} positions, got {positions!r}")

        try:
            amounts = tuple(
                MetricAmount(metric=int(a['metric']), amount=float(a['amount']))
                for a in data.get('amounts', [])
            )
        except (KeyError, TypeError, ValueError) as e:
            raise MetricDataError(f"Invalid stroke amounts in {data!r}: {e}")

        try:
            positions = tuple(int(p) for p in positions)
        except (TypeError, ValueError):
            raise MetricDataError(f"{kind} positions must be integers, got {raw_positions!r}")

        return cls(positions=positions, amounts=amounts)


class Layout:
    """Flat symbol matrix consumed by the Analyzer."""

    def __init__(self, matrix: Sequence[int]):
        self.matrix: List[int] = list(matrix)

    def __len__(self) -> int:
        return len(self.matrix)

    def __getitem__(self, i: int) -> int:
        return self.matrix[i]

    def __iter__(self):
        return iter(self.matrix)

    def __eq__(self, other) -> bool:
        return isinstance(other, Layout) and self.matrix == other.matrix

    def __repr__(self) -> str:
        return f"Layout({self.matrix!r})"

    def swap(self, swap: Swap) -> None:
        """
        Exchange the symbols at two matrix positions in place.

        Raises:
            ValueError: If either position is outside the matrix
        """
        for i in (swap.a, swap.b):
            if not 0 <= i < len(self.matrix):
                raise ValueError(f"Swap position {i} is outside the layout (size {len(self.matrix)})")
        self.matrix[swap.a], self.matrix[swap.b] = self.matrix[swap.b], self.matrix[swap.a]


@dataclass
class AnalyzerData:
    """Metric ngram types and strokes, checked against the matrix size."""
    ngram_types: List[NgramType]
    strokes: List[NstrokeData]
    layout_size: int
    metric_strokes: List[List[Tuple[Tuple[int, ...], float]]] = field(default_factory=list)

    @classmethod
    def from_metrics(cls, ngram_types: List[NgramType],
                     strokes: List[NstrokeData],
                     layout_size: int) -> 'AnalyzerData':
        """
        Group strokes by metric.

        Raises:
            MetricDataError: If a stroke leaves the matrix, refers to an
                unknown metric, or its length disagrees with the metric's
                ngram type
        """
        metric_strokes = [[] for _ in ngram_types]
        for stroke in strokes:
            for position in stroke.positions:
                if not 0 <= position < layout_size:
                    raise MetricDataError(
                        f"Stroke position {position} is outside the layout (size {layout_size})"
                    )
            for amount in stroke.amounts:
                if not 0 <= amount.metric < len(ngram_types):
                    raise MetricDataError(
                        f"Stroke refers to metric {amount.metric}, only {len(ngram_types)} declared"
                    )
                if ngram_types[amount.metric].length != len(stroke.positions):
                    raise MetricDataError(
                        f"Metric {amount.metric} is a {ngram_types[amount.metric].value} "
                        f"but stroke {stroke.positions} has {len(stroke.positions)} positions"
                    )
                metric_strokes[amount.metric].append((stroke.positions, amount.amount))

        return cls(ngram_types=list(ngram_types), strokes=list(strokes),
                   layout_size=layout_size, metric_strokes=metric_strokes)


class Analyzer:
    """Computes per-metric statistics for layouts over one corpus."""

    def __init__(self, data: AnalyzerData, corpus: Corpus):
        self.data = data
        self.corpus = corpus

    def _frequencies(self, ngram_type: NgramType) -> np.ndarray:
        if ngram_type is NgramType.MONOGRAM:
            return self.corpus.chars
        if ngram_type is NgramType.BIGRAM:
            return self.corpus.bigrams
        return self.corpus.trigrams

    def calc_stats(self, layout: Layout) -> List[float]:
        """
        Weighted ngram frequency per metric.

        Returns:
            One value per metric, in declaration order

        Raises:
            ValueError: If the layout length differs from the analyzer's
        """
        if len(layout) != self.data.layout_size:
            raise ValueError(f"Layout has {len(layout)} slots, analyzer expects {self.data.layout_size}")

        matrix = np.asarray(layout.matrix, dtype=np.intp)
        stats = []
        for ngram_type, strokes in zip(self.data.ngram_types, self.data.metric_strokes):
            if not strokes:
                stats.append(0.0)
                continue
            positions = np.array([p for p, _ in strokes], dtype=np.intp)
            amounts = np.array([a for _, a in strokes], dtype=np.float64)
            symbols = matrix[positions]
            freqs = self._frequencies(ngram_type)[tuple(symbols.T)]
            stats.append(float(np.dot(freqs, amounts)))
        return stats

    def total_char_count(self, layout: Layout) -> float:
        """Corpus frequency of every character placed on the layout."""
        symbols = {s for s in layout.matrix if s != EMPTY_SYMBOL}
        return float(sum(self.corpus.chars[s] for s in symbols))
