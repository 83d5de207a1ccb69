#!/usr/bin/env python3
"""
Output utilities for resolved layouts.

Common functions for formatting matrices, metric statistics and layout
documents for display.
"""

import json
from typing import List, Optional

from keymeow.context import MetricContext
from keymeow.corpus import EMPTY_CHAR
from keymeow.layout_data import LayoutData


def _display_char(c: str, empty: str = '_') -> str:
    return empty if c == EMPTY_CHAR else c


def format_matrix(context: MetricContext, empty: str = '_') -> str:
    """
    Format the current matrix as one string of characters.

    Args:
        context: Metric context holding the layout
        empty: Character shown for empty slots

    Returns:
        Physical keys in finger-flattened order followed by combo slots
    """
    return ''.join(_display_char(c, empty) for c in context.matrix_chars())


def format_finger_rows(context: MetricContext, empty: str = '_') -> str:
    """
    Format the current matrix with one line per finger and one per combo.

    Returns:
        Multi-line string such as "LP: f s x"
    """
    chars = context.matrix_chars()
    lines = []
    i = 0
    for finger, keys in context.keyboard.keys.items():
        finger_chars = chars[i:i + len(keys)]
        i += len(keys)
        if finger_chars:
            lines.append(f"{finger.value}: {' '.join(_display_char(c, empty) for c in finger_chars)}")

    for n, combo in enumerate(context.keyboard.combos):
        fingers = '+'.join(f.value for f in combo.fingers)
        lines.append(f"combo {n} ({fingers}): {_display_char(chars[i], empty)}")
        i += 1

    return "\n".join(lines)


def _ratio(stat: float, total: float) -> str:
    if stat <= 0 or total <= 0:
        return "-"
    return f"1/{total / stat:.1f}"


def format_stats(context: MetricContext,
                 stats: Optional[List[float]] = None) -> str:
    """
    Format per-metric statistics as "short: 1/x" lines.

    Each value is shown relative to the corpus frequency of all characters on
    the layout.

    Args:
        context: Metric context
        stats: Precomputed statistics (calculated from the context if None)
    """
    if stats is None:
        stats = context.calc_stats()
    total = context.analyzer.total_char_count(context.layout)

    return "\n".join(
        f"{metric.short}: {_ratio(stat, total)}"
        for metric, stat in zip(context.metrics, stats)
    )


def format_stats_comparison(context: MetricContext,
                            old_stats: List[float],
                            new_stats: List[float]) -> str:
    """Format statistics before and after a change as "short: 1/x -> 1/y" lines."""
    total = context.analyzer.total_char_count(context.layout)

    return "\n".join(
        f"{metric.short}: {_ratio(old, total)} -> {_ratio(new, total)}"
        for metric, old, new in zip(context.metrics, old_stats, new_stats)
    )


def layout_data_to_json(layout_data: LayoutData, indent: Optional[int] = 2) -> str:
    """Serialize a layout document to JSON."""
    return json.dumps(layout_data.to_dict(), indent=indent, ensure_ascii=False)
