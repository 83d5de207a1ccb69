#!/usr/bin/env python3
"""
Resolve a keyboard layout document against a keyboard and report statistics.

This script loads a layout (Fixed or Flexible) and a metric data document
(metrics, strokes and keyboard geometry), resolves the layout into the flat
matrix used for analysis, and prints the matrix and per-metric statistics.
Optionally swaps two matrix positions and shows the statistics before and
after, and prints the layout back as a Fixed or Flexible document.

Usage:
    python layout_matrix.py --layout semimak.json --metrics ansi.json --corpus mr.txt
    python layout_matrix.py --layout semimak.json --metrics ansi.json --corpus mr.txt --swap 21 23
    python layout_matrix.py --layout semimak.json --metrics ansi.json --project flexible
"""

import argparse
import logging
import sys

import yaml

from keymeow.config_loader import get_config_loader
from keymeow.context import MetricContext
from keymeow.corpus import Corpus, default_char_list
from keymeow.exceptions import GeometryIntegrityError, KeymeowError
from keymeow.output_utils import (
    format_finger_rows,
    format_matrix,
    format_stats,
    format_stats_comparison,
    layout_data_to_json,
)

logger = logging.getLogger(__name__)


def build_corpus(text_files, frequency_files) -> Corpus:
    """Create the default corpus and add frequencies from text and CSV files."""
    corpus = Corpus.with_char_list(default_char_list())
    for text_file in text_files or []:
        corpus.add_file(text_file)
    for frequency_file in frequency_files or []:
        corpus.add_frequency_csv(frequency_file)
    return corpus


def main():
    parser = argparse.ArgumentParser(
        description='Resolve a keyboard layout into its analysis matrix',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python layout_matrix.py --layout semimak.json --metrics ansi.json --corpus mr.txt
  python layout_matrix.py --layout semimak.json --metrics ansi.json --corpus mr.txt --swap 21 23
  python layout_matrix.py --layout semimak.json --metrics ansi.json --project flexible
        """
    )

    parser.add_argument('--layout', required=True,
                       help='Layout document (JSON or YAML)')
    parser.add_argument('--metrics', required=True,
                       help='Metric data document with metrics, strokes and keyboard (JSON or YAML)')
    parser.add_argument('--corpus', action='append', default=[],
                       help='Text file to count ngram frequencies from (repeatable)')
    parser.add_argument('--frequencies', action='append', default=[],
                       help='CSV file of precomputed ngram counts with ngram,count columns (repeatable)')
    parser.add_argument('--swap', nargs=2, type=int, metavar=('A', 'B'),
                       help='Swap two matrix positions and compare statistics')
    parser.add_argument('--project', choices=['fixed', 'flexible'],
                       help='Print the resolved layout back as a Fixed or Flexible document')
    parser.add_argument('--fingers', action='store_true',
                       help='Show the matrix one finger per line')
    parser.add_argument('--verbose', action='store_true',
                       help='Show debug output')

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        layout_data = get_config_loader(args.layout).get_layout_data()
        metric_data = get_config_loader(args.metrics).get_metric_data()
        corpus = build_corpus(args.corpus, args.frequencies)
        context = MetricContext.new(layout_data, metric_data, corpus)
    except GeometryIntegrityError as e:
        logger.error(f"Inconsistent keyboard description: {e}")
        sys.exit(1)
    except (KeymeowError, FileNotFoundError, yaml.YAMLError) as e:
        logger.error(str(e))
        sys.exit(1)

    if context is None:
        logger.error(
            f"Layout '{layout_data.name}' does not fit the keyboard "
            f"({metric_data.keyboard.kb_size} keys, {len(metric_data.keyboard.combos)} combos)"
        )
        sys.exit(1)

    name = layout_data.name or args.layout
    print(f"\n{name}")
    print("=" * 40)
    if args.fingers:
        print(format_finger_rows(context))
    else:
        print(format_matrix(context))

    if context.metrics:
        old_stats = context.calc_stats()
        if args.swap:
            a, b = args.swap
            if not (0 <= a < len(context.layout) and 0 <= b < len(context.layout)):
                logger.error(f"Swap positions must be between 0 and {len(context.layout) - 1}")
                sys.exit(1)
            context.swap(a, b)
            print(f"\nSTATISTICS (swap {a} <-> {b})")
            print("-" * 40)
            print(format_stats_comparison(context, old_stats, context.calc_stats()))
            print(f"\n{format_matrix(context)}")
        else:
            print("\nSTATISTICS")
            print("-" * 40)
            print(format_stats(context, old_stats))

    if args.project == 'fixed':
        projected = context.fixed_layout_data()
    elif args.project == 'flexible':
        projected = context.flexible_layout_data()
    else:
        projected = None

    if projected is not None:
        projected = projected.with_name(layout_data.name).with_authors(list(layout_data.authors))
        if layout_data.note:
            projected = projected.with_note(layout_data.note)
        print(f"\n{layout_data_to_json(projected)}")


if __name__ == "__main__":
    main()
