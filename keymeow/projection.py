#!/usr/bin/env python3
"""
Projection of resolved matrices back to layout documents.

These are plain readouts of the current matrix, used to display or save a
layout after the Analyzer has swapped keys around. The Flexible projection
inverts assignment for single-finger, non-overflowing layouts; layouts that
relied on overflow or multi-finger components come back in canonical form
instead.
"""

from typing import List

from keymeow.analysis import Layout
from keymeow.corpus import EMPTY_SYMBOL, Corpus
from keymeow.geometry import Keyboard
from keymeow.layout_data import FixedFormat, FlexibleFormat, KeyComponent, LayoutData


def fixed_from_layout(layout: Layout, corpus: Corpus) -> LayoutData:
    """Decode every matrix slot; empty slots become None."""
    slots = tuple(
        None if symbol == EMPTY_SYMBOL else corpus.uncorpus_unigram(symbol)
        for symbol in layout.matrix
    )
    return LayoutData.from_format(FixedFormat(slots=slots))


def flexible_from_keyboard_layout(keyboard: Keyboard, layout: Layout, corpus: Corpus) -> LayoutData:
    """
    Rebuild key components from a matrix.

    Emits one component per finger holding its non-empty keys in slot order,
    then one single-character component per filled combo whose candidate
    fingers are the fingers the combo touches.
    """
    components: List[KeyComponent] = []
    i = 0
    for finger, finger_keys in keyboard.keys.items():
        chars = []
        for _ in finger_keys:
            if layout.matrix[i] != EMPTY_SYMBOL:
                chars.append(corpus.uncorpus_unigram(layout.matrix[i]))
            i += 1
        if chars:
            components.append(KeyComponent(
                finger=(finger,),
                layer=finger_keys[0].pos.layer,
                keys=tuple(chars),
            ))

    for combo in keyboard.combos:
        symbol = layout.matrix[i]
        i += 1
        if symbol == EMPTY_SYMBOL:
            continue
        components.append(KeyComponent(
            finger=tuple(combo.fingers),
            layer=combo.coords[0].pos.layer,
            keys=(corpus.uncorpus_unigram(symbol),),
        ))

    return LayoutData.from_format(FlexibleFormat(components=tuple(components)))
