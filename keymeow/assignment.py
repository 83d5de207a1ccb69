#!/usr/bin/env python3
"""
Layout assignment: author-facing layout encodings to resolved matrices.

The resolved matrix holds one symbol per physical key, in finger-flattened
order, followed by one symbol per combo in declaration order. Its length is
always keyboard.kb_size + len(keyboard.combos); an encoding that cannot
produce exactly that many slots resolves to None.
"""

import logging
from typing import List, Optional

from keymeow.analysis import Layout
from keymeow.corpus import EMPTY_CHAR, Corpus
from keymeow.geometry import FINGER_ORDER, Finger, Keyboard
from keymeow.layout_data import FixedFormat, FlexibleFormat, KeyComponent, LayoutData

logger = logging.getLogger(__name__)


class FingerSlots:
    """Key slots of one finger, sized from the keyboard, filled front to back."""

    def __init__(self, capacity: int):
        self.slots: List[str] = [EMPTY_CHAR] * capacity
        self.filled = 0

    @property
    def capacity(self) -> int:
        return len(self.slots)

    def has_room(self) -> bool:
        return self.filled < self.capacity

    def push(self, c: str) -> None:
        self.slots[self.filled] = c
        self.filled += 1


class FlexibleAssignment:
    """
    Greedy placement state for a Flexible layout.

    Components are placed in order. A finger takes characters until its keys
    run out; after that, characters spill into the first combo touching the
    finger whose slot is still empty. Anything left over is dropped.
    """

    def __init__(self, keyboard: Keyboard):
        self.keyboard = keyboard
        self.fingers = {finger: FingerSlots(keyboard.capacity(finger)) for finger in FINGER_ORDER}
        self.combos: List[str] = [EMPTY_CHAR] * len(keyboard.combos)
        self.dropped: List[str] = []

    def _claim_combo(self, finger: Finger, c: str) -> bool:
        for i in self.keyboard.combos_for(finger):
            if self.combos[i] == EMPTY_CHAR:
                self.combos[i] = c
                return True
        return False

    def _place(self, finger: Finger, c: str) -> bool:
        slots = self.fingers[finger]
        if slots.has_room():
            slots.push(c)
            return True
        return self._claim_combo(finger, c)

    def add_component(self, component: KeyComponent) -> None:
        if component.is_single_finger:
            finger = component.finger[0]
            for c in component.keys:
                if not self._place(finger, c):
                    self.dropped.append(c)
            return

        if not component.keys:
            return
        c = component.keys[0]
        if len(component.keys) > 1:
            logger.debug(
                f"Component on fingers {[f.value for f in component.finger]} places only "
                f"{c!r}; ignoring {list(component.keys[1:])}"
            )
        if not any(self._place(finger, c) for finger in component.finger):
            self.dropped.append(c)

    def chars(self) -> List[str]:
        """Every finger's slots in finger order, then the combo slots."""
        result = []
        for finger in FINGER_ORDER:
            result.extend(self.fingers[finger].slots)
        result.extend(self.combos)
        return result


def resolve_fixed(layout_format: FixedFormat, keyboard: Keyboard, corpus: Corpus) -> Optional[Layout]:
    """
    Map a Fixed layout slot by slot onto the physical keys.

    Trailing keys the layout does not mention and every combo slot stay
    empty; Fixed layouts never address combos.
    """
    kb_size = keyboard.kb_size
    if len(layout_format.slots) > kb_size:
        logger.debug(f"Fixed layout has {len(layout_format.slots)} slots for {kb_size} keys")
        return None

    chars = list(layout_format.slots) + [None] * (keyboard.matrix_size - len(layout_format.slots))
    return Layout(corpus.corpus_char(c) for c in chars)


def resolve_flexible(layout_format: FlexibleFormat, keyboard: Keyboard, corpus: Corpus) -> Optional[Layout]:
    """
    Place Flexible key components onto fingers and combos.

    Single-finger components place all of their characters; components with
    several candidate fingers place only their first character, on the first
    candidate with a free key or free combo. Characters with nowhere to go
    are dropped without error.
    """
    assignment = FlexibleAssignment(keyboard)
    for component in layout_format.components:
        assignment.add_component(component)

    if assignment.dropped:
        logger.debug(f"Dropped {len(assignment.dropped)} characters with no free key or combo: {assignment.dropped}")

    matrix = [corpus.corpus_char(c) for c in assignment.chars()]
    if len(matrix) != keyboard.matrix_size:
        logger.debug(f"Resolved {len(matrix)} slots, keyboard needs {keyboard.matrix_size}")
        return None
    return Layout(matrix)


def resolve_layout(layout_data: LayoutData, keyboard: Keyboard, corpus: Corpus) -> Optional[Layout]:
    """
    Resolve a layout document into the matrix the Analyzer consumes.

    Args:
        layout_data: Fixed or Flexible layout
        keyboard: Keyboard geometry
        corpus: Symbol interner

    Returns:
        Layout of length kb_size + number of combos, or None if the layout
        does not fit the keyboard
    """
    if isinstance(layout_data.format, FixedFormat):
        return resolve_fixed(layout_data.format, keyboard, corpus)
    return resolve_flexible(layout_data.format, keyboard, corpus)
