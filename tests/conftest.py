"""Shared fixtures: keyboards, corpus and reference layout documents."""

import json
from pathlib import Path

import pytest

from keymeow.corpus import Corpus, default_char_list
from keymeow.geometry import FINGER_ORDER, Combo, Finger, FingerMap, KeyCoord, Keyboard, Pos
from keymeow.layout_data import LayoutData

TEST_DATA = Path(__file__).parent / "test_data"

SEMIMAK = "fsxlrjhnbvtmzkq'cpwdgue,oa.yi/"


def key(col, row, finger, layer=0):
    return KeyCoord(pos=Pos(col=col, row=row, layer=layer), x=float(col), y=float(row), finger=finger)


def load_layout(name):
    with open(TEST_DATA / name, encoding="utf-8") as f:
        return LayoutData.from_dict(json.load(f))


# ── Keyboards ───────────────────────────────────────────────────

@pytest.fixture
def matrix_keyboard():
    """3x10 matrix; the index fingers also cover the two centre columns."""
    keys = FingerMap()
    for col in range(10):
        for row in range(3):
            if col == 4:
                finger = Finger.LI
            elif col == 5:
                finger = Finger.RI
            else:
                finger = FINGER_ORDER[col]
            keys[finger].append(key(col, row, finger))
    return Keyboard(keys=keys)


@pytest.fixture
def combo_keyboard():
    """Three keys per finger (one column each) and one LP+LR combo on row 0."""
    keys = FingerMap()
    for col, finger in enumerate(FINGER_ORDER):
        for row in range(3):
            keys[finger].append(key(col, row, finger))
    combo = Combo(coords=(key(0, 0, Finger.LP), key(1, 0, Finger.LR)))
    return Keyboard(keys=keys, combos=[combo])


@pytest.fixture
def two_combo_keyboard():
    """Three keys per finger and two combos touching LP: LP+LR, then LP+LM."""
    keys = FingerMap()
    for col, finger in enumerate(FINGER_ORDER):
        for row in range(3):
            keys[finger].append(key(col, row, finger))
    combos = [
        Combo(coords=(key(0, 0, Finger.LP), key(1, 0, Finger.LR))),
        Combo(coords=(key(0, 1, Finger.LP, layer=1), key(2, 1, Finger.LM, layer=1))),
    ]
    return Keyboard(keys=keys, combos=combos)


# ── Corpus and layouts ──────────────────────────────────────────

@pytest.fixture
def corpus():
    return Corpus.with_char_list(default_char_list())


@pytest.fixture
def flexible_semimak():
    return load_layout("flexible.json")


@pytest.fixture
def fixed_semimak():
    return load_layout("fixed.json")
