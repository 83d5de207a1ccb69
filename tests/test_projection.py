"""Tests for projecting resolved matrices back to layout documents (keymeow.projection)."""

import random

from keymeow.analysis import Layout
from keymeow.assignment import resolve_layout
from keymeow.corpus import EMPTY_SYMBOL
from keymeow.geometry import Finger
from keymeow.layout_data import LayoutData, parse_layout_format
from keymeow.projection import fixed_from_layout, flexible_from_keyboard_layout


# ── Fixed ───────────────────────────────────────────────────────

def test_fixed_projection_maps_empty_to_none(corpus):
    layout = Layout([corpus.corpus_char("a"), EMPTY_SYMBOL, corpus.corpus_char("B")])
    projected = fixed_from_layout(layout, corpus)
    assert projected.is_fixed
    assert projected.format.slots == ("a", None, "b")
    assert projected.name == ""


def test_fixed_round_trip(matrix_keyboard, corpus):
    rng = random.Random(7)
    for _ in range(20):
        matrix = [rng.randrange(len(corpus)) for _ in range(matrix_keyboard.kb_size)]
        layout = Layout(matrix)
        resolved = resolve_layout(fixed_from_layout(layout, corpus), matrix_keyboard, corpus)
        assert resolved == layout


def test_fixed_projection_includes_combo_slots(combo_keyboard, corpus):
    layout_data = LayoutData.from_format(parse_layout_format([{"finger": ["LP"], "keys": list("abcd")}]))
    layout = resolve_layout(layout_data, combo_keyboard, corpus)
    projected = fixed_from_layout(layout, corpus)
    assert len(projected.format.slots) == 31
    assert projected.format.slots[30] == "d"


# ── Flexible ────────────────────────────────────────────────────

def test_flexible_projection_reproduces_components(flexible_semimak, matrix_keyboard, corpus):
    layout = resolve_layout(flexible_semimak, matrix_keyboard, corpus)
    projected = flexible_from_keyboard_layout(matrix_keyboard, layout, corpus)
    assert projected.is_flexible
    assert projected.format.components == flexible_semimak.format.components


def test_flexible_projection_skips_empty_fingers(fixed_semimak, matrix_keyboard, corpus):
    layout = resolve_layout(fixed_semimak, matrix_keyboard, corpus)
    components = flexible_from_keyboard_layout(matrix_keyboard, layout, corpus).format.components
    assert [c.finger for c in components] == [
        (Finger.LP,), (Finger.LR,), (Finger.LM,), (Finger.LI,),
        (Finger.RI,), (Finger.RM,), (Finger.RR,), (Finger.RP,),
    ]
    # The empty first slot is left out of LP's keys
    assert components[0].keys == ("s", "x")


def test_flexible_projection_emits_combo_components(two_combo_keyboard, corpus):
    layout_data = LayoutData.from_format(parse_layout_format([
        {"finger": ["LP"], "layer": 0, "keys": list("abcde")},
    ]))
    layout = resolve_layout(layout_data, two_combo_keyboard, corpus)
    components = flexible_from_keyboard_layout(two_combo_keyboard, layout, corpus).format.components

    assert len(components) == 3
    assert components[0].finger == (Finger.LP,)
    assert components[0].keys == ("a", "b", "c")
    assert components[1].finger == (Finger.LP, Finger.LR)
    assert components[1].layer == 0
    assert components[1].keys == ("d",)
    assert components[2].finger == (Finger.LP, Finger.LM)
    assert components[2].layer == 1
    assert components[2].keys == ("e",)


def test_flexible_projection_resolves_to_same_matrix(two_combo_keyboard, corpus):
    layout_data = LayoutData.from_format(parse_layout_format([
        {"finger": ["LP"], "layer": 0, "keys": list("abcd")},
        {"finger": ["RI"], "layer": 0, "keys": list("xy")},
    ]))
    layout = resolve_layout(layout_data, two_combo_keyboard, corpus)
    projected = flexible_from_keyboard_layout(two_combo_keyboard, layout, corpus)
    assert resolve_layout(projected, two_combo_keyboard, corpus) == layout
