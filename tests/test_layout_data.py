"""Tests for layout documents (keymeow.layout_data)."""

import pytest

from keymeow.exceptions import LayoutFormatError
from keymeow.geometry import Finger
from keymeow.layout_data import (
    FixedFormat,
    FlexibleFormat,
    KeyComponent,
    LayoutData,
    parse_layout_format,
)


# ── Format recognition ──────────────────────────────────────────

def test_list_of_objects_is_flexible():
    layout_format = parse_layout_format([{"finger": ["LP"], "layer": 0, "keys": ["a", "b"]}])
    assert isinstance(layout_format, FlexibleFormat)
    component = layout_format.components[0]
    assert component.finger == (Finger.LP,)
    assert component.layer == 0
    assert component.keys == ("a", "b")
    assert component.is_single_finger


def test_list_of_characters_is_fixed():
    layout_format = parse_layout_format(["a", None, "b", "\0"])
    assert isinstance(layout_format, FixedFormat)
    assert layout_format.slots == ("a", None, "b", None)


def test_mixed_shapes_are_rejected():
    with pytest.raises(LayoutFormatError, match="mixes shapes"):
        parse_layout_format(["a", {"finger": ["LP"], "keys": []}])
    with pytest.raises(LayoutFormatError):
        parse_layout_format(["ab"])
    with pytest.raises(LayoutFormatError, match="must be a list"):
        parse_layout_format("abc")


def test_component_validation():
    with pytest.raises(LayoutFormatError, match="at least one finger"):
        KeyComponent.from_dict({"finger": [], "layer": 0, "keys": ["a"]})
    with pytest.raises(LayoutFormatError, match="single characters"):
        KeyComponent.from_dict({"finger": ["LP"], "layer": 0, "keys": ["ab"]})
    with pytest.raises(LayoutFormatError, match="Unknown finger"):
        KeyComponent.from_dict({"finger": ["L5"], "layer": 0, "keys": ["a"]})
    with pytest.raises(LayoutFormatError):
        KeyComponent(finger=(), layer=0, keys=("a",))


@pytest.mark.parametrize("component, message", [
    ({"finger": ["LP"], "layer": "x", "keys": ["a"]}, "layer must be an integer"),
    ({"finger": ["LP"], "layer": None, "keys": ["a"]}, "layer must be an integer"),
    ({"finger": ["LP"], "layer": 0, "keys": 5}, "must be a list or a string"),
    ({"finger": 3, "layer": 0, "keys": ["a"]}, "list of finger names"),
    ({"finger": [3], "layer": 0, "keys": ["a"]}, "Unknown finger"),
])
def test_component_malformed_fields(component, message):
    with pytest.raises(LayoutFormatError, match=message):
        KeyComponent.from_dict(component)


def test_malformed_component_inside_document():
    with pytest.raises(LayoutFormatError):
        LayoutData.from_dict({"name": "bad", "components": [{"finger": ["LP"], "keys": 5}]})


def test_component_accepts_bare_finger_and_key_string():
    component = KeyComponent.from_dict({"finger": "ri", "keys": "abc"})
    assert component.finger == (Finger.RI,)
    assert component.layer == 0
    assert component.keys == ("a", "b", "c")


# ── Documents ───────────────────────────────────────────────────

def test_flexible_document(flexible_semimak):
    assert flexible_semimak.name == "semimak"
    assert flexible_semimak.authors == ("semi",)
    assert flexible_semimak.note is not None
    assert flexible_semimak.is_flexible
    assert len(flexible_semimak.format.components) == 8


def test_fixed_document(fixed_semimak):
    assert fixed_semimak.is_fixed
    assert fixed_semimak.note is None
    assert len(fixed_semimak.format.slots) == 30
    assert fixed_semimak.format.slots[0] is None


def test_format_key_accepts_either_shape():
    as_format = LayoutData.from_dict({"name": "x", "authors": [], "format": [{"finger": ["LP"], "keys": ["a"]}]})
    as_components = LayoutData.from_dict({"name": "x", "authors": [], "components": ["a", None]})
    assert as_format.is_flexible
    assert as_components.is_fixed


def test_document_without_format_is_rejected():
    with pytest.raises(LayoutFormatError):
        LayoutData.from_dict({"name": "empty"})
    with pytest.raises(LayoutFormatError):
        LayoutData.from_dict(["a", "b"])


def test_builders_return_new_values():
    base = LayoutData.from_format(FixedFormat(slots=("a",)))
    named = base.with_name("test").with_authors(["me", "you"]).with_note("hello")
    assert base.name == ""
    assert base.authors == ()
    assert named.name == "test"
    assert named.authors == ("me", "you")
    assert named.note == "hello"
    assert named.format == base.format


def test_to_dict(flexible_semimak, fixed_semimak):
    flexible = flexible_semimak.to_dict()
    assert flexible["components"][3] == {"finger": ["LI"], "layer": 0, "keys": list("vtmzkq")}
    assert "format" not in flexible
    assert LayoutData.from_dict(flexible) == flexible_semimak

    fixed = fixed_semimak.to_dict()
    assert fixed["format"][:3] == [None, "s", "x"]
    assert LayoutData.from_dict(fixed) == fixed_semimak
