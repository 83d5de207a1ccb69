#!/usr/bin/env python3
"""
Author-facing layout encodings.

A layout document carries a name, authors, an optional note and one of two
formats:

- Fixed: a flat list of characters (or null), one per physical key in
  finger-flattened order.
- Flexible: a list of key components, each assigning characters to one or
  more candidate fingers without naming exact keys.

Documents do not tag the format; it is recognised from its shape once, in
parse_layout_format, and carried as FixedFormat or FlexibleFormat afterwards.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple, Union

from keymeow.corpus import EMPTY_CHAR
from keymeow.exceptions import KeymeowError, LayoutFormatError
from keymeow.geometry import Finger


@dataclass(frozen=True)
class KeyComponent:
    """
    One unit of author intent.

    With a single finger, every character in keys goes to that finger in
    order. With several fingers, the fingers are tried in order and only the
    first character of keys is placed.
    """

    finger: Tuple[Finger, ...]
    """Candidate fingers, in priority order (never empty)"""

    layer: int
    """Layer the keys occupy"""

    keys: Tuple[str, ...]
    """Characters to place"""

    def __post_init__(self):
        if not self.finger:
            raise LayoutFormatError("Key component must name at least one finger")

    @property
    def is_single_finger(self) -> bool:
        return len(self.finger) == 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KeyComponent':
        if not isinstance(data, dict):
            raise LayoutFormatError(f"Key component must be an object, got {data!r}")

        fingers = data.get('finger', data.get('fingers'))
        if isinstance(fingers, str):
            fingers = [fingers]
        if not fingers:
            raise LayoutFormatError(f"Key component must name at least one finger: {data!r}")
        if not isinstance(fingers, (list, tuple)):
            raise LayoutFormatError(f"Key component 'finger' must be a list of finger names: {data!r}")

        keys = data.get('keys', [])
        if isinstance(keys, str):
            keys = list(keys)
        if not isinstance(keys, (list, tuple)):
            raise LayoutFormatError(f"Key component 'keys' must be a list or a string: {data!r}")
        for key in keys:
            if not isinstance(key, str) or len(key) != 1:
                raise LayoutFormatError(f"Keys must be single characters, got {key!r}")

        try:
            finger = tuple(Finger.parse(f) for f in fingers)
        except KeymeowError as e:
            raise LayoutFormatError(str(e))

        try:
            layer = int(data.get('layer', 0))
        except (TypeError, ValueError):
            raise LayoutFormatError(f"Key component layer must be an integer: {data!r}")

        return cls(finger=finger, layer=layer, keys=tuple(keys))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'finger': [f.value for f in self.finger],
            'layer': self.layer,
            'keys': list(self.keys),
        }


@dataclass(frozen=True)
class FixedFormat:
    """One optional character per physical key, in finger-flattened order."""
    slots: Tuple[Optional[str], ...]

    def to_list(self) -> List[Optional[str]]:
        return list(self.slots)


@dataclass(frozen=True)
class FlexibleFormat:
    """Key components resolved against the keyboard in order."""
    components: Tuple[KeyComponent, ...]

    def to_list(self) -> List[Dict[str, Any]]:
        return [c.to_dict() for c in self.components]


LayoutFormat = Union[FixedFormat, FlexibleFormat]


def parse_layout_format(raw: Any) -> LayoutFormat:
    """
    Recognise and decode a layout format from its document shape.

    A list of objects is Flexible; a list of characters and nulls is Fixed.
    An empty list is read as an empty Flexible layout.

    Args:
        raw: Decoded JSON/YAML value

    Returns:
        FixedFormat or FlexibleFormat

    Raises:
        LayoutFormatError: If the value matches neither shape
    """
    if isinstance(raw, (FixedFormat, FlexibleFormat)):
        return raw
    if not isinstance(raw, list):
        raise LayoutFormatError(f"Layout format must be a list, got {type(raw).__name__}")

    if all(isinstance(item, dict) for item in raw):
        return FlexibleFormat(components=tuple(KeyComponent.from_dict(item) for item in raw))

    slots = []
    for item in raw:
        if item is None:
            slots.append(None)
        elif isinstance(item, str) and len(item) == 1:
            slots.append(None if item == EMPTY_CHAR else item)
        else:
            raise LayoutFormatError(
                f"Layout format mixes shapes: expected key components or single characters, got {item!r}"
            )
    return FixedFormat(slots=tuple(slots))


@dataclass(frozen=True)
class LayoutData:
    """A named layout in one of the two author-facing formats."""
    format: LayoutFormat
    name: str = ""
    authors: Tuple[str, ...] = field(default_factory=tuple)
    note: Optional[str] = None

    @classmethod
    def from_format(cls, layout_format: LayoutFormat) -> 'LayoutData':
        return cls(format=layout_format)

    def with_name(self, name: str) -> 'LayoutData':
        return replace(self, name=name)

    def with_authors(self, authors: List[str]) -> 'LayoutData':
        return replace(self, authors=tuple(authors))

    def with_note(self, note: str) -> 'LayoutData':
        return replace(self, note=note)

    @property
    def is_fixed(self) -> bool:
        return isinstance(self.format, FixedFormat)

    @property
    def is_flexible(self) -> bool:
        return isinstance(self.format, FlexibleFormat)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LayoutData':
        """
        Decode a layout document.

        The format may be stored under 'format' or 'components'.

        Raises:
            LayoutFormatError: If the document is malformed
        """
        if not isinstance(data, dict):
            raise LayoutFormatError(f"Layout document must be an object, got {type(data).__name__}")

        if 'format' in data:
            raw_format = data['format']
        elif 'components' in data:
            raw_format = data['components']
        else:
            raise LayoutFormatError("Layout document has neither 'format' nor 'components'")

        authors = data.get('authors') or []
        if isinstance(authors, str):
            authors = [authors]

        return cls(
            format=parse_layout_format(raw_format),
            name=str(data.get('name', '')),
            authors=tuple(str(a) for a in authors),
            note=data.get('note'),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'name': self.name,
            'authors': list(self.authors),
            'note': self.note,
        }
        if self.is_flexible:
            result['components'] = self.format.to_list()
        else:
            result['format'] = self.format.to_list()
        return result
