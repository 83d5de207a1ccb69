#!/usr/bin/env python3
"""
Keyboard geometry for layout assignment.

Describes the physical keyboard: which keys each finger operates, where those
keys sit, and which chorded combos exist. Every per-finger structure is
traversed in the fixed finger order (LP, LR, LM, LI, LT, RT, RI, RM, RR, RP);
forward assignment, reverse projection and combo index resolution all rely on
that same order.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from keymeow.exceptions import GeometryIntegrityError, MetricDataError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Hand(Enum):
    LEFT = 'left'
    RIGHT = 'right'


class FingerKind(Enum):
    PINKY = 'pinky'
    RING = 'ring'
    MIDDLE = 'middle'
    INDEX = 'index'
    THUMB = 'thumb'


class Finger(Enum):
    """The ten fingers, declared in finger-flattened order."""

    LP = 'LP'
    LR = 'LR'
    LM = 'LM'
    LI = 'LI'
    LT = 'LT'
    RT = 'RT'
    RI = 'RI'
    RM = 'RM'
    RR = 'RR'
    RP = 'RP'

    @property
    def index(self) -> int:
        return _FINGER_INDEX[self]

    @property
    def hand(self) -> Hand:
        return Hand.LEFT if self.value[0] == 'L' else Hand.RIGHT

    @property
    def kind(self) -> FingerKind:
        return _FINGER_KINDS[self.value[1]]

    @classmethod
    def parse(cls, value: Any) -> 'Finger':
        """
        Decode a finger from its serialized name.

        Args:
            value: Finger name such as 'LP' (case-insensitive) or a Finger

        Returns:
            Matching Finger

        Raises:
            MetricDataError: If the name is not one of the ten fingers
        """
        if isinstance(value, Finger):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            valid = [f.value for f in cls]
            raise MetricDataError(f"Unknown finger '{value}'. Expected one of: {valid}")


FINGER_ORDER: Tuple[Finger, ...] = tuple(Finger)
_FINGER_INDEX = {finger: i for i, finger in enumerate(FINGER_ORDER)}
_FINGER_KINDS = {
    'P': FingerKind.PINKY,
    'R': FingerKind.RING,
    'M': FingerKind.MIDDLE,
    'I': FingerKind.INDEX,
    'T': FingerKind.THUMB,
}


@dataclass(frozen=True)
class Pos:
    """Physical key site: column, row and layer."""
    col: int
    row: int
    layer: int = 0

    def same_site(self, other: 'Pos') -> bool:
        """True if both positions share row and column, whatever the layer."""
        return self.row == other.row and self.col == other.col


@dataclass(frozen=True)
class KeyCoord:
    pos: Pos
    x: float
    y: float
    finger: Finger

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KeyCoord':
        if not isinstance(data, dict) or not isinstance(data.get('pos'), dict):
            raise MetricDataError(f"Invalid key coordinate {data!r}: expected an object with a 'pos' object")
        pos = data['pos']
        try:
            site = Pos(col=int(pos['col']), row=int(pos['row']), layer=int(pos.get('layer', 0)))
            x = float(data.get('x', pos['col']))
            y = float(data.get('y', pos['row']))
            finger = data['finger']
        except (KeyError, TypeError, ValueError) as e:
            raise MetricDataError(f"Invalid key coordinate {data!r}: missing or malformed {e}")
        return cls(pos=site, x=x, y=y, finger=Finger.parse(finger))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'pos': {'col': self.pos.col, 'row': self.pos.row, 'layer': self.pos.layer},
            'x': self.x,
            'y': self.y,
            'finger': self.finger.value,
        }


@dataclass(frozen=True)
class Combo:
    """Keys pressed together to produce one output slot."""
    coords: Tuple[KeyCoord, ...]

    @property
    def fingers(self) -> List[Finger]:
        """Fingers touched by this combo, without repeats, in coordinate order."""
        seen = []
        for coord in self.coords:
            if coord.finger not in seen:
                seen.append(coord.finger)
        return seen

    def uses_finger(self, finger: Finger) -> bool:
        return any(coord.finger == finger for coord in self.coords)

    @classmethod
    def from_dict(cls, data: Any) -> 'Combo':
        coords = data.get('coords') if isinstance(data, dict) else data
        if not isinstance(coords, list) or not coords:
            raise MetricDataError(f"Combo must list at least one key coordinate, got {data!r}")
        return cls(coords=tuple(KeyCoord.from_dict(c) for c in coords))

    def to_dict(self) -> Dict[str, Any]:
        return {'coords': [c.to_dict() for c in self.coords]}


class FingerMap(Generic[T]):
    """Ten values, one per finger, indexed by Finger and iterated in finger order."""

    def __init__(self, values: Optional[List[T]] = None, default_factory=list):
        if values is None:
            values = [default_factory() for _ in FINGER_ORDER]
        if len(values) != len(FINGER_ORDER):
            raise MetricDataError(f"Expected {len(FINGER_ORDER)} finger entries, got {len(values)}")
        self.map = list(values)

    def __getitem__(self, finger: Finger) -> T:
        return self.map[finger.index]

    def __setitem__(self, finger: Finger, value: T) -> None:
        self.map[finger.index] = value

    def __iter__(self) -> Iterator[T]:
        return iter(self.map)

    def items(self) -> Iterator[Tuple[Finger, T]]:
        return zip(FINGER_ORDER, self.map)

    def __eq__(self, other) -> bool:
        return isinstance(other, FingerMap) and self.map == other.map

    def __repr__(self) -> str:
        return f"FingerMap({dict((f.value, v) for f, v in self.items())!r})"


def _coord_list(coords: Any) -> List[KeyCoord]:
    if coords is None:
        return []
    if not isinstance(coords, list):
        raise MetricDataError(f"Finger keys must be a list of key coordinates, got {coords!r}")
    return [KeyCoord.from_dict(c) for c in coords]


@dataclass
class Keyboard:
    """
    Physical keyboard geometry.

    Attributes:
        keys: Per-finger key lists in author-declared order
        combos: Chorded inputs, in declaration order
        combo_indexes: For each combo, indices into flat_keys() matching its
            coordinates (filled by process_combo_indexes, never passed in)

    Raises:
        GeometryIntegrityError: If a combo uses a position with no key
    """
    keys: FingerMap
    combos: List[Combo] = field(default_factory=list)
    combo_indexes: List[List[int]] = field(default_factory=list, init=False)

    def __post_init__(self):
        self.process_combo_indexes()

    @property
    def kb_size(self) -> int:
        """Total number of physical keys."""
        return sum(len(finger_keys) for finger_keys in self.keys)

    @property
    def matrix_size(self) -> int:
        """Length of a resolved layout: one slot per key plus one per combo."""
        return self.kb_size + len(self.combos)

    def capacity(self, finger: Finger) -> int:
        return len(self.keys[finger])

    def flat_keys(self) -> List[KeyCoord]:
        """All keys in finger-flattened order."""
        return [coord for finger_keys in self.keys for coord in finger_keys]

    def combos_for(self, finger: Finger) -> List[int]:
        """Indices of the combos touching a finger, in declaration order."""
        return [i for i, combo in enumerate(self.combos) if combo.uses_finger(finger)]

    def process_combo_indexes(self) -> List[List[int]]:
        """
        Resolve every combo coordinate to its index in flat_keys().

        Coordinates are matched on row and column only, so a combo addresses
        a physical site regardless of layer.

        Returns:
            The combo index lists, also cached on self.combo_indexes

        Raises:
            GeometryIntegrityError: If a combo uses a position with no key
        """
        flat = self.flat_keys()
        indexes = []
        for combo_number, combo in enumerate(self.combos):
            combo_positions = []
            for coord in combo.coords:
                match = next((i for i, key in enumerate(flat) if key.pos.same_site(coord.pos)), None)
                if match is None:
                    raise GeometryIntegrityError(
                        f"Combo {combo_number} uses position (col={coord.pos.col}, row={coord.pos.row}) "
                        f"which is not a key on the keyboard"
                    )
                combo_positions.append(match)
            indexes.append(combo_positions)

        self.combo_indexes = indexes
        logger.debug(f"Resolved {len(indexes)} combo index lists over {len(flat)} keys")
        return indexes

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Keyboard':
        """
        Build a keyboard from its document form and resolve its combo indexes.

        'keys' may be a mapping of finger name to key list, a {'map': [...]}
        object holding ten lists, or a plain list of ten lists.

        Raises:
            MetricDataError: If the document is malformed
            GeometryIntegrityError: If a combo uses a position with no key
        """
        if not isinstance(data, dict) or 'keys' not in data:
            raise MetricDataError("Keyboard description must be an object with a 'keys' entry")

        raw_keys = data['keys']
        if isinstance(raw_keys, dict) and 'map' in raw_keys:
            raw_keys = raw_keys['map']

        keys = FingerMap()
        if isinstance(raw_keys, dict):
            for name, coords in raw_keys.items():
                keys[Finger.parse(name)] = _coord_list(coords)
        elif isinstance(raw_keys, list):
            keys = FingerMap([_coord_list(coords) for coords in raw_keys])
        else:
            raise MetricDataError(f"Keyboard 'keys' must be a mapping or a list, got {type(raw_keys).__name__}")

        return cls(keys=keys, combos=[Combo.from_dict(c) for c in data.get('combos') or []])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'keys': {finger.value: [c.to_dict() for c in coords] for finger, coords in self.keys.items()},
            'combos': [combo.to_dict() for combo in self.combos],
        }
