#!/usr/bin/env python3
"""
Exception types raised by keymeow.

Shape mismatches between a layout and a keyboard are not exceptions: the
assignment functions return None for them. The classes below cover malformed
documents and inconsistent keyboard descriptions.
"""


class KeymeowError(ValueError):
    """Base class for keymeow errors."""


class GeometryIntegrityError(KeymeowError):
    """A combo references a position that is not a key of the keyboard."""


class LayoutFormatError(KeymeowError):
    """A layout document could not be decoded."""


class MetricDataError(KeymeowError):
    """A metric data document (metrics, strokes, keyboard) could not be decoded."""
