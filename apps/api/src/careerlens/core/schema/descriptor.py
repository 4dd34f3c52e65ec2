"""
Schema descriptors - Declarative shapes for AI-generated JSON.

A descriptor states what a caller expects (fields, kinds, defaults,
numeric bounds, list policies). It carries no normalization logic; the
normalizer reads it. Descriptors are defined once per use-case and
validated at definition time so every default already conforms.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    """Expected kind of a field value."""

    STRING = "string"
    NUMBER = "number"
    ARRAY = "array"
    OBJECT = "object"
    OBJECT_ARRAY = "array_of_object"


SCALAR_KINDS = frozenset({FieldKind.STRING, FieldKind.NUMBER})


def is_number(value: Any) -> bool:
    """True for ints and finite floats. Booleans are not numbers here."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        # Arbitrarily large ints are valid JSON and too big for a float
        return True
    return isinstance(value, float) and math.isfinite(value)


def matches_kind(value: Any, kind: FieldKind) -> bool:
    """Check a scalar array element against its declared kind."""
    if kind == FieldKind.STRING:
        return isinstance(value, str)
    if kind == FieldKind.NUMBER:
        return is_number(value)
    if kind == FieldKind.OBJECT:
        return isinstance(value, dict)
    if kind in (FieldKind.ARRAY, FieldKind.OBJECT_ARRAY):
        return isinstance(value, list)
    return False


@dataclass(frozen=True)
class FieldSpec:
    """
    Expected shape of a single field.

    ``default`` may be a callable taking the record's index, for defaults
    that differ per list element (e.g. generated ids). For ``object``
    fields with a nested ``schema`` the default is derived from that
    schema and ``default`` is ignored.
    """

    name: str
    kind: FieldKind
    default: Any = None
    bounds: tuple[float, float] | None = None
    min_items: int = 0
    max_items: int | None = None
    item_kind: FieldKind = FieldKind.STRING
    schema: "SchemaDescriptor | None" = None
    wrap_single_object: bool = True
    allow_empty: bool = False

    def __post_init__(self) -> None:
        if self.bounds is not None:
            low, high = self.bounds
            if low > high:
                raise ValueError(f"{self.name}: bounds {self.bounds} are inverted")
            if self.kind != FieldKind.NUMBER:
                raise ValueError(f"{self.name}: bounds only apply to number fields")

        if self.kind == FieldKind.OBJECT_ARRAY and self.schema is None:
            raise ValueError(f"{self.name}: array_of_object fields need an element schema")

        if self.kind == FieldKind.OBJECT_ARRAY and self.item_kind != FieldKind.STRING:
            raise ValueError(f"{self.name}: item_kind does not apply to array_of_object fields")

        if self.item_kind not in SCALAR_KINDS:
            raise ValueError(f"{self.name}: item_kind must be string or number")

        if self.max_items is not None and self.max_items < self.min_items:
            raise ValueError(f"{self.name}: max_items is smaller than min_items")

        if not callable(self.default):
            self._check_default(self.default)

    def default_for(self, index: int = 0) -> Any:
        """Resolve the default, calling it with the record index if needed."""
        if callable(self.default):
            return self.default(index)
        if isinstance(self.default, (list, dict)):
            # Fresh copy so callers can mutate what they receive
            return _copy_json(self.default)
        return self.default

    def _check_default(self, value: Any) -> None:
        """Reject defaults that would not survive their own normalization."""
        if self.kind == FieldKind.STRING:
            if not isinstance(value, str) or (value == "" and not self.allow_empty):
                raise ValueError(f"{self.name}: string default must be a non-empty str")

        elif self.kind == FieldKind.NUMBER:
            if not is_number(value):
                raise ValueError(f"{self.name}: number default must be numeric")
            if self.bounds is not None and not self.bounds[0] <= value <= self.bounds[1]:
                raise ValueError(f"{self.name}: default {value} outside bounds {self.bounds}")

        elif self.kind == FieldKind.ARRAY:
            if not isinstance(value, list):
                raise ValueError(f"{self.name}: array default must be a list")
            if any(not matches_kind(item, self.item_kind) for item in value):
                raise ValueError(f"{self.name}: array default holds non-{self.item_kind.value} items")
            if len(value) < self.min_items:
                raise ValueError(f"{self.name}: array default is shorter than min_items")
            if self.max_items is not None and len(value) > self.max_items:
                raise ValueError(f"{self.name}: array default is longer than max_items")

        elif self.kind == FieldKind.OBJECT:
            if self.schema is None and not isinstance(value, dict):
                raise ValueError(f"{self.name}: free-form object default must be a dict")

        elif self.kind == FieldKind.OBJECT_ARRAY:
            if not isinstance(value, list):
                raise ValueError(f"{self.name}: array_of_object default must be a list")
            if any(not isinstance(item, dict) for item in value):
                raise ValueError(f"{self.name}: array_of_object default holds non-objects")
            if len(value) < self.min_items:
                raise ValueError(f"{self.name}: array_of_object default is shorter than min_items")
            if self.max_items is not None and len(value) > self.max_items:
                raise ValueError(f"{self.name}: array_of_object default is longer than max_items")


@dataclass(frozen=True)
class SchemaDescriptor:
    """
    Expected shape of a whole model response (or of a nested record).

    With ``many`` set, the value is a list of records described by
    ``fields``; otherwise it is a single record.

    List policy:
    - ``wrap_single_object``: accept a lone object as a one-element list
    - ``max_items``: truncate longer lists, keeping encounter order
    - ``pad_to``: append all-default records up to this count

    ``prefer_array`` asks the extractor to look for ``[...]`` before
    ``{...}``.
    """

    name: str
    fields: tuple[FieldSpec, ...]
    many: bool = False
    wrap_single_object: bool = True
    max_items: int | None = None
    pad_to: int = 0
    prefer_array: bool = False

    def __post_init__(self) -> None:
        names = [spec.name for spec in self.fields]
        if len(names) != len(set(names)):
            raise ValueError(f"{self.name}: duplicate field names")
        if not self.many and (self.pad_to or self.max_items is not None):
            raise ValueError(f"{self.name}: list policies need many=True")
        if self.max_items is not None and self.pad_to > self.max_items:
            raise ValueError(f"{self.name}: pad_to exceeds max_items")


def _copy_json(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _copy_json(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_copy_json(item) for item in value]
    return value

