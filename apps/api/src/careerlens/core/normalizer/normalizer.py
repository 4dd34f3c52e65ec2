"""
Schema Normalizer - Coerce parsed model output into a guaranteed shape.

The extractor proves the model returned JSON; the normalizer makes that
JSON look like what the caller asked for. It never fails: every missing,
mistyped or out-of-range field is replaced by the default declared in
the schema descriptor, so downstream code can rely on every field
existing with the right type.

Policy per field kind:
- string/number: pass through when well-typed, numbers clamped to bounds
- array: keep well-typed items, truncate to max_items, default when
  shorter than min_items
- object: normalize recursively against the nested schema
- array_of_object: normalize each record, wrapping a lone object when
  allowed, default when nothing usable remains
"""

from dataclasses import dataclass, field
from typing import Any

from careerlens.core.schema.descriptor import (
    FieldKind,
    FieldSpec,
    SchemaDescriptor,
    is_number,
    matches_kind,
)


@dataclass
class NormalizedResult:
    """Normalized value plus the field paths that fell back to defaults."""

    data: Any
    defaults_applied: list[str] = field(default_factory=list)


class SchemaNormalizer:
    """Fill, clamp and trim JSON values according to a SchemaDescriptor."""

    def normalize(self, schema: SchemaDescriptor, value: Any) -> Any:
        """
        Normalize a parsed JSON value.

        Args:
            schema: Expected shape
            value: Any JSON value, including None and scalars

        Returns:
            A dict (or list of dicts when ``schema.many``) holding exactly
            the declared fields
        """
        return self.normalize_with_report(schema, value).data

    def normalize_with_report(self, schema: SchemaDescriptor, value: Any) -> NormalizedResult:
        """Normalize and record which fields were defaulted."""
        applied: list[str] = []
        if schema.many:
            data = self._normalize_many(schema, value, applied)
        else:
            data = self._normalize_record(schema, value, 0, schema.name, applied)
        return NormalizedResult(data=data, defaults_applied=applied)

    def _normalize_many(
        self, schema: SchemaDescriptor, value: Any, applied: list[str]
    ) -> list[dict[str, Any]]:
        records = self._as_records(value, schema.wrap_single_object)
        if records is None:
            applied.append(schema.name)
            records = []

        if schema.max_items is not None:
            records = records[: schema.max_items]

        result = [
            self._normalize_record(schema, record, index, f"{schema.name}[{index}]", applied)
            for index, record in enumerate(records)
        ]

        while len(result) < schema.pad_to:
            index = len(result)
            applied.append(f"{schema.name}[{index}]")
            result.append(self._normalize_record(schema, {}, index, f"{schema.name}[{index}]", []))

        return result

    def _normalize_record(
        self,
        schema: SchemaDescriptor,
        value: Any,
        index: int,
        path: str,
        applied: list[str],
    ) -> dict[str, Any]:
        data = value if isinstance(value, dict) else {}
        return {
            spec.name: self._normalize_field(spec, data.get(spec.name), index, f"{path}.{spec.name}", applied)
            for spec in schema.fields
        }

    def _normalize_field(
        self,
        spec: FieldSpec,
        value: Any,
        index: int,
        path: str,
        applied: list[str],
    ) -> Any:
        if spec.kind == FieldKind.STRING:
            if isinstance(value, str) and (value or spec.allow_empty):
                return value

        elif spec.kind == FieldKind.NUMBER:
            if is_number(value):
                return self._clamp(value, spec.bounds)

        elif spec.kind == FieldKind.ARRAY:
            if isinstance(value, list):
                items = [item for item in value if matches_kind(item, spec.item_kind)]
                if spec.max_items is not None:
                    items = items[: spec.max_items]
                if len(items) >= spec.min_items:
                    return items

        elif spec.kind == FieldKind.OBJECT:
            if spec.schema is not None:
                # Nested records are always rebuilt, so a bad value only
                # defaults its own fields
                return self._normalize_record(spec.schema, value, index, path, applied)
            if isinstance(value, dict):
                return dict(value)

        elif spec.kind == FieldKind.OBJECT_ARRAY:
            records = self._as_records(value, spec.wrap_single_object)
            if records is not None:
                if spec.max_items is not None:
                    records = records[: spec.max_items]
                if len(records) >= spec.min_items:
                    return self._normalize_records(spec.schema, records, path, applied)

            applied.append(path)
            return self._normalize_records(spec.schema, spec.default_for(index) or [], path, [])

        applied.append(path)
        return spec.default_for(index)

    def _normalize_records(
        self, schema: SchemaDescriptor, records: list[Any], path: str, applied: list[str]
    ) -> list[dict[str, Any]]:
        return [
            self._normalize_record(schema, record, position, f"{path}[{position}]", applied)
            for position, record in enumerate(records)
        ]

    @staticmethod
    def _as_records(value: Any, wrap_single_object: bool) -> list[Any] | None:
        """Return the value as a record list, or None if it cannot be one."""
        if isinstance(value, list):
            return value
        if isinstance(value, dict) and wrap_single_object:
            return [value]
        return None

    @staticmethod
    def _clamp(value: int | float, bounds: tuple[float, float] | None) -> int | float:
        if bounds is None:
            return value
        low, high = bounds
        return min(max(value, low), high)


def normalize(schema: SchemaDescriptor, value: Any) -> Any:
    """Module-level shortcut for SchemaNormalizer().normalize."""
    return SchemaNormalizer().normalize(schema, value)
