"""Schema descriptors - Declarative shapes for model output."""

from careerlens.core.schema.descriptor import FieldKind, FieldSpec, SchemaDescriptor

__all__ = ["FieldKind", "FieldSpec", "SchemaDescriptor"]
