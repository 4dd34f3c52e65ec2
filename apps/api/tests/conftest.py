"""Shared fixtures for CareerLens tests."""

from typing import Any, Callable

import pytest

from careerlens.core.schema import FieldKind, FieldSpec, SchemaDescriptor
from careerlens.core.schema.descriptor import is_number
from careerlens.providers.base import CompletionRequest, CompletionResponse, ProviderAdapter


class FakeProvider(ProviderAdapter):
    """Provider that returns canned text (or raises) without any network."""

    def __init__(self, content: str = "{}", error: Exception | None = None):
        self.content = content
        self.error = error
        self.requests: list[CompletionRequest] = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def configured(self) -> bool:
        return True

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return CompletionResponse(
            content=self.content,
            model=request.model,
            provider=self.name,
            latency_ms=5,
            usage={"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30},
            finish_reason="STOP",
        )


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


def _check_field(spec: FieldSpec, value: Any, path: str) -> None:
    if spec.kind == FieldKind.STRING:
        assert isinstance(value, str), path
        assert value or spec.allow_empty, path
    elif spec.kind == FieldKind.NUMBER:
        assert is_number(value), path
        if spec.bounds is not None:
            assert spec.bounds[0] <= value <= spec.bounds[1], path
    elif spec.kind == FieldKind.ARRAY:
        assert isinstance(value, list), path
        assert len(value) >= spec.min_items, path
        if spec.max_items is not None:
            assert len(value) <= spec.max_items, path
        for item in value:
            if spec.item_kind == FieldKind.STRING:
                assert isinstance(item, str), path
            else:
                assert isinstance(item, (int, float)) and not isinstance(item, bool), path
    elif spec.kind == FieldKind.OBJECT:
        assert isinstance(value, dict), path
        if spec.schema is not None:
            _check_record(spec.schema, value, path)
    elif spec.kind == FieldKind.OBJECT_ARRAY:
        assert isinstance(value, list), path
        assert len(value) >= spec.min_items, path
        if spec.max_items is not None:
            assert len(value) <= spec.max_items, path
        for position, record in enumerate(value):
            _check_record(spec.schema, record, f"{path}[{position}]")


def _check_record(schema: SchemaDescriptor, record: Any, path: str) -> None:
    assert isinstance(record, dict), path
    assert set(record) == {spec.name for spec in schema.fields}, path
    for spec in schema.fields:
        _check_field(spec, record[spec.name], f"{path}.{spec.name}")


def _assert_conforms(schema: SchemaDescriptor, value: Any) -> None:
    if schema.many:
        assert isinstance(value, list)
        assert len(value) >= schema.pad_to
        if schema.max_items is not None:
            assert len(value) <= schema.max_items
        for index, record in enumerate(value):
            _check_record(schema, record, f"{schema.name}[{index}]")
    else:
        _check_record(schema, value, schema.name)


@pytest.fixture
def assert_conforms() -> Callable[[SchemaDescriptor, Any], None]:
    """Assert that a value satisfies every constraint of a descriptor."""
    return _assert_conforms
