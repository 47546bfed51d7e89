"""
Error Taxonomy Unit Tests
Tests for merkle_core/schemas/errors.py and canonical serialization
"""
from datetime import datetime, timedelta, timezone
from enum import Enum

import pytest
from pydantic import BaseModel, ValidationError

from merkle_core.schemas import (
    CanonicalizationException,
    ConfigurationError,
    EmptyInputError,
    ErrorCodes,
    IndexOutOfBoundsError,
    MerkleError,
    MerkleException,
    dumps_canonical,
    format_datetime_canonical,
)


class TestExceptions:
    """Tests for exception codes and conversions."""

    def test_empty_input_error(self):
        err = EmptyInputError()

        assert err.code == ErrorCodes.EMPTY_INPUT
        assert isinstance(err, MerkleException)
        assert isinstance(err, ValueError)

    def test_index_error_details(self):
        err = IndexOutOfBoundsError(7, 3)

        assert err.index == 7
        assert err.leaf_count == 3
        assert err.details == {"index": 7, "leaf_count": 3}
        assert "7" in str(err)

    def test_to_error_model(self):
        model = IndexOutOfBoundsError(4, 4).to_error_model()

        assert isinstance(model, MerkleError)
        assert model.code == ErrorCodes.INDEX_OUT_OF_BOUNDS
        assert model.details["leaf_count"] == 4

    def test_error_model_round_trip(self):
        model = MerkleError(code=ErrorCodes.CONFIG_ERROR, message="bad")
        exc = model.to_exception()

        assert isinstance(exc, MerkleException)
        assert exc.code == ErrorCodes.CONFIG_ERROR
        assert exc.to_error_model() == model

    def test_error_model_forbids_extra(self):
        with pytest.raises(ValidationError):
            MerkleError(code="X", message="m", unexpected=True)

    def test_configuration_error_key(self):
        err = ConfigurationError("bad value", key="bench.rounds")

        assert err.details["key"] == "bench.rounds"

    def test_repr(self):
        assert repr(EmptyInputError()).startswith("EmptyInputError(code='EMPTY_INPUT'")


class Color(str, Enum):
    RED = "red"


class Record(BaseModel):
    name: str
    note: str | None = None


class TestCanonical:
    """Tests for canonical JSON used by object leaves."""

    def test_sorted_compact(self):
        assert dumps_canonical({"b": 2, "a": [1, 2]}) == '{"a":[1,2],"b":2}'

    def test_none_dropped(self):
        assert dumps_canonical({"a": None, "b": 1}) == '{"b":1}'

    def test_datetime_utc_z(self):
        naive = datetime(2026, 1, 27, 21, 35, 0)
        shifted = datetime(2026, 1, 27, 22, 35, 0, tzinfo=timezone(timedelta(hours=1)))

        assert format_datetime_canonical(naive) == "2026-01-27T21:35:00Z"
        assert dumps_canonical({"t": naive}) == dumps_canonical({"t": shifted})

    def test_enum_and_bytes(self):
        assert dumps_canonical({"c": Color.RED, "b": b"\x01\xff"}) == '{"b":"01ff","c":"red"}'

    def test_pydantic_model(self):
        assert dumps_canonical(Record(name="x")) == '{"name":"x"}'

    def test_unicode_preserved(self):
        assert dumps_canonical({"k": "é"}) == '{"k":"é"}'

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value):
        with pytest.raises(CanonicalizationException) as exc_info:
            dumps_canonical({"x": value})

        assert exc_info.value.code == ErrorCodes.CANONICALIZATION_ERROR
        assert exc_info.value.details["path"] == "x"

    def test_unsupported_type_rejected(self):
        with pytest.raises(CanonicalizationException):
            dumps_canonical({"x": object()})
