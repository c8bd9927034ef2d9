"""Tests for the Success/Failure result wrapper."""

import pytest

from shipbridge.result import Failure, Success, UnwrapError


class TestSuccess:
    def test_variant(self):
        result = Success(3)
        assert result.is_success()
        assert not result.is_failure()

    def test_map_success(self):
        assert Success(3).map_success(lambda v: v * 2) == Success(6)

    def test_map_failure_passes_through(self):
        assert Success(3).map_failure(str.upper) == Success(3)

    def test_bind(self):
        assert Success(3).bind(lambda v: Failure(f"bad {v}")) == Failure("bad 3")

    def test_value_or_and_unwrap(self):
        assert Success(3).value_or(0) == 3
        assert Success(3).unwrap() == 3

    def test_failure_access_raises(self):
        with pytest.raises(UnwrapError):
            Success(3).failure


class TestFailure:
    def test_variant(self):
        result = Failure("nope")
        assert result.is_failure()
        assert not result.is_success()

    def test_map_success_passes_through(self):
        assert Failure("nope").map_success(lambda v: v * 2) == Failure("nope")

    def test_map_failure(self):
        assert Failure("nope").map_failure(str.upper) == Failure("NOPE")

    def test_bind_short_circuits(self):
        called = []

        result = Failure("nope").bind(lambda v: called.append(v))

        assert result == Failure("nope")
        assert called == []

    def test_value_or(self):
        assert Failure("nope").value_or(0) == 0

    def test_unwrap_raises(self):
        with pytest.raises(UnwrapError, match="nope"):
            Failure("nope").unwrap()

    def test_value_access_raises(self):
        with pytest.raises(UnwrapError):
            Failure("nope").value
