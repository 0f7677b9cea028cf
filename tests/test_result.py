"""Unit tests for the tri-state result wrapper."""

import pytest

from mojank.exceptions import InvalidStateError
from mojank.models.result import MojankResult, ResultKind


class TestSuccess:
    """Test successful results."""

    def test_get_returns_value(self):
        result = MojankResult.success(42)
        assert result.get() == 42
        assert result.get_or_none() == 42

    def test_flags(self):
        result = MojankResult.success("x")
        assert result.kind is ResultKind.SUCCESS
        assert result.is_success
        assert not result.is_partial
        assert not result.is_failure
        assert result.is_success_or_partial
        assert result.is_conclusive

    def test_reason_raises(self):
        with pytest.raises(InvalidStateError):
            MojankResult.success(1).get_reason()

    def test_no_exception(self):
        assert MojankResult.success(1).get_exception() is None

    def test_falsy_value_is_kept(self):
        """An empty list is still a value, not a missing one."""
        result = MojankResult.success([])
        assert result.get() == []
        assert result.get_or_else(lambda: ["fallback"]) == []


class TestPartial:
    """Test partial results."""

    def test_value_and_reason(self):
        result = MojankResult.partial([1], "missing some")
        assert result.get() == [1]
        assert result.get_reason() == "missing some"
        assert result.is_partial
        assert result.is_success_or_partial
        assert not result.is_failure

    def test_conclusive_by_default(self):
        assert MojankResult.partial([1], "r").is_conclusive

    def test_inconclusive_partial(self):
        assert not MojankResult.partial([1], "r", conclusive=False).is_conclusive

    def test_no_exception(self):
        assert MojankResult.partial([1], "r").get_exception() is None


class TestFailure:
    """Test failed results."""

    def test_get_raises(self):
        with pytest.raises(InvalidStateError):
            MojankResult.failure("nope", True).get()

    def test_get_or_none(self):
        result = MojankResult.failure("nope", True)
        assert result.get_or_none() is None
        assert not result.is_success_or_partial
        assert result.is_failure

    def test_conclusiveness_is_carried(self):
        assert MojankResult.failure("gone", True).is_conclusive
        assert not MojankResult.failure("down", False).is_conclusive

    def test_inconclusive_by_default(self):
        assert not MojankResult.failure("down").is_conclusive

    def test_cause(self):
        error = OSError("boom")
        result = MojankResult.failure("down", False, error)
        assert result.get_exception() is error
        assert result.get_reason() == "down"

    def test_get_or_else(self):
        assert MojankResult.failure("x").get_or_else(lambda: "fallback") == "fallback"


class TestSuccessOrPartial:
    """Test the success_or_partial constructor."""

    def test_no_reason_is_success(self):
        result = MojankResult.success_or_partial([1, 2], None)
        assert result.is_success

    def test_reason_is_partial(self):
        result = MojankResult.success_or_partial([1], "some missing")
        assert result.is_partial
        assert result.get_reason() == "some missing"
        assert result.is_conclusive

    def test_partial_inherits_conclusiveness(self):
        result = MojankResult.success_or_partial([1], "chunk down", conclusive=False)
        assert not result.is_conclusive

    def test_success_ignores_conclusive_flag(self):
        assert MojankResult.success_or_partial([1], None, conclusive=False).is_conclusive


class TestMap:
    """Test map keeps state."""

    def test_map_success(self):
        result = MojankResult.success(2).map(lambda v: v * 10)
        assert result == MojankResult.success(20)

    def test_map_partial_keeps_reason(self):
        result = MojankResult.partial([1, 2], "r", conclusive=False).map(len)
        assert result.is_partial
        assert result.get() == 2
        assert result.get_reason() == "r"
        assert not result.is_conclusive

    def test_map_failure_skips_mapper(self):
        error = ValueError("bad")
        failure = MojankResult.failure("bad", True, error)
        calls = []

        mapped = failure.map(lambda v: calls.append(v))

        assert calls == []
        assert mapped == failure
        assert mapped.is_conclusive
        assert mapped.get_exception() is error


class TestHooks:
    """Test conditional callbacks."""

    def test_if_success(self):
        seen = []
        MojankResult.success(1).if_success(seen.append)
        MojankResult.partial(2, "r").if_success(seen.append)
        MojankResult.failure("r").if_success(seen.append)
        assert seen == [1]

    def test_if_partial(self):
        seen = []
        MojankResult.success(1).if_partial(lambda v, r: seen.append((v, r)))
        MojankResult.partial(2, "r").if_partial(lambda v, r: seen.append((v, r)))
        MojankResult.failure("f").if_partial(lambda v, r: seen.append((v, r)))
        assert seen == [(2, "r")]

    def test_if_failure(self):
        error = OSError()
        seen = []
        MojankResult.success(1).if_failure(lambda r, e: seen.append((r, e)))
        MojankResult.partial(2, "r").if_failure(lambda r, e: seen.append((r, e)))
        MojankResult.failure("f", cause=error).if_failure(lambda r, e: seen.append((r, e)))
        assert seen == [("f", error)]


class TestRepr:
    def test_repr_names_variant(self):
        assert repr(MojankResult.success(1)) == "MojankResult.success(value=1)"
        assert "partial" in repr(MojankResult.partial(1, "r"))
        assert "conclusive=True" in repr(MojankResult.failure("r", True))
