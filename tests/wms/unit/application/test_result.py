"""Unit tests for Result and ErrorKind classification."""

import pytest

from wms.application.result import ErrorKind, Result, ResultError, error_kind_for
from wms.domain.shared import (
    BusinessRuleViolation,
    ConflictError,
    EntityNotFoundError,
    ValidationError,
)


class TestResultConstruction:
    """Test ok/fail invariants."""

    def test_ok(self):
        """Successful results expose their value."""
        result = Result.ok(42)
        assert result.is_success
        assert not result.is_failure
        assert result.get_value() == 42
        assert result.error is None

    def test_fail(self):
        """Failed results carry a message and a kind."""
        result = Result.fail("User not found", ErrorKind.NOT_FOUND)
        assert result.is_failure
        assert result.error == "User not found"
        assert result.error_kind == ErrorKind.NOT_FOUND

    def test_fail_defaults_to_validation(self):
        """Failures without a kind are validation failures."""
        assert Result.fail("bad").error_kind == ErrorKind.VALIDATION

    def test_get_value_of_failure_raises(self):
        """Reading a failed value raises."""
        with pytest.raises(ResultError, match="boom"):
            Result.fail("boom").get_value()

    def test_invalid_combinations_rejected(self):
        """Success with an error, or failure without one, is rejected."""
        with pytest.raises(ValueError, match="cannot be successful"):
            Result(is_success=True, error="x")
        with pytest.raises(ValueError, match="needs to contain"):
            Result(is_success=False)

    def test_get_value_or(self):
        """Failures fall back to the default."""
        assert Result.fail("x").get_value_or(7) == 7
        assert Result.ok(3).get_value_or(7) == 3


class TestResultComposition:
    """Test combine, map and flat_map."""

    def test_combine_first_failure_wins(self):
        """The first failure in order is returned."""
        combined = Result.combine(
            [Result.ok(), Result.fail("first", ErrorKind.CONFLICT), Result.fail("second")],
        )
        assert combined.error == "first"
        assert combined.error_kind == ErrorKind.CONFLICT

    def test_combine_all_ok(self):
        """All successes combine to an empty success."""
        assert Result.combine([Result.ok(1), Result.ok(2)]).is_success

    def test_map(self):
        """map transforms successes and passes failures through."""
        assert Result.ok(2).map(lambda v: v * 3).get_value() == 6
        failed = Result.fail("nope", ErrorKind.NOT_FOUND).map(lambda v: v)
        assert failed.error_kind == ErrorKind.NOT_FOUND

    def test_map_captures_exceptions(self):
        """A raising mapper becomes a failure."""
        result = Result.ok(1).map(lambda v: v / 0)
        assert result.is_failure
        assert result.error.startswith("Mapping failed")

    def test_flat_map(self):
        """flat_map returns the mapper's result."""
        result = Result.ok(2).flat_map(lambda v: Result.fail(f"got {v}"))
        assert result.error == "got 2"


class TestErrorClassification:
    """Test exception to ErrorKind mapping."""

    @pytest.mark.parametrize(
        ("exc", "kind"),
        [
            (ValidationError("x"), ErrorKind.VALIDATION),
            (EntityNotFoundError("x"), ErrorKind.NOT_FOUND),
            (ConflictError("x"), ErrorKind.CONFLICT),
            (BusinessRuleViolation("x"), ErrorKind.BUSINESS_RULE),
            (RuntimeError("x"), ErrorKind.INFRASTRUCTURE),
        ],
    )
    def test_error_kind_for(self, exc, kind):
        """Exception categories map to their kinds."""
        assert error_kind_for(exc) == kind

    def test_from_exception_prefixes_message(self):
        """Unexpected exceptions are prefixed with the action."""
        result = Result.from_exception(RuntimeError("db down"), "Failed to create user")
        assert result.error == "Failed to create user: db down"
        assert result.error_kind == ErrorKind.INFRASTRUCTURE
