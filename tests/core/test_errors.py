"""Tests for prblame error types."""

import pytest

from prblame.core.errors import ConfigError, ErrorCode, PrBlameError, WorkerPoolError


class TestPrBlameError:
    """Base error behavior."""

    def test_given_error_when_to_dict_then_serializable(self) -> None:
        """Error serializes with code, name, message and details."""
        # Given
        error = PrBlameError(
            code=ErrorCode.WORKER_POOL_FAILED,
            message="no threads",
            details={"max_workers": 4},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 3001,
            "error": "WORKER_POOL_FAILED",
            "message": "no threads",
            "details": {"max_workers": 4},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        error = PrBlameError(code=ErrorCode.CONFIG_PARSE_ERROR, message="Something broke")
        assert str(error) == "[2001] CONFIG_PARSE_ERROR: Something broke"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        with pytest.raises(PrBlameError):
            raise WorkerPoolError.construction_failed(2, "boom")


class TestConfigError:
    """ConfigError factory method tests."""

    @pytest.mark.parametrize(
        ("factory", "kwargs", "expected_code"),
        [
            (
                "parse_error",
                {"path": "/foo", "reason": "bad yaml"},
                ErrorCode.CONFIG_PARSE_ERROR,
            ),
            (
                "invalid_value",
                {"field": "attribution.context_lines", "value": -1, "reason": "negative"},
                ErrorCode.CONFIG_INVALID_VALUE,
            ),
            ("file_not_found", {"path": "/missing"}, ErrorCode.CONFIG_FILE_NOT_FOUND),
        ],
    )
    def test_given_factory_when_called_then_correct_code(
        self, factory: str, kwargs: dict[str, object], expected_code: ErrorCode
    ) -> None:
        """Factory methods produce errors with correct error codes."""
        error = getattr(ConfigError, factory)(**kwargs)
        assert error.code == expected_code
        assert isinstance(error, PrBlameError)

    def test_given_invalid_value_when_created_then_value_stringified(self) -> None:
        error = ConfigError.invalid_value("attribution.max_concurrency", -3, "Must be >= 0")
        assert error.details["value"] == "-3"
        assert "attribution.max_concurrency" in error.message


class TestWorkerPoolError:
    """WorkerPoolError factory."""

    def test_given_construction_failure_then_details_recorded(self) -> None:
        error = WorkerPoolError.construction_failed(8, "can't start new thread")
        assert error.code is ErrorCode.WORKER_POOL_FAILED
        assert error.details == {"max_workers": 8, "reason": "can't start new thread"}
        assert "8 workers" in str(error)
