"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

import json

import pytest

from mp_search.config.validation import ConfigError, ConfigurationError
from mp_search.kernel.errors import (
    ConversionError,
    InvalidPaginationError,
    InvalidRequestError,
    InvariantViolationError,
    MissingFilterValueError,
    OperatorNotAllowedError,
    PageSizeExceededError,
    QueryExecutionError,
    SearchEngineError,
    UnknownFieldError,
    UnsortableFieldError,
)


# ---------------------------------------------------------------------------
# SearchEngineError
# ---------------------------------------------------------------------------


class TestSearchEngineError:
    def test_default_code(self) -> None:
        err = SearchEngineError("boom")
        assert err.code == "search_engine_error"
        assert err.message == "boom"
        assert err.detail == {}

    def test_str_is_json(self) -> None:
        err = SearchEngineError("boom", detail={"k": 1})
        payload = json.loads(str(err))
        assert payload == {
            "code": "search_engine_error",
            "message": "boom",
            "client_error": False,
            "detail": {"k": 1},
        }

    def test_empty_detail_omitted(self) -> None:
        assert "detail" not in SearchEngineError("boom").to_dict()

    def test_cause_is_chained(self) -> None:
        original = ValueError("bad")
        err = SearchEngineError("wrapped", cause=original)
        assert err.__cause__ is original
        assert err.to_dict()["cause"] == repr(original)

    def test_repr(self) -> None:
        assert repr(SearchEngineError("x", code="c")) == "SearchEngineError(code='c', message='x')"


# ---------------------------------------------------------------------------
# Request errors
# ---------------------------------------------------------------------------


class TestInvalidRequestErrors:
    @pytest.mark.parametrize(
        "error",
        [
            InvalidPaginationError("page", 0),
            PageSizeExceededError(101, 100),
            UnknownFieldError("ghost", ["name"]),
            OperatorNotAllowedError("name", "greater_than", ["equal"]),
            MissingFilterValueError("name", "equal"),
            UnsortableFieldError("orders.total"),
        ],
    )
    def test_all_are_invalid_request(self, error: InvalidRequestError) -> None:
        assert isinstance(error, InvalidRequestError)
        assert isinstance(error, SearchEngineError)
        assert error.client_error is True
        assert error.to_dict()["client_error"] is True

    def test_unknown_field_lists_known_ids(self) -> None:
        err = UnknownFieldError("ghost", ["name", "age"])
        assert err.field == "ghost"
        assert err.known_fields == ["age", "name"]
        assert "ghost" in err.message
        assert "age, name" in err.message

    def test_operator_not_allowed_names_alternatives(self) -> None:
        err = OperatorNotAllowedError("name", "greater_than", ["like", "equal"])
        assert err.allowed == ["equal", "like"]
        assert err.detail["operator"] == "greater_than"

    def test_page_size_exceeded_detail(self) -> None:
        err = PageSizeExceededError(101, 100)
        assert err.detail == {"page_size": 101, "max_page_size": 100}
        assert err.code == "page_size_exceeded"


# ---------------------------------------------------------------------------
# Other kinds
# ---------------------------------------------------------------------------


class TestOtherErrors:
    def test_conversion_error_carries_field_and_value(self) -> None:
        err = ConversionError("age", "abc", "int32", "invalid literal")
        assert err.field == "age"
        assert err.raw_value == "abc"
        assert err.semantic_type == "int32"
        assert "invalid literal" in err.message
        assert not isinstance(err, InvalidRequestError)
        assert err.client_error is True

    def test_invariant_violation_is_distinct_kind(self) -> None:
        err = InvariantViolationError("bug")
        assert not isinstance(err, (InvalidRequestError, ConversionError, ConfigError))
        assert err.client_error is False

    def test_configuration_error_is_config_error(self) -> None:
        assert issubclass(ConfigurationError, ConfigError)
        assert issubclass(ConfigError, SearchEngineError)

    def test_query_execution_error_executor(self) -> None:
        err = QueryExecutionError("failed", executor="X")
        assert err.executor == "X"
        assert err.code == "query_execution_error"
