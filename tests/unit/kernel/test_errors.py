"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

import json

import pytest

from launchd_plist.kernel.errors import (
    ApplicationError,
    BaseError,
    CodecError,
    DomainError,
    ExpressionSyntaxError,
    InfrastructureError,
    RangeError,
    ValidationError,
)


class TestBaseError:
    def test_message_is_stored(self) -> None:
        err = BaseError("something went wrong")
        assert err.message == "something went wrong"

    def test_default_code(self) -> None:
        assert BaseError("m").code == "launchd_error"

    def test_custom_code(self) -> None:
        assert BaseError("m", code="custom").code == "custom"

    def test_to_dict_basic(self) -> None:
        err = BaseError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {"code": "my_code", "message": "m", "detail": {"key": "val"}}

    def test_cause_sets_dunder_cause(self) -> None:
        cause = RuntimeError("root")
        err = BaseError("wrap", cause=cause)
        assert err.__cause__ is cause
        assert err.to_dict()["cause"] == "RuntimeError: root"

    def test_detail_is_copied(self) -> None:
        detail = {"key": "Minute"}
        err = BaseError("m", detail=detail)
        detail["key"] = "Hour"
        assert err.detail == {"key": "Minute"}

    def test_str_is_valid_json(self) -> None:
        parsed = json.loads(str(BaseError("oops", code="oops", detail={"x": 1})))
        assert parsed["code"] == "oops"
        assert parsed["detail"] == {"x": 1}

    def test_repr(self) -> None:
        assert repr(BaseError("m")) == "BaseError(code='launchd_error', message='m')"


class TestHierarchy:
    @pytest.mark.parametrize(
        ("error", "parent"),
        [
            (ValidationError("v"), DomainError),
            (ExpressionSyntaxError("x", "bad"), ValidationError),
            (RangeError("hour", 25, range(0, 24)), DomainError),
            (CodecError("c", operation="read"), InfrastructureError),
            (ApplicationError("a"), BaseError),
        ],
    )
    def test_subclassing(self, error: BaseError, parent: type[BaseError]) -> None:
        assert isinstance(error, parent)
        assert isinstance(error, BaseError)


class TestRangeError:
    def test_attributes(self) -> None:
        err = RangeError("hour", 25, range(0, 24))
        assert err.field == "hour"
        assert err.value == 25
        assert err.bounds == (0, 23)
        assert err.code == "range_error"

    def test_message_names_field_value_and_bounds(self) -> None:
        err = RangeError("minute", 60, range(0, 60))
        assert "minute" in err.message
        assert "60" in err.message
        assert "0..59" in err.message

    def test_detail_is_serialisable(self) -> None:
        err = RangeError("day", 0, range(1, 32))
        assert err.to_dict()["detail"] == {"field": "day", "value": 0, "min": 1, "max": 31}
        json.loads(str(err))


class TestValidationError:
    def test_errors_default_empty(self) -> None:
        assert ValidationError("v").errors == []

    def test_errors_in_dict(self) -> None:
        err = ValidationError("v", errors=[{"field": "label"}])
        assert err.to_dict()["errors"] == [{"field": "label"}]


class TestExpressionSyntaxError:
    def test_carries_expression_and_reason(self) -> None:
        err = ExpressionSyntaxError("* * *", "expected 5 fields, got 3")
        assert err.expression == "* * *"
        assert err.reason == "expected 5 fields, got 3"
        assert err.code == "expression_syntax_error"
        assert "* * *" in err.message


class TestCodecError:
    def test_operation_in_dict(self) -> None:
        err = CodecError("bad plist", operation="write")
        assert err.operation == "write"
        assert err.to_dict()["operation"] == "write"
        assert err.code == "codec_error"
