"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

import json

from getui_rest.config.validation import ConfigError, MissingRequiredSettingError
from getui_rest.kernel.errors import (
    ApplicationError,
    BaseError,
    DomainError,
    ExternalServiceError,
    GetuiError,
    InfrastructureError,
    SerializationError,
    TimeoutError,
    ValidationError,
)


class TestBaseError:
    def test_default_code(self) -> None:
        assert BaseError("m").code == "base_error"

    def test_to_dict_basic(self) -> None:
        err = BaseError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {"code": "my_code", "message": "m", "detail": {"key": "val"}}

    def test_cause_sets_dunder_cause(self) -> None:
        cause = RuntimeError("root")
        err = BaseError("wrap", cause=cause)
        assert err.__cause__ is cause
        assert "root" in err.to_dict()["cause"]

    def test_str_is_valid_json(self) -> None:
        err = BaseError("oops", code="oops", detail={"x": 1})
        parsed = json.loads(str(err))
        assert parsed["detail"] == {"x": 1}


class TestGetuiError:
    def test_detail_is_raw_response(self) -> None:
        err = GetuiError("fail", {"result": "fail", "code": 123}, path="/push_single")
        assert err.detail == {"result": "fail", "code": 123}
        assert err.response is err.detail
        assert err.message == "fail"
        assert err.result == "fail"
        assert err.code == "getui_error"
        assert err.path == "/push_single"

    def test_detail_copied_from_response(self) -> None:
        response = {"result": "fail"}
        err = GetuiError("fail", response)
        err.detail["extra"] = 1
        assert response == {"result": "fail"}

    def test_is_application_error(self) -> None:
        assert issubclass(GetuiError, ApplicationError)
        assert not issubclass(GetuiError, InfrastructureError)


class TestHierarchy:
    def test_transport_errors_are_infrastructure(self) -> None:
        for cls in (ExternalServiceError, TimeoutError, SerializationError):
            assert issubclass(cls, InfrastructureError)

    def test_validation_is_domain(self) -> None:
        assert issubclass(ValidationError, DomainError)

    def test_config_errors(self) -> None:
        err = MissingRequiredSettingError("GETUI_APP_ID")
        assert isinstance(err, ConfigError)
        assert err.code == "missing_required_setting"
        assert "GETUI_APP_ID" in err.message

    def test_external_service_error_status(self) -> None:
        err = ExternalServiceError("push_single", status_code=502)
        assert err.status_code == 502
        assert err.message == "External service 'push_single' error"

    def test_validation_error_to_dict_has_errors(self) -> None:
        err = ValidationError("bad", errors=[{"field": "template"}])
        assert err.to_dict()["errors"] == [{"field": "template"}]
