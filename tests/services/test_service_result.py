"""Tests for ServiceResult and ServiceError."""

import pydantic
import pytest

from wydy.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="resolve")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None

    def test_failure_builds_error(self) -> None:
        result = ServiceResult.failure("ask", "HANDSHAKE_FAILED", "bad magic", received="NOPE")
        assert not result.ok
        assert result.op == "ask"
        assert result.error == ServiceError(
            code="HANDSHAKE_FAILED", message="bad magic", detail={"received": "NOPE"}
        )

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="x")
        with pytest.raises(pydantic.ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_json_dump(self) -> None:
        result = ServiceResult(ok=True, op="x", data={"count": 1}, warnings=["careful"])
        dumped = result.model_dump(mode="json")
        assert dumped == {
            "ok": True,
            "op": "x",
            "data": {"count": 1},
            "warnings": ["careful"],
            "error": None,
        }
