"""Tests for the format_result dispatcher and OutputSettings."""

import json

from postctl.output.formatters import OutputSettings, format_result
from postctl.services.result import ServiceError, ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail") -> ServiceResult:
    return ServiceResult(ok=False, op=op, error=ServiceError(code="ERR", message=msg))


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        output = format_result(_ok("get", path="a.md"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["data"]["path"] == "a.md"

    def test_json_mode_error(self) -> None:
        output = format_result(_err("get", "Bad"), settings=OutputSettings(json_output=True))
        assert json.loads(output)["error"]["message"] == "Bad"

    def test_json_output_kwarg(self) -> None:
        assert json.loads(format_result(_ok(), json_output=True))["ok"] is True

    def test_settings_override_kwarg(self) -> None:
        output = format_result(_ok(), settings=OutputSettings(), json_output=True)
        assert output.startswith("OK")


class TestFormatResultHuman:
    def test_generic_ok(self) -> None:
        output = format_result(_ok("test", key="val"))
        assert "OK" in output
        assert "key: val" in output

    def test_error(self) -> None:
        output = format_result(_err("get", "No document at x.md"))
        assert "ERROR" in output
        assert "No document at x.md" in output

    def test_quiet_listing(self) -> None:
        result = _ok("list_documents", items=[{"path": "a.md"}, {"path": "b.md"}], count=2)
        assert format_result(result, settings=OutputSettings(quiet=True)) == "a.md\nb.md"
