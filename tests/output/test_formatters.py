"""Tests for the format_result dispatcher and OutputSettings."""

import json

from poolctl.output.formatters import OutputSettings, format_result
from poolctl.services.result import ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult.success(op, dict(data))


def _err(op: str = "test", msg: str = "fail") -> ServiceResult:
    return ServiceResult.failure(op, "ERR", msg)


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResult:
    def test_json_mode(self) -> None:
        output = format_result(_ok("apply", id="x"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["data"]["id"] == "x"

    def test_json_wins_over_quiet(self) -> None:
        settings = OutputSettings(json_output=True, quiet=True)
        assert json.loads(format_result(_err("apply", "Bad"), settings=settings))["ok"] is False

    def test_quiet_mode(self) -> None:
        output = format_result(_ok("apply", id="x"), settings=OutputSettings(quiet=True))
        assert output == "x"

    def test_rich_default(self) -> None:
        output = format_result(_ok("destroy", address="rg/srv/p", deleted=True))
        assert output.startswith("OK  destroy")
