"""
Тесты типизированных исключений.
"""

import pytest

from hardware_collector.core.exceptions import (
    AddressParseError,
    AmbiguousMatchError,
    ConfigError,
    DecodeError,
    ExportError,
    HardwareCollectorError,
    StageError,
    TypeMismatchError,
    UpstreamFetchError,
    format_error_for_log,
)


class TestHierarchy:

    @pytest.mark.parametrize("error", [
        AddressParseError("x"),
        TypeMismatchError("bmc_ip", "mapping", "string"),
        UpstreamFetchError("devices", RuntimeError("boom")),
        DecodeError("bad"),
        AmbiguousMatchError("h", "interface", ["a", "b"]),
        ExportError("/tmp/x.csv", OSError("denied")),
        ConfigError("bad"),
        StageError("devices", RuntimeError("boom")),
    ])
    def test_all_inherit_base(self, error):
        assert isinstance(error, HardwareCollectorError)


class TestMessages:

    def test_str_contains_details(self):
        error = TypeMismatchError("bmc_ip", expected="mapping", actual="string")
        text = str(error)
        assert "bmc_ip" in text
        assert "expected='mapping'" in text

    def test_to_dict(self):
        error = AddressParseError("10.800.21.31/21", field="bmc_ip")
        data = error.to_dict()
        assert data["error_type"] == "AddressParseError"
        assert data["details"] == {"literal": "10.800.21.31/21", "field": "bmc_ip"}

    def test_upstream_keeps_cause(self):
        cause = ConnectionError("refused")
        error = UpstreamFetchError("interfaces", cause, device="eksa-dev01")
        assert error.cause is cause
        assert error.details["device"] == "eksa-dev01"
        assert "refused" in str(error)

    def test_stage_error_wraps_cause(self):
        cause = TypeMismatchError("disk", "string", "null")
        error = StageError("devices", cause)
        assert error.stage == "devices"
        assert error.cause is cause
        assert "devices" in str(error)
        assert "disk" in str(error)

    def test_config_error_key(self):
        error = ConfigError("bad", config_file="config.yaml", key="netbox.timeout")
        assert error.details == {"config_file": "config.yaml", "key": "netbox.timeout"}


class TestFormatErrorForLog:

    def test_own_error(self):
        assert format_error_for_log(DecodeError("bad")) == str(DecodeError("bad"))

    def test_foreign_error(self):
        assert format_error_for_log(ValueError("oops")) == "ValueError: oops"
