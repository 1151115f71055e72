"""Tests for RecordBinder and the module-level bind()."""

from dataclasses import dataclass, field
from datetime import timedelta

import pytest

from binder_config.schema import BinderConfig
from binder_kernel.coercion.scalar import ValueCoercer
from binder_kernel.domain.type_kinds import Float32, Int8, Int64, TypeKind, Uint16
from binder_kernel.exceptions import BindError
from binder_kernel.services.record_binder import RecordBinder, bind


@dataclass
class Options:
    count: int = 0
    size: Int64 = 0
    items: list[int] = field(default_factory=list)
    flag: bool = True
    name: str = ""
    x: str = "prior"


@dataclass
class Flags:
    intslice: list[int] = field(default_factory=list)
    boolval: bool = False
    s: str = ""


@dataclass
class ServerSettings:
    host: str = "localhost"
    port: Uint16 = 0
    timeout: timedelta = timedelta(0)
    ratio: float = 0.0
    _api_key: str = ""


@dataclass(frozen=True)
class FrozenSettings:
    workers: int = 1


class _Single:
    """Annotated class with one field, for focused tests."""

    value: int

    def __init__(self, value: int = 0):
        self.value = value


class TestScenarios:
    def test_text_to_int(self):
        opts = Options()
        bind(opts, {"--count": "10", "--size": 0, "--items": [], "--flag": True,
                    "--name": "", "--x": ""}, "--%s")
        assert opts.count == 10

    def test_unit_suffix(self):
        target = _Single()
        bind(target, {"--value": "2M"}, "--%s")
        assert target.value == 2097152

    def test_sequence_of_text_to_int_list(self):
        @dataclass
        class Target:
            items: list[int] = field(default_factory=list)

        target = Target()
        bind(target, {"--items": ["1", "2", "3"]}, "--%s")
        assert target.items == [1, 2, 3]

    def test_nil_sets_zero_value(self):
        @dataclass
        class Target:
            flag: bool = True

        target = Target()
        bind(target, {"--flag": None}, "--%s")
        assert target.flag is False

    def test_absent_key_reports_not_found(self):
        @dataclass
        class Target:
            Name: str = "kept"

        target = Target()
        with pytest.raises(BindError) as exc_info:
            bind(target, {})
        assert "not found" in str(exc_info.value)
        assert "'Name'" in str(exc_info.value)
        assert target.Name == "kept"

    def test_multi_element_sequence_into_scalar(self):
        @dataclass
        class Target:
            x: str = "prior"

        target = Target()
        with pytest.raises(BindError) as exc_info:
            bind(target, {"--x": ["a", "b"]}, "--%s")
        assert exc_info.value.failures[0].code == "CARDINALITY_MISMATCH"
        assert target.x == "prior"

    def test_documented_example(self):
        flags = Flags()
        bind(
            flags,
            {"--intslice": ["5", "12", "0.5k"], "--boolval": True, "-s": "hello"},
            "--%s",
            "-%s",
        )
        assert flags == Flags(intslice=[5, 12, 512], boolval=True, s="hello")


class TestBindBehaviour:
    def test_direct_assignment_is_identity(self):
        @dataclass
        class Target:
            items: list[str] = field(default_factory=list)

        items = ["a", "b"]
        target = Target()
        bind(target, {"items": items})
        assert target.items is items

    def test_pattern_precedence(self):
        @dataclass
        class Target:
            foo: str = ""

        target = Target()
        bind(target, {"--foo": "long", "-foo": "short"}, "--%s", "-%s")
        assert target.foo == "long"

    def test_all_failures_aggregated(self):
        settings = ServerSettings()
        source = {
            "host": ["a", "b"],
            "port": "70000",
            "timeout": "soon",
            "ratio": "0.75",
        }
        with pytest.raises(BindError) as exc_info:
            bind(settings, source)
        err = exc_info.value
        assert err.fields == ("host", "port", "timeout", "_api_key")
        assert [f.code for f in err.failures] == [
            "CARDINALITY_MISMATCH",
            "OVERFLOW",
            "PARSE_ERROR",
            "NOT_FOUND",
        ]
        assert len(str(err).splitlines()) == 4
        assert str(err).splitlines()[1].startswith("port: ")
        assert "attempted keys: '_api_key'" in str(err).splitlines()[3]
        # Fields that bound stay bound
        assert settings.ratio == 0.75
        assert settings.host == "localhost"

    def test_float32_field_rounded_and_range_checked(self):
        @dataclass
        class Target:
            ratio: Float32 = 0.0
            scale: Float32 = 0.0

        target = Target()
        with pytest.raises(BindError) as exc_info:
            bind(target, {"ratio": 0.1, "scale": 1e300})
        assert target.ratio == pytest.approx(0.1, rel=1e-7)
        assert target.ratio != 0.1
        assert target.scale == 0.0
        assert exc_info.value.fields == ("scale",)
        assert exc_info.value.failures[0].code == "OVERFLOW"

    def test_partial_sequence_is_stored(self):
        @dataclass
        class Target:
            levels: list[Int8] = field(default_factory=list)

        target = Target()
        with pytest.raises(BindError) as exc_info:
            bind(target, {"levels": ["1", "x", "3"]})
        assert target.levels == [1, 0, 3]
        assert exc_info.value.fields == ("levels[1]",)

    def test_private_field_resolved_by_verbatim_name(self):
        settings = ServerSettings()
        bind(settings, {"--host": "h", "--port": 80, "--timeout": "30s",
                        "--ratio": 1.0, "--_api_key": "k"}, "--%s")
        assert settings._api_key == "k"
        assert settings.port == 80
        assert settings.timeout == timedelta(seconds=30)

    def test_frozen_dataclass_is_writable_through_escape_hatch(self):
        settings = FrozenSettings()
        bind(settings, {"workers": "4"})
        assert settings.workers == 4

    def test_unsettable_when_protected_writes_disabled(self):
        binder = RecordBinder(BinderConfig(write_protected=False))
        settings = ServerSettings()
        with pytest.raises(BindError) as exc_info:
            binder.bind(settings, {"host": "h", "port": 1, "timeout": None,
                                   "ratio": 2.0, "_api_key": "k"})
        assert exc_info.value.fields == ("_api_key",)
        assert exc_info.value.failures[0].code == "UNSETTABLE_FIELD"
        assert settings.host == "h"
        assert settings._api_key == ""

    def test_config_patterns_used_when_call_has_none(self):
        binder = RecordBinder(BinderConfig(patterns=("APP_%s",)))
        target = _Single()
        binder.bind(target, {"APP_value": "7"})
        assert target.value == 7

    def test_call_patterns_override_config(self):
        binder = RecordBinder(BinderConfig(patterns=("APP_%s",)))
        target = _Single()
        binder.bind(target, {"APP_value": "7", "--value": "8"}, "--%s")
        assert target.value == 8

    def test_private_prefix_kept_by_default(self):
        @dataclass
        class Target:
            _token: str = ""

        with pytest.raises(BindError) as exc_info:
            bind(Target(), {"token": "t"})
        assert "'_token'" in str(exc_info.value)

        target = Target()
        bind(target, {"_token": "t"})
        assert target._token == "t"

    def test_private_prefix_stripped_when_configured(self):
        binder = RecordBinder(BinderConfig(strip_private_prefix=True))

        @dataclass
        class Target:
            _token: str = ""

        target = Target()
        binder.bind(target, {"--token": "t", "--_token": "raw"}, "--%s")
        assert target._token == "t"

    def test_invalid_pattern_raises_before_binding(self):
        target = _Single(5)
        with pytest.raises(ValueError):
            bind(target, {"value": 1}, "--%s-%s")
        assert target.value == 5

    def test_non_record_target(self):
        with pytest.raises(TypeError):
            bind(_Single, {"value": 1})

    def test_custom_value_coercer(self):
        coercer = ValueCoercer()
        coercer.register(TypeKind.TEXT, TypeKind.BOOL, lambda v, d: v == "yes")
        binder = RecordBinder(value_coercer=coercer)

        @dataclass
        class Target:
            enabled: bool = False

        target = Target()
        binder.bind(target, {"enabled": "yes"})
        assert target.enabled is True

    def test_read_only_property_reported_unsettable(self):
        class Target:
            value: int

            @property
            def value(self) -> int:
                return 1

        with pytest.raises(BindError) as exc_info:
            bind(Target(), {"value": 2})
        assert exc_info.value.failures[0].code == "UNSETTABLE_FIELD"


class TestBindLogging:
    def test_logs_bound_and_failed_fields(self, captured_logs):
        @dataclass
        class Target:
            good: int = 0
            bad: int = 0

        with pytest.raises(BindError):
            bind(Target(), {"good": "1", "bad": "nope"})

        logs = captured_logs()
        messages = [r["message"] for r in logs]
        assert messages == ["field_bound", "field_bind_failed", "bind_completed"]

        bound, failed, completed = logs
        assert bound["field_name"] == "good"
        assert bound["record_type"] == "Target"
        assert bound["source_key"] == "good"
        assert bound["strategy"] == "scalar"
        assert failed["level"] == "WARNING"
        assert failed["field"] == "bad"
        assert failed["code"] == "PARSE_ERROR"
        assert completed["field_count"] == 2
        assert completed["failure_count"] == 1
        assert "field_name" not in completed
