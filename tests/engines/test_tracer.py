"""Tests for the engine trace decorator and input fingerprints."""

from datetime import date
from decimal import Decimal

import pytest

from ledger_engines.tracer import TRACE_TYPE, compute_input_fingerprint, traced_engine
from ledger_kernel.domain.periods import PeriodType


@traced_engine("sample", "2.1", fingerprint_fields=("period_type", "reference"))
def _sample(entries, period_type, reference=None):
    return len(entries)


class TestFingerprint:

    def test_deterministic_sixteen_hex_chars(self):
        fp = compute_input_fingerprint(("a",), {"a": Decimal("1.00")})
        assert fp == compute_input_fingerprint(("a",), {"a": Decimal("1.00")})
        assert len(fp) == 16
        int(fp, 16)

    def test_only_selected_fields_count(self):
        fields = ("a",)
        assert compute_input_fingerprint(fields, {"a": 1, "b": 2}) == \
            compute_input_fingerprint(fields, {"a": 1, "b": 3})

    def test_enum_and_value_fingerprint_identically(self):
        fields = ("period_type",)
        assert compute_input_fingerprint(fields, {"period_type": PeriodType.MONTHLY}) == \
            compute_input_fingerprint(fields, {"period_type": "monthly"})

    def test_missing_field_recorded_as_null(self):
        assert compute_input_fingerprint(("x",), {}) == \
            compute_input_fingerprint(("x",), {"x": None})


class TestTracedEngine:

    def test_return_value_passes_through(self):
        assert _sample([1, 2, 3], "monthly") == 3
        assert _sample.__name__ == "_sample"

    def test_trace_record_emitted(self, captured_logs):
        _sample([], "monthly", reference=date(2024, 1, 1))
        traces = [r for r in captured_logs() if r["message"] == TRACE_TYPE]
        assert len(traces) == 1
        trace = traces[0]
        assert trace["trace_type"] == "LEDGER_ENGINE_TRACE"
        assert trace["engine_name"] == "sample"
        assert trace["engine_version"] == "2.1"
        assert len(trace["input_fingerprint"]) == 16
        assert trace["duration_ms"] >= 0

    def test_positional_and_keyword_calls_fingerprint_identically(self, captured_logs):
        _sample([], "monthly", date(2024, 1, 1))
        _sample([], period_type="monthly", reference=date(2024, 1, 1))
        traces = [r for r in captured_logs() if r["message"] == TRACE_TYPE]
        assert traces[0]["input_fingerprint"] == traces[1]["input_fingerprint"]

    def test_input_size_is_logged(self, captured_logs):
        _sample([1, 2], "yearly")
        trace = [r for r in captured_logs() if r["message"] == TRACE_TYPE][-1]
        assert trace["input_size"] == 2
        assert trace["outcome"] == "ok"

    def test_failed_call_is_traced_and_reraised(self, captured_logs):
        with pytest.raises(ZeroDivisionError):
            _broken([])
        trace = [r for r in captured_logs() if r["message"] == TRACE_TYPE][-1]
        assert trace["engine_name"] == "broken"
        assert trace["outcome"] == "error"


@traced_engine("broken", "1.0")
def _broken(entries):
    return 1 / len(entries)


class _Calculator:

    @traced_engine("method_sample", "1.0")
    def run(self, documents, as_of=None):
        return len(documents)

    @traced_engine("named_size", "1.0", size_field="items")
    def tally(self, label, items):
        return len(items)


class TestInputSize:

    def _trace(self, captured_logs, name):
        return [
            r for r in captured_logs()
            if r["message"] == TRACE_TYPE and r["engine_name"] == name
        ][-1]

    def test_method_skips_self(self, captured_logs):
        _Calculator().run([1, 2, 3])
        assert self._trace(captured_logs, "method_sample")["input_size"] == 3

    def test_explicit_size_field(self, captured_logs):
        _Calculator().tally("abcdefgh", items=[1])
        assert self._trace(captured_logs, "named_size")["input_size"] == 1
