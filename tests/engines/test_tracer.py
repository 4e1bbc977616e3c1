"""Tests for the engine tracer (asset_engines/tracer.py)."""

from asset_engines.tracer import compute_input_fingerprint, traced_engine
from asset_kernel.domain import GlobalSection


@traced_engine("sample", "2.1", fingerprint_fields=("category_id", "flag"))
def _sample(state, category_id, flag=False):
    return [category_id] * 3


class TestFingerprint:
    def test_deterministic(self):
        args = {"category_id": "boiler", "flag": True}
        assert compute_input_fingerprint(("category_id", "flag"), args) == (
            compute_input_fingerprint(("category_id", "flag"), dict(args))
        )

    def test_sensitive_to_values(self):
        a = compute_input_fingerprint(("category_id",), {"category_id": "boiler"})
        b = compute_input_fingerprint(("category_id",), {"category_id": "pump"})
        assert a != b
        assert len(a) == 16

    def test_enums_and_missing_values(self):
        fp = compute_input_fingerprint(("section", "absent"), {"section": GlobalSection.DATES})
        assert fp == compute_input_fingerprint(("section", "absent"), {"section": "dates", "absent": None})


class TestTracedEngine:
    def test_result_passes_through(self):
        assert _sample(None, "x") == ["x", "x", "x"]

    def test_trace_record(self, captured_logs):
        _sample(None, "boiler", flag=True)
        trace = [r for r in captured_logs() if r["message"] == "ASSET_ENGINE_TRACE"][-1]
        assert trace["engine_name"] == "sample"
        assert trace["engine_version"] == "2.1"
        assert trace["result_size"] == 3
        assert trace["function"] == "_sample"
        assert "duration_ms" in trace

    def test_positional_and_keyword_calls_fingerprint_alike(self, captured_logs):
        _sample(None, "boiler", True)
        _sample(None, category_id="boiler", flag=True)
        traces = [r for r in captured_logs() if r["message"] == "ASSET_ENGINE_TRACE"]
        assert traces[-1]["input_fingerprint"] == traces[-2]["input_fingerprint"]

    def test_defaults_are_fingerprinted(self, captured_logs):
        _sample(None, "boiler")
        _sample(None, "boiler", False)
        traces = [r for r in captured_logs() if r["message"] == "ASSET_ENGINE_TRACE"]
        assert traces[-1]["input_fingerprint"] == traces[-2]["input_fingerprint"]

    def test_marker_attribute(self):
        assert _sample.__wrapped_engine__ == ("sample", "2.1")
