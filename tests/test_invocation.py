"""Tests for fail-safe LOON encoding of tool results."""

import sys

import pytest

from loon import Encoder
from loon import invocation as invocation_module
from loon.invocation import apply_loon_encoding, invoke_tool


@pytest.fixture
def outputs_enabled(monkeypatch):
    monkeypatch.setattr(invocation_module.Config, "ENABLE_LOON_OUTPUTS", True)


@pytest.fixture
def outputs_disabled(monkeypatch):
    monkeypatch.setattr(invocation_module.Config, "ENABLE_LOON_OUTPUTS", False)


class TestApplyLoonEncoding:
    """Test apply_loon_encoding behavior."""

    def test_encodes_when_enabled(self, outputs_enabled):
        """Results become LOON strings when outputs are enabled."""
        result = {"files": [{"name": "a.py", "size": 10}, {"name": "b.py", "size": 20}]}

        encoded = apply_loon_encoding(result, encoder=Encoder())

        assert encoded == "{files:[{name,size}:a.py,10;b.py,20]}"

    def test_passthrough_when_disabled(self, outputs_disabled):
        """Results pass through untouched when outputs are disabled."""
        result = {"files": ["a", "b"]}

        assert apply_loon_encoding(result) is result

    def test_failure_returns_original(self, outputs_enabled, loon_logs):
        """Unencodable results are returned as-is with a warning."""
        result = {"bad key": 1}

        assert apply_loon_encoding(result, encoder=Encoder()) is result
        assert any(
            m.startswith("WARNING") and "LOON encoding failed (invalid_key)" in m
            for m in loon_logs
        )

    @pytest.mark.skipif(
        not hasattr(sys, "set_int_max_str_digits"),
        reason="int to str digit limit added in Python 3.11",
    )
    def test_oversized_int_returns_original(self, outputs_enabled):
        """An int too long to write out falls back to the original result."""
        result = {"big": 10**5000}
        original_limit = sys.get_int_max_str_digits()
        sys.set_int_max_str_digits(4300)
        try:
            assert apply_loon_encoding(result, encoder=Encoder()) is result
        finally:
            sys.set_int_max_str_digits(original_limit)

    def test_default_encoder_from_config(self, outputs_enabled, monkeypatch):
        """Config settings apply when no encoder is passed."""
        monkeypatch.setattr(
            invocation_module.Encoder,
            "from_config",
            classmethod(lambda cls: cls(schema_arrays=False)),
        )

        assert apply_loon_encoding([{"a": 1}, {"a": 2}]) == "[{a:1},{a:2}]"


class TestInvokeTool:
    """Test the async tool wrapper."""

    @pytest.mark.asyncio
    async def test_invoke_tool_encodes_result(self, outputs_enabled):
        """The awaited result is LOON encoded."""

        async def call_next():
            return {"count": 2, "items": ["x", "y"]}

        assert await invoke_tool(call_next) == "{count:2;items:[x,y]}"

    @pytest.mark.asyncio
    async def test_invoke_tool_passthrough(self, outputs_disabled):
        """Disabled outputs return the awaited result unchanged."""
        payload = {"count": 2}

        async def call_next():
            return payload

        assert await invoke_tool(call_next) is payload
