"""Tests for breeze.config."""

from __future__ import annotations

import pytest

from breeze.config import DEFAULT_MAX_TOKEN_LENGTH, RenderOptions


class TestRenderOptions:
    def test_defaults(self):
        assert RenderOptions().max_token_length == DEFAULT_MAX_TOKEN_LENGTH == 127

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            RenderOptions(max_token_length=0)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("BREEZE_MAX_TOKEN_LENGTH", "64")
        assert RenderOptions.from_env().max_token_length == 64

    def test_explicit_beats_env(self, monkeypatch):
        monkeypatch.setenv("BREEZE_MAX_TOKEN_LENGTH", "64")
        assert RenderOptions.from_env(max_token_length=32).max_token_length == 32

    def test_env_unset(self, monkeypatch):
        monkeypatch.delenv("BREEZE_MAX_TOKEN_LENGTH", raising=False)
        assert RenderOptions.from_env().max_token_length == 127

    def test_invalid_env(self, monkeypatch):
        monkeypatch.setenv("BREEZE_MAX_TOKEN_LENGTH", "lots")
        with pytest.raises(ValueError, match="must be an integer"):
            RenderOptions.from_env()
