"""Unit tests for environment flag parsing."""

from __future__ import annotations

import pytest

from clawconnect.helpers.env import env_flag

FLAG = "CLAWCONNECT_TEST_FLAG"


@pytest.mark.parametrize("value", ["1", "true", "TRUE", " yes ", "on"])
def test_truthy_values(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv(FLAG, value)
    assert env_flag(FLAG, False) is True


@pytest.mark.parametrize("value", ["0", "false", "No", "off"])
def test_falsy_values(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv(FLAG, value)
    assert env_flag(FLAG, True) is False


@pytest.mark.parametrize("value", ["", "  ", "maybe"])
def test_blank_and_unknown_values_use_default(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv(FLAG, value)
    assert env_flag(FLAG, True) is True
    assert env_flag(FLAG, False) is False


def test_unset_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(FLAG, raising=False)
    assert env_flag(FLAG, True) is True
    assert env_flag(FLAG, False) is False
