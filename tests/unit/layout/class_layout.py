"""Unit tests for the package's one-class-per-module layout."""

from __future__ import annotations

import ast
from pathlib import Path

import clawconnect
from clawconnect import errors, session, remote, gateway

PACKAGE_DIR = Path(clawconnect.__file__).resolve().parent


def _is_dataclass(node: ast.ClassDef) -> bool:
    for decorator in node.decorator_list:
        target = decorator.func if isinstance(decorator, ast.Call) else decorator
        name = target.attr if isinstance(target, ast.Attribute) else getattr(target, "id", "")
        if name == "dataclass":
            return True
    return False


def _top_level_classes(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"))
    return [node.name for node in tree.body if isinstance(node, ast.ClassDef) and not _is_dataclass(node)]


def test_each_module_defines_at_most_one_class() -> None:
    crowded = {
        str(path.relative_to(PACKAGE_DIR)): classes
        for path in sorted(PACKAGE_DIR.rglob("*.py"))
        if len(classes := _top_level_classes(path)) > 1
    }
    assert crowded == {}


def test_split_classes_are_reexported_from_their_packages() -> None:
    from clawconnect.errors.timeout import GatewayRequestTimeout
    from clawconnect.errors.credentials import CredentialsRequiredError
    from clawconnect.session.signals import Signal
    from clawconnect.session.outcome import ReconnectOutcome
    from clawconnect.remote.events import ViewerEvent
    from clawconnect.gateway.request_ids import RequestIdGenerator

    assert errors.GatewayRequestTimeout is GatewayRequestTimeout
    assert errors.CredentialsRequiredError is CredentialsRequiredError
    assert session.Signal is Signal
    assert session.ReconnectOutcome is ReconnectOutcome
    assert remote.ViewerEvent is ViewerEvent
    assert gateway.RequestIdGenerator is RequestIdGenerator
