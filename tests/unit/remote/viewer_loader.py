"""Unit tests for lazy viewer factory resolution."""

from __future__ import annotations

import pytest

from clawconnect.errors import ViewerLoadError
from clawconnect.remote import ViewerLoader
from tests.helpers.fakes import FakeViewerFactory


def test_explicit_factory_is_used_as_is() -> None:
    factory = FakeViewerFactory()
    loader = ViewerLoader(factory)
    assert loader.loaded
    assert loader.load() is factory


def test_unconfigured_loader_fails() -> None:
    loader = ViewerLoader(import_path="")
    with pytest.raises(ViewerLoadError, match="No viewer configured"):
        loader.load()
    assert loader.preload() is False


def test_import_path_is_resolved_and_cached() -> None:
    loader = ViewerLoader(import_path="tests.helpers.fakes:FakeViewer")
    assert not loader.loaded

    factory = loader.load()

    from tests.helpers.fakes import FakeViewer

    assert factory is FakeViewer
    assert loader.loaded
    assert loader.load() is factory


def test_missing_module_fails() -> None:
    with pytest.raises(ViewerLoadError, match="Cannot import viewer module"):
        ViewerLoader(import_path="clawconnect_no_such_viewer").load()


def test_non_callable_attribute_fails() -> None:
    loader = ViewerLoader(import_path="tests.helpers.fakes:HANDSHAKE_OK")
    with pytest.raises(ViewerLoadError, match="is not a viewer factory"):
        loader.load()
    assert not loader.loaded


def test_preload_reports_success() -> None:
    assert ViewerLoader(import_path="tests.helpers.fakes:FakeViewer").preload() is True
