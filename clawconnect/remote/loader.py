"""Lazy loading of the viewer implementation.

The viewer is an external component. Its class is resolved from an import
path ("package.module:Attribute", `REMOTE_VIEWER_FACTORY`) the first time a
session needs it; later calls reuse the resolved factory.
"""

from __future__ import annotations

import logging
import importlib

from .viewer import ViewerFactory
from ..errors import ViewerLoadError
from ..config.remote import REMOTE_VIEWER_FACTORY

logger = logging.getLogger(__name__)


class ViewerLoader:
    """Resolves and caches the viewer factory."""

    def __init__(self, factory: ViewerFactory | None = None, import_path: str = REMOTE_VIEWER_FACTORY) -> None:
        self._factory = factory
        self._import_path = import_path

    @property
    def loaded(self) -> bool:
        return self._factory is not None

    def load(self) -> ViewerFactory:
        if self._factory is not None:
            return self._factory
        if not self._import_path:
            raise ViewerLoadError("No viewer configured (set REMOTE_VIEWER_FACTORY)")

        module_name, _, attr = self._import_path.partition(":")
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise ViewerLoadError(f"Cannot import viewer module '{module_name}': {exc}") from exc

        factory = getattr(module, attr or "RFB", None)
        if not callable(factory):
            raise ViewerLoadError(f"'{self._import_path}' is not a viewer factory")
        self._factory = factory
        logger.info("Viewer loaded from %s", self._import_path)
        return factory

    def preload(self) -> bool:
        """Try loading ahead of the first connect; failures retry on connect."""
        try:
            self.load()
        except ViewerLoadError as exc:
            logger.warning("Viewer preload failed, will retry on connect: %s", exc)
            return False
        return True


__all__ = ["ViewerLoader"]
