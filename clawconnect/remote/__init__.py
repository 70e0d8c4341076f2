"""Remote viewer session client."""

from .loader import ViewerLoader
from .client import RemoteSessionClient
from .events import ViewerEvent
from .models import VncConfig, StatusKind
from .viewer import RemoteViewer, ViewerFactory

__all__ = [
    "RemoteSessionClient",
    "VncConfig",
    "ViewerLoader",
    "ViewerEvent",
    "RemoteViewer",
    "ViewerFactory",
    "StatusKind",
]
