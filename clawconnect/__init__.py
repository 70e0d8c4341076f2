"""clawconnect: resilient gateway chat and remote viewer session clients."""

from .gateway import ChatMessage, ConnectionConfig, GatewaySessionClient
from .remote import VncConfig, RemoteSessionClient
from .session import BackoffPolicy, ConnectionStatus, describe_status

__version__ = "1.0.0"

__all__ = [
    "GatewaySessionClient",
    "ConnectionConfig",
    "ChatMessage",
    "RemoteSessionClient",
    "VncConfig",
    "ConnectionStatus",
    "BackoffPolicy",
    "describe_status",
    "__version__",
]
