"""Session primitives shared by the gateway and remote clients."""

from .backoff import BackoffPolicy
from .generation import SessionGeneration
from .signals import Signal
from .observable import Observable
from .outcome import ReconnectOutcome
from .status import ConnectionStatus, describe_status
from .reconnect import DropInfo, ReconnectLoop

__all__ = [
    "BackoffPolicy",
    "ConnectionStatus",
    "describe_status",
    "DropInfo",
    "Observable",
    "ReconnectLoop",
    "ReconnectOutcome",
    "SessionGeneration",
    "Signal",
]
