"""Gateway chat session client and its protocol pieces."""

from .transcript import Transcript
from .pending import PendingRequests
from .client import GatewaySessionClient
from .content import normalize_role, extract_content
from .models import Role, ChatMessage, ConnectionConfig
from .request_ids import RequestIdGenerator
from .frames import parse_frame, encode_frame, build_request

__all__ = [
    "GatewaySessionClient",
    "ConnectionConfig",
    "ChatMessage",
    "Role",
    "Transcript",
    "PendingRequests",
    "RequestIdGenerator",
    "parse_frame",
    "build_request",
    "encode_frame",
    "extract_content",
    "normalize_role",
]
