"""Remote viewer (VNC) session configuration values."""

import os

from ..helpers.env import env_flag


REMOTE_DEFAULT_PORT = int(os.getenv("REMOTE_DEFAULT_PORT", "6080"))

# Import path of the viewer class, "package.module:Attribute"
REMOTE_VIEWER_FACTORY = os.getenv("REMOTE_VIEWER_FACTORY", "")

# Labels used when telling the user which credentials are missing
REMOTE_USERNAME_LABEL = os.getenv("REMOTE_USERNAME_LABEL", "Mac username")
REMOTE_PASSWORD_LABEL = os.getenv("REMOTE_PASSWORD_LABEL", "Mac password")
REMOTE_DEFAULT_FAILURE_REASON = os.getenv("REMOTE_DEFAULT_FAILURE_REASON", "wrong password")

# Display options applied to every new viewer instance
REMOTE_SCALE_VIEWPORT = env_flag("REMOTE_SCALE_VIEWPORT", True)
REMOTE_VIEWER_BACKGROUND = os.getenv("REMOTE_VIEWER_BACKGROUND", "#0a0a0f")


__all__ = [
    "REMOTE_DEFAULT_PORT",
    "REMOTE_VIEWER_FACTORY",
    "REMOTE_USERNAME_LABEL",
    "REMOTE_PASSWORD_LABEL",
    "REMOTE_DEFAULT_FAILURE_REASON",
    "REMOTE_SCALE_VIEWPORT",
    "REMOTE_VIEWER_BACKGROUND",
]
