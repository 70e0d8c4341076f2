"""Shared fakes for the session client tests."""

__all__ = ["fakes"]
