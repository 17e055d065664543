"""Shared router helpers."""

from helios.api.routers.router_utils.error_handling import handle_session_errors

__all__ = ["handle_session_errors"]
