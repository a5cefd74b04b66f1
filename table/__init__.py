"""Table package: exposes the dealing engine to a single viewer over WebSockets."""

from .server import TableSession, handle_connection, run_server

__all__ = ["TableSession", "handle_connection", "run_server"]
