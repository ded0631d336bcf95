"""WebSocket host serving one video poker machine per connection."""

from .server import TableHost, TableHostError, TableSession, run_server

__all__ = ["TableHost", "TableHostError", "TableSession", "run_server"]
