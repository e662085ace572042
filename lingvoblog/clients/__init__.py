"""Clients for outbound calls to third-party services."""

from lingvoblog.clients.search_engines import SearchEngineNotifier

__all__ = ["SearchEngineNotifier"]
