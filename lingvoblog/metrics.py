"""Prometheus metric definitions for the blog service."""

from __future__ import annotations

from prometheus_client import Counter

# --- Publishing ---

posts_created_total = Counter(
    "lingvoblog_posts_created_total",
    "Posts inserted through the create-post endpoint",
    labelnames=["published"],
)

# --- Indexing ---

search_engine_pings_total = Counter(
    "lingvoblog_search_engine_pings_total",
    "Search-engine notifications sent, by engine and outcome",
    labelnames=["engine", "status"],
)

# --- Mail ---

replies_total = Counter(
    "lingvoblog_replies_total",
    "Contact-form replies attempted",
    labelnames=["status"],
)
