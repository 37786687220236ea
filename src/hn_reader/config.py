"""Configuration constants for hn-reader."""

import os

# Firebase endpoint of the public Hacker News API.
API_BASE: str = os.environ.get("HN_READER_API_BASE", "https://hacker-news.firebaseio.com/v0")

# Number of story ids resolved per page of the feed.
BATCH_SIZE: int = 20

# How many unseen items may remain below the last visible one before the next page loads.
NEAR_END_THRESHOLD: int = 5

# Worker threads shared by feed pages and comment expansion.
MAX_WORKERS: int = int(os.environ.get("HN_READER_MAX_WORKERS", "16"))

# Seconds before a single HTTP request gives up.
REQUEST_TIMEOUT: float = float(os.environ.get("HN_READER_REQUEST_TIMEOUT", "10"))

# Seconds the drain loops wait for a result before re-checking staleness.
POLL_INTERVAL: float = 0.05
