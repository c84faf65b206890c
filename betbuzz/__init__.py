"""Bet Buzz API: cross-provider odds and chatter aggregation for college football."""

__version__ = "0.1.0"
