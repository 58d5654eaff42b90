"""Scoring and leaderboard core for social fitness competitions."""

__version__ = "0.1.0"
