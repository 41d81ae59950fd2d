"""Shared utilities (error handling, statistics)."""
