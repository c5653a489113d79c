"""Metrics and request logging."""
