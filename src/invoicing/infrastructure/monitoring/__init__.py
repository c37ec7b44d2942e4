"""Monitoring: structured logging."""
