"""Structured logging setup."""

from __future__ import annotations

from .logging import add_correlation_id, configure_logging

__all__ = ["configure_logging", "add_correlation_id"]
