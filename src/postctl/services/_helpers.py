"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import date


def today() -> date:
    """Today's local calendar date (front-matter dates carry no zone)."""
    return date.today()
