"""Utility helpers shared across Smart Set modules."""

from smartset.utils.eighths import format_eighths, parse_eighths

__all__ = ["format_eighths", "parse_eighths"]
