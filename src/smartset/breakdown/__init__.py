"""Screenplay breakdown: extraction, import, jobs and suggestions."""

from smartset.breakdown.categories import classify

__all__ = ["classify"]
