"""Cycling race portal with a stage results and classification engine."""

from cycling_portal.portal import CyclingPortal

__all__ = ["CyclingPortal"]
