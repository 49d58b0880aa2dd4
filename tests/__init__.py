"""Tests for the cycling portal."""
