"""Reusable libraries bundled with fanlog."""
