"""Shared helpers for tagdeck commands."""
