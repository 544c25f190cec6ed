"""Shared helpers: logging setup and the effect registry."""
