"""Shared utilities: error taxonomy, logging setup and formatting helpers."""
