"""Utility constants, math helpers and exceptions."""
