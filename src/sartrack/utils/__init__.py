"""Utility helpers for sartrack."""
