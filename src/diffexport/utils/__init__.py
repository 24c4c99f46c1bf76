"""Utility helpers shared by the diffexport renderers."""
