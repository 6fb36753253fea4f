"""Connoisseur vote checker for VR Master League matches."""

__version__ = '0.1.0'
