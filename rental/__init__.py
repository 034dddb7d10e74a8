"""Outdoor equipment rental backend."""
