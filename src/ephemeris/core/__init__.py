"""Outline document model and datetree placement."""
