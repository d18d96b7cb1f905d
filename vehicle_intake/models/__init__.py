"""Inspection record, photo and vocabulary models."""
