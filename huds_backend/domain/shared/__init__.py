"""Shared domain errors and ports."""
