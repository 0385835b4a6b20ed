"""Workout plan parsing, enrichment and generation service."""
