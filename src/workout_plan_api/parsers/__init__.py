"""Parsers for generated workout plan text."""
from .plan_parser import parse_day, parse_plan, segment_and_parse
from .segmenter import segment_days

__all__ = [
    "parse_day",
    "parse_plan",
    "segment_and_parse",
    "segment_days",
]
