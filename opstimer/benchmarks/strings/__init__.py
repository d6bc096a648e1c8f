"""
String benchmarks - iteration styles, character parsing and bad code.
"""

from .benchmark import (
    for_index,
    while_len,
    while_cached_len,
    for_in,
    join_generator,
    for_index_dash,
    utf16_units_dash,
    code_point_dash,
    list_dash,
    list_cached,
    list_not_cached,
    normalize_cached,
    normalize_not_cached,
    LOOP_CANDIDATES,
    PARSING_CANDIDATES,
    BAD_CODE_PAIRS,
    DEFAULT_ASCII_TEXT,
    DEFAULT_UNICODE_TEXT,
    StringBenchmarkSuite,
)

__all__ = [
    "for_index",
    "while_len",
    "while_cached_len",
    "for_in",
    "join_generator",
    "for_index_dash",
    "utf16_units_dash",
    "code_point_dash",
    "list_dash",
    "list_cached",
    "list_not_cached",
    "normalize_cached",
    "normalize_not_cached",
    "LOOP_CANDIDATES",
    "PARSING_CANDIDATES",
    "BAD_CODE_PAIRS",
    "DEFAULT_ASCII_TEXT",
    "DEFAULT_UNICODE_TEXT",
    "StringBenchmarkSuite",
]
