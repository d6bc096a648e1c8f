"""
String benchmarks - iteration styles, code point parsing and costly habits.

Ready-made comparisons that double as examples of how to call the harness:
- Loop styles for walking a string character by character
- Ways to split a string into characters, including one that breaks
  characters outside the Basic Multilingual Plane
- "Bad code" pairs where a conversion is repeated inside the loop
"""

import unicodedata
from typing import Optional

from ...harness.arguments import Single
from ...harness.results import RankedResult
from ...harness.runner import BenchmarkRunner

DEFAULT_ASCII_TEXT = "AbcdefghijkLMNOP"
DEFAULT_UNICODE_TEXT = (
    "foo \U0001d306 bar \U0001d7d9\U0001d7da\U0001d7db\U0001f60e "
    "ma\u00f1ana man\u0303ana \U0001f3f3\ufe0f\u200d\U0001f308"
)


# ============================================================================
# Loop styles
# ============================================================================

def for_index(s: str) -> str:
    s2 = ""
    for i in range(len(s)):
        s2 += s[i]
    return s2


def while_len(s: str) -> str:
    s2 = ""
    i = 0
    while i < len(s):
        s2 += s[i]
        i += 1
    return s2


def while_cached_len(s: str) -> str:
    s2 = ""
    length = len(s)
    i = 0
    while i < length:
        s2 += s[i]
        i += 1
    return s2


def for_in(s: str) -> str:
    s2 = ""
    for c in s:
        s2 += c
    return s2


def join_generator(s: str) -> str:
    return "".join(c for c in s)


# ============================================================================
# Character parsing (each character followed by a dash)
# ============================================================================

def for_index_dash(s: str) -> str:
    s2 = ""
    for i in range(len(s)):
        s2 += s[i] + "-"
    return s2


def utf16_units_dash(s: str) -> str:
    """Walks UTF-16 code units; astral characters come out as split surrogates."""
    data = s.encode("utf-16-le", "surrogatepass")
    s2 = ""
    for i in range(0, len(data), 2):
        s2 += data[i:i + 2].decode("utf-16-le", "surrogatepass") + "-"
    return s2


def code_point_dash(s: str) -> str:
    s2 = ""
    for c in s:
        s2 += chr(ord(c)) + "-"
    return s2


def list_dash(s: str) -> str:
    a = list(s)
    s2 = ""
    for i in range(len(a)):
        s2 += a[i] + "-"
    return s2


# ============================================================================
# Bad code: conversions repeated inside the loop
# ============================================================================

def list_cached(s: str) -> str:
    a = list(s)
    s2 = ""
    for i in range(len(a)):
        s2 += a[i]
    return s2


def list_not_cached(s: str) -> str:
    s2 = ""
    i = 0
    while i < len(list(s)):
        s2 += list(s)[i]
        i += 1
    return s2


def normalize_cached(s: str) -> str:
    n = unicodedata.normalize("NFC", s)
    s2 = ""
    for i in range(len(n)):
        s2 += n[i]
    return s2


def normalize_not_cached(s: str) -> str:
    s2 = ""
    i = 0
    while i < len(unicodedata.normalize("NFC", s)):
        s2 += unicodedata.normalize("NFC", s)[i]
        i += 1
    return s2


LOOP_CANDIDATES = [for_index, while_len, while_cached_len, for_in, join_generator]
PARSING_CANDIDATES = [for_index_dash, utf16_units_dash, code_point_dash, list_dash]
BAD_CODE_PAIRS = {
    "list": [list_cached, list_not_cached],
    "normalize": [normalize_cached, normalize_not_cached],
}


class StringBenchmarkSuite:
    """Suite of string-handling comparisons."""

    def __init__(self, runner: Optional[BenchmarkRunner] = None):
        self.runner = runner or BenchmarkRunner()

    def run_for_methods(self, text: Optional[str] = None, **overrides) -> list[RankedResult]:
        """Compare loop styles for walking a string."""
        text = text or DEFAULT_ASCII_TEXT
        return self.runner.measure(LOOP_CANDIDATES, Single(text), **overrides)

    def run_char_parsing(self, text: Optional[str] = None, **overrides) -> list[RankedResult]:
        """Compare ways of splitting a string into characters."""
        text = unicodedata.normalize("NFC", text or DEFAULT_UNICODE_TEXT)
        return self.runner.measure(PARSING_CANDIDATES, Single(text), **overrides)

    def run_bad_code(self, text: Optional[str] = None, **overrides) -> dict[str, list[RankedResult]]:
        """Compare hoisted conversions against ones repeated per iteration."""
        text = text or DEFAULT_UNICODE_TEXT
        return {
            name: self.runner.measure(pair, Single(text), **overrides)
            for name, pair in BAD_CODE_PAIRS.items()
        }

    def run_all(self, text: Optional[str] = None, **overrides) -> dict:
        """Run all string benchmarks."""
        results = {}

        print("\n" + "=" * 70)
        print("STRING BENCHMARK SUITE")
        print("=" * 70)

        print("\n--- Loop styles ---")
        results["for_methods"] = self.run_for_methods(text, **overrides)

        print("\n--- Character parsing ---")
        results["char_parsing"] = self.run_char_parsing(text, **overrides)

        print("\n--- Bad code ---")
        results["bad_code"] = self.run_bad_code(text, **overrides)

        return results
