from __future__ import annotations

import re

_BULLET_CHARS = "•◦▪▫●○■□◆◇▶►-–—*·"
_BULLET_PATTERN = re.compile(rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]|(?:\d+[\.\)]))\s+")
_EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
_METRIC_RE = re.compile(r"\d|%|[$€£]")
_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
_LIST_SPLIT_RE = re.compile(r"\s*(?:[,;|\n•]+)\s*")
_WORD_RE = re.compile(r"[A-Za-z][A-Za-z'-]*")


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line).strip()


def normalize_block(text: str) -> str:
    """Trim every line and drop blank ones, keeping line breaks between them."""
    lines = [normalize_line(line) for line in text.splitlines()]
    return "\n".join(line for line in lines if line)


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PATTERN.sub("", line).strip()


def split_list_text(text: str) -> list[str]:
    return [part for part in _LIST_SPLIT_RE.split(text) if part.strip()]


def bullet_lines(text: str) -> list[str]:
    return [strip_bullet_prefix(line) for line in text.splitlines() if strip_bullet_prefix(line)]


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value.strip()))


def count_digits(value: str) -> int:
    return sum(1 for char in value if char.isdigit())


def has_metric(text: str) -> bool:
    return bool(_METRIC_RE.search(text))


def has_year(text: str) -> bool:
    return bool(_YEAR_RE.search(text))


def word_count(text: str) -> int:
    return len(_WORD_RE.findall(text))


def first_word(text: str) -> str:
    match = _WORD_RE.search(strip_bullet_prefix(text))
    return match.group(0).lower() if match else ""


def matching_key(value: str) -> str:
    return normalize_line(value).lower()
