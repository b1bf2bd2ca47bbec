"""Keyword extraction for resume and job-description text.

The stemmer here is a heuristic suffix stripper, not a lemmatizer: it removes
one trailing ``ing``, ``ed`` or ``s`` when at least four characters remain.
It is lossy ("managed" -> "manag", "manages" -> "manage") and can conflate
unrelated words; category thresholds are calibrated against exactly this
behaviour, so replacing it means re-validating them.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from ats_engine.core.config.scoring import KeywordConfig, get_scoring_config
from ats_engine.schemas.profile import ResumeProfile
from ats_engine.taxonomy.provider import EMPTY_DICTIONARY, ReferenceDictionary, ReferenceTerm

_TOKEN_RE = re.compile(r"[A-Za-z0-9]+")


@dataclass(frozen=True, slots=True)
class KeywordSet:
    """Normalized keyword -> display form, in first-seen order."""

    terms: dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.terms)

    def __contains__(self, key: object) -> bool:
        return key in self.terms

    def keys(self) -> list[str]:
        return list(self.terms)

    def display(self, key: str) -> str:
        return self.terms.get(key, key)

    def union(self, other: "KeywordSet") -> "KeywordSet":
        merged = dict(self.terms)
        for key, display in other.terms.items():
            merged.setdefault(key, display)
        return KeywordSet(merged)

    def intersection_keys(self, other: "KeywordSet") -> list[str]:
        return [key for key in self.terms if key in other.terms]

    def difference_keys(self, other: "KeywordSet") -> list[str]:
        return [key for key in self.terms if key not in other.terms]


@dataclass(frozen=True, slots=True)
class CompiledDictionary:
    phrases: dict[str, tuple[tuple[tuple[str, ...], str], ...]]
    displays: dict[str, str]
    terms: dict[str, ReferenceTerm]
    aliases: dict[str, str]


def _tokens(text: str) -> list[str]:
    return [match.group(0) for match in _TOKEN_RE.finditer(text or "")]


def stem_token(token: str, config: KeywordConfig | None = None) -> str:
    cfg = config or get_scoring_config().keywords
    for suffix in cfg.suffixes:
        if suffix == "s" and token.endswith("ss"):
            continue
        if token.endswith(suffix) and len(token) - len(suffix) >= cfg.min_stem_length:
            return token[: -len(suffix)]
    return token


def term_key(display: str, config: KeywordConfig | None = None) -> str:
    """Matching key for a dictionary term or skill: stemmed single word, or joined phrase tokens."""
    tokens = [token.lower() for token in _tokens(display)]
    if not tokens:
        return ""
    if len(tokens) == 1:
        return stem_token(tokens[0], config)
    return " ".join(tokens)


def compile_dictionary(
    dictionary: ReferenceDictionary | None,
    config: KeywordConfig | None = None,
) -> CompiledDictionary:
    cfg = config or get_scoring_config().keywords
    source = dictionary or EMPTY_DICTIONARY

    phrases: dict[str, list[tuple[tuple[str, ...], str]]] = {}
    displays: dict[str, str] = {}
    terms: dict[str, ReferenceTerm] = {}
    for term in source.terms:
        key = term_key(term.display, cfg)
        if not key or key in terms:
            continue
        terms[key] = term
        displays[key] = term.display
        tokens = tuple(token.lower() for token in _tokens(term.display))
        if len(tokens) > 1:
            phrases.setdefault(tokens[0], []).append((tokens, key))

    aliases: dict[str, str] = {}
    for alias, canonical in source.aliases:
        key = term_key(canonical, cfg)
        if not key:
            continue
        aliases[alias] = key
        displays.setdefault(key, canonical)

    # Longest match first; ties keep dictionary order.
    ordered = {
        first: tuple(sorted(candidates, key=lambda item: -len(item[0])))
        for first, candidates in phrases.items()
    }
    return CompiledDictionary(phrases=ordered, displays=displays, terms=terms, aliases=aliases)


def _extract(text: str, compiled: CompiledDictionary, cfg: KeywordConfig, found: dict[str, str]) -> None:
    tokens = _tokens(text)
    lowered = [token.lower() for token in tokens]
    index = 0
    while index < len(tokens):
        current = lowered[index]

        matched_length = 0
        for phrase_tokens, key in compiled.phrases.get(current, ()):
            length = len(phrase_tokens)
            if tuple(lowered[index : index + length]) == phrase_tokens:
                found.setdefault(key, compiled.displays[key])
                matched_length = length
                break
        if matched_length:
            index += matched_length
            continue

        index += 1
        if current in compiled.aliases:
            key = compiled.aliases[current]
            found.setdefault(key, compiled.displays.get(key, tokens[index - 1]))
            continue
        if len(current) < cfg.min_token_length or current.isdigit() or current in cfg.stop_words:
            continue
        key = stem_token(current, cfg)
        if key in cfg.stop_words:
            continue
        found.setdefault(key, compiled.displays.get(key, tokens[index - 1]))


def extract_keywords(
    text: str | Iterable[str],
    dictionary: ReferenceDictionary | CompiledDictionary | None = None,
    *,
    config: KeywordConfig | None = None,
) -> KeywordSet:
    """Extract normalized keywords from text (or from several independent chunks).

    Chunks are tokenized separately so dictionary phrases never span two of them.
    """
    cfg = config or get_scoring_config().keywords
    compiled = dictionary if isinstance(dictionary, CompiledDictionary) else compile_dictionary(dictionary, cfg)
    chunks = [text] if isinstance(text, str) else list(text)
    found: dict[str, str] = {}
    for chunk in chunks:
        if chunk:
            _extract(chunk, compiled, cfg, found)
    return KeywordSet(found)


def profile_text_chunks(profile: ResumeProfile) -> list[str]:
    """Resume text that counts toward keyword matching; contact details are excluded."""
    chunks: list[str] = [profile.personal.job_title, profile.summary]
    for entry in profile.experience:
        chunks.append(entry.title)
        chunks.append(entry.description)
        chunks.extend(entry.achievements)
    for entry in profile.education:
        chunks.append(entry.degree)
    chunks.extend(skill.display for skill in profile.skills.all_skills())
    for project in profile.projects:
        chunks.append(project.title)
        chunks.append(project.description)
        chunks.extend(skill.display for skill in project.technologies)
    chunks.extend(certification.name for certification in profile.certifications)
    chunks.extend(profile.awards)
    chunks.extend(profile.publications)
    chunks.extend(profile.volunteering)
    return [chunk for chunk in chunks if chunk]


def extract_profile_keywords(
    profile: ResumeProfile,
    dictionary: ReferenceDictionary | CompiledDictionary | None = None,
    *,
    config: KeywordConfig | None = None,
) -> KeywordSet:
    return extract_keywords(profile_text_chunks(profile), dictionary, config=config)
