from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .provider import EMPTY_DICTIONARY, ReferenceDictionary, ReferenceTerm

logger = logging.getLogger(__name__)


class LocalReferenceDictionary:
    """Industry keyword dictionaries backed by a JSON file shipped with the package."""

    def __init__(self, dictionary_path: str | Path | None = None) -> None:
        path = Path(dictionary_path) if dictionary_path else Path(__file__).with_name("reference_dictionaries.json")
        self._dictionaries, self._aliases = self._parse(self._load(path))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "LocalReferenceDictionary":
        instance = cls.__new__(cls)
        instance._dictionaries, instance._aliases = cls._parse(raw)
        return instance

    @staticmethod
    def _load(path: Path) -> dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as handle:
                raw = json.load(handle)
        except OSError as exc:
            raise RuntimeError(f"Failed to read reference dictionaries '{path}': {exc}") from exc
        except json.JSONDecodeError as exc:
            raise RuntimeError(f"Invalid JSON in reference dictionaries '{path}': {exc}") from exc
        if not isinstance(raw, dict):
            raise RuntimeError(f"Invalid reference dictionaries '{path}': expected a top-level object.")
        return raw

    @staticmethod
    def _parse(raw: Mapping[str, Any]) -> tuple[dict[str, ReferenceDictionary], tuple[tuple[str, str], ...]]:
        raw_aliases = raw.get("aliases") or {}
        aliases = tuple(
            (str(alias).strip().lower(), str(canonical).strip())
            for alias, canonical in raw_aliases.items()
            if str(alias).strip() and str(canonical).strip()
        )

        dictionaries: dict[str, ReferenceDictionary] = {}
        for industry_id, body in (raw.get("industries") or {}).items():
            industry = str(industry_id).strip().lower()
            if not industry or not isinstance(body, Mapping):
                continue
            terms: list[ReferenceTerm] = []
            seen: set[str] = set()
            for group, values in (body.get("groups") or {}).items():
                for value in values or []:
                    display = str(value).strip()
                    if not display or display.lower() in seen:
                        continue
                    seen.add(display.lower())
                    terms.append(ReferenceTerm(display=display, group=str(group), industry=industry))
            dictionaries[industry] = ReferenceDictionary(
                id=industry,
                label=str(body.get("label") or industry.title()),
                terms=tuple(terms),
                aliases=aliases,
            )
        logger.debug("reference_dictionaries_loaded industries=%s aliases=%s", len(dictionaries), len(aliases))
        return dictionaries, aliases

    def industries(self) -> tuple[ReferenceDictionary, ...]:
        return tuple(self._dictionaries.values())

    def get(self, industry: str) -> ReferenceDictionary | None:
        return self._dictionaries.get((industry or "").strip().lower())

    def merged(self) -> ReferenceDictionary:
        if not self._dictionaries:
            return ReferenceDictionary(id="", label="", aliases=self._aliases) if self._aliases else EMPTY_DICTIONARY
        terms: list[ReferenceTerm] = []
        seen: set[str] = set()
        for dictionary in self._dictionaries.values():
            for term in dictionary.terms:
                if term.display.lower() in seen:
                    continue
                seen.add(term.display.lower())
                terms.append(term)
        return ReferenceDictionary(id="all", label="All industries", terms=tuple(terms), aliases=self._aliases)
