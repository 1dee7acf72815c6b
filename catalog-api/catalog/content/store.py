"""Read-only access to the catalog document."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml
from pydantic import ValidationError

from ..errors import CatalogError, ErrorType
from ..search import FieldSearchResult, FuzzySearchOptions, SearchResult, field_search, fuzzy_search
from ..search.fuzzy import DEFAULT_LIMIT, DEFAULT_THRESHOLD
from .models import CatalogDocument, MentalModel, Narrative

logger = logging.getLogger(__name__)

MODEL_SEARCH_KEYS = ("name", "code", "description", "category", "tags")
NARRATIVE_SEARCH_KEYS = ("title", "summary", "category", "tags", "domain")
MODEL_FIELD_KEYS = ("name", "description", "category", "tags")
NARRATIVE_FIELD_KEYS = ("title", "summary", "category", "tags")


class ContentStore:
    """Serve mental models and narratives from a validated catalog."""

    def __init__(
        self,
        document: CatalogDocument,
        *,
        threshold: float = DEFAULT_THRESHOLD,
        limit: int = DEFAULT_LIMIT,
        source: Optional[Path] = None,
    ) -> None:
        self._document = document
        self._threshold = threshold
        self._limit = limit
        self.source = source
        self._models_by_code = _index_unique(
            ((model.code.lower(), model) for model in document.models), "model code"
        )
        self._narratives_by_id = _index_unique(
            ((narrative.narrative_id, narrative) for narrative in document.narratives), "narrative_id"
        )
        self._model_records = [model.model_dump() for model in document.models]
        self._narrative_records = [narrative.model_dump() for narrative in document.narratives]

    @classmethod
    def from_path(
        cls,
        path: Path,
        *,
        threshold: float = DEFAULT_THRESHOLD,
        limit: int = DEFAULT_LIMIT,
    ) -> "ContentStore":
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as exc:
            logger.warning("Catalog file missing: %s", path)
            raise CatalogError(ErrorType.CATALOG_NOT_FOUND, f"Catalog not found: {path}") from exc
        except yaml.YAMLError as exc:
            logger.warning("Catalog file %s is not valid YAML/JSON: %s", path, exc)
            raise CatalogError(ErrorType.CATALOG_INVALID, f"Catalog could not be parsed: {path}") from exc

        if not isinstance(data, dict):
            raise CatalogError(ErrorType.CATALOG_INVALID, f"Catalog root must be a mapping: {path}")
        try:
            document = CatalogDocument.model_validate(data)
        except ValidationError as exc:
            logger.warning("Catalog file %s failed validation: %s", path, exc)
            raise CatalogError(ErrorType.CATALOG_INVALID, f"Catalog failed validation: {exc}") from exc

        store = cls(document, threshold=threshold, limit=limit, source=path)
        logger.info(
            "Loaded catalog %s (version %s): %d models, %d narratives",
            path,
            document.version,
            len(document.models),
            len(document.narratives),
        )
        return store

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def version(self) -> str:
        return self._document.version

    @property
    def transformation_labels(self) -> Dict[str, str]:
        return dict(self._document.transformations)

    def models(self) -> List[MentalModel]:
        return list(self._document.models)

    def narratives(self) -> List[Narrative]:
        return list(self._document.narratives)

    def get_model(self, code: str) -> MentalModel:
        model = self._models_by_code.get(code.strip().lower())
        if model is None:
            raise CatalogError(ErrorType.ITEM_NOT_FOUND, f"Mental model not found: {code}")
        return model

    def get_narrative(self, narrative_id: str) -> Narrative:
        narrative = self._narratives_by_id.get(narrative_id.strip())
        if narrative is None:
            raise CatalogError(ErrorType.ITEM_NOT_FOUND, f"Narrative not found: {narrative_id}")
        return narrative

    def categories(self) -> List[str]:
        return sorted({model.category for model in self._document.models if model.category})

    def narrative_categories(self) -> List[str]:
        return sorted({n.category for n in self._document.narratives if n.category})

    def transformations(self) -> List[str]:
        return sorted({key for model in self._document.models for key in model.transformations})

    def domains(self) -> List[str]:
        return sorted({domain for n in self._document.narratives for domain in n.domain})

    def model_records(self) -> List[Dict[str, Any]]:
        return list(self._model_records)

    def narrative_records(self) -> List[Dict[str, Any]]:
        return list(self._narrative_records)

    def search_models(
        self,
        query: str,
        *,
        keys: Optional[Sequence[str]] = None,
        threshold: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> List[SearchResult]:
        return fuzzy_search(
            self._model_records, query, self.options(keys or MODEL_SEARCH_KEYS, threshold, limit)
        )

    def search_narratives(
        self,
        query: str,
        *,
        keys: Optional[Sequence[str]] = None,
        threshold: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> List[SearchResult]:
        return fuzzy_search(
            self._narrative_records, query, self.options(keys or NARRATIVE_SEARCH_KEYS, threshold, limit)
        )

    def field_search_models(
        self,
        query: str,
        *,
        fields: Optional[Sequence[str]] = None,
        threshold: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> List[FieldSearchResult]:
        options = self.options(fields or MODEL_FIELD_KEYS, threshold, limit)
        return field_search(self._model_records, query, options.keys, options.threshold, options.limit)

    def field_search_narratives(
        self,
        query: str,
        *,
        fields: Optional[Sequence[str]] = None,
        threshold: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> List[FieldSearchResult]:
        options = self.options(fields or NARRATIVE_FIELD_KEYS, threshold, limit)
        return field_search(self._narrative_records, query, options.keys, options.threshold, options.limit)

    def options(
        self,
        keys: Sequence[str],
        threshold: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> FuzzySearchOptions:
        return FuzzySearchOptions(
            keys=tuple(keys),
            threshold=self._threshold if threshold is None else threshold,
            limit=self._limit if limit is None else limit,
        )

    def narrative_for_record(self, record: Dict[str, Any]) -> Narrative:
        return self.get_narrative(record["narrative_id"])


def _index_unique(pairs, label: str) -> Dict[str, Any]:
    index: Dict[str, Any] = {}
    for key, value in pairs:
        if key in index:
            raise CatalogError(ErrorType.CATALOG_INVALID, f"Duplicate {label}: {key}")
        index[key] = value
    return index
