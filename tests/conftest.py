from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
import yaml
from fastapi.testclient import TestClient

# Ensure the application package is importable when running tests from the repo root.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
APP_ROOT = PROJECT_ROOT / "catalog-api"
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))

from catalog.config import Settings  # noqa: E402  (import after sys.path mutation)
from catalog.content.store import ContentStore  # noqa: E402
from catalog.main import create_app  # noqa: E402


def _model(code: str, name: str, transformation: str, category: str, **extra: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": code.lower(),
        "code": code,
        "name": name,
        "category": category,
        "transformations": [transformation],
    }
    payload.update(extra)
    return payload


@pytest.fixture()
def catalog_data() -> Dict[str, Any]:
    return {
        "version": "test-1",
        "transformations": {"P": "Perspective", "IN": "Inversion", "CO": "Composition", "SY": "Systems"},
        "models": [
            _model(
                "P1",
                "First Principles Thinking",
                "P",
                "Perspective",
                description="Break problems down to their fundamental truths and build up again.",
                tags=["problem-solving", "innovation"],
                meta={"difficulty": 3, "isCore": True},
            ),
            _model(
                "P2",
                "Contrarian Thinking",
                "P",
                "Perspective",
                description="Challenge conventional wisdom by considering the opposite of popular beliefs.",
                tags=["innovation", "critical-thinking"],
                meta={"difficulty": 2},
            ),
            _model(
                "IN1",
                "Inversion",
                "IN",
                "Inversion",
                description="Think backwards from the desired outcome to identify obstacles.",
                tags=["problem-solving", "planning"],
                meta={"difficulty": 2},
            ),
            _model(
                "IN2",
                "Premortem Analysis",
                "IN",
                "Inversion",
                description="Imagine a project has failed and work backwards to identify why.",
                tags=["risk", "planning"],
                meta={"difficulty": 2},
            ),
            _model("CO1", "Composition", "CO", "Composition", description="Combine parts into a whole."),
            _model(
                "SY1",
                "Feedback Loops",
                "SY",
                "Systems",
                description="Outputs of a system circle back to influence its inputs.",
                tags=["systems", "feedback"],
                meta={"difficulty": 4},
            ),
        ],
        "narratives": [
            {
                "narrative_id": "NAR-001",
                "title": "Decision Making Under Uncertainty",
                "summary": "Frameworks for making decisions when outcomes are uncertain.",
                "category": "Decision Science",
                "evidence_quality": "A",
                "confidence": 0.85,
                "tags": ["decision-making", "uncertainty", "probability", "risk"],
                "domain": ["Business", "Psychology", "Economics"],
            },
            {
                "narrative_id": "NAR-002",
                "title": "Cognitive Biases in Judgment",
                "summary": "Systematic errors in thinking and how to reduce their effect on decision quality.",
                "category": "Psychology",
                "evidence_quality": "A",
                "confidence": 0.92,
                "tags": ["biases", "psychology", "decision-making", "awareness"],
                "domain": ["Psychology", "Behavioral Economics"],
            },
            {
                "narrative_id": "NAR-003",
                "title": "Risk Assessment Frameworks",
                "summary": "Structured approaches to identifying and prioritizing risks.",
                "category": "Risk Management",
                "evidence_quality": "B",
                "confidence": 0.78,
                "tags": ["risk", "assessment", "frameworks", "planning"],
                "domain": ["Business", "Engineering", "Finance"],
            },
        ],
    }


@pytest.fixture()
def catalog_path(tmp_path: Path, catalog_data: Dict[str, Any]) -> Path:
    path = tmp_path / "catalog.yml"
    path.write_text(yaml.safe_dump(catalog_data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture()
def store(catalog_path: Path) -> ContentStore:
    return ContentStore.from_path(catalog_path)


@pytest.fixture()
def settings(catalog_path: Path) -> Settings:
    return Settings(catalog_path=catalog_path, log_level="WARNING")


@pytest.fixture
def client(settings: Settings, store: ContentStore) -> Generator[TestClient, None, None]:
    """Provide a FastAPI test client wired to the test catalog."""

    application = create_app(settings=settings, store=store)
    with TestClient(application) as test_client:
        yield test_client
