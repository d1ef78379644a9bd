"""Shared pytest fixtures for the struktos-codegen test suite.

Provides reusable fixtures for:
- Temporary project directories with or without a metadata document
- Default and customised metadata
- Renderers and generators bound to those
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from struktos_codegen.config import EngineConfig, Metadata, get_default_metadata, merge_metadata
from struktos_codegen.scaffolder import CodeGenerator, TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project directory (auto-cleanup)."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_metadata(project_root: Path) -> Callable[[Any], Path]:
    """Write ``config/struktos.metadata.json`` under ``project_root``.

    Strings are written verbatim so tests can store malformed documents.
    """

    def _write(document: Any) -> Path:
        path = project_root / "config" / "struktos.metadata.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        text = document if isinstance(document, str) else json.dumps(document, indent=2)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


@pytest.fixture
def default_metadata() -> Metadata:
    return get_default_metadata()


@pytest.fixture
def custom_metadata() -> Metadata:
    """Metadata with relocated adapters and a project-local logger."""
    return merge_metadata(
        get_default_metadata(),
        {
            "framework": "grpc",
            "coreImports": {"ILogger": "src/shared/logger"},
            "paths": {
                "infrastructure": {
                    "adapters": {"grpc": "src/grpc"},
                    "middleware": "src/interceptors",
                },
            },
        },
    )


# ---------------------------------------------------------------------------
# Renderers & generators
# ---------------------------------------------------------------------------


@pytest.fixture
def renderer(default_metadata: Metadata) -> TemplateRenderer:
    """Renderer over the bundled templates with default metadata."""
    return TemplateRenderer(metadata=default_metadata)


@pytest.fixture
def generator(project_root: Path, default_metadata: Metadata) -> CodeGenerator:
    return CodeGenerator(EngineConfig(project_root=project_root), metadata=default_metadata)


@pytest.fixture
def custom_generator(project_root: Path, custom_metadata: Metadata) -> CodeGenerator:
    return CodeGenerator(EngineConfig(project_root=project_root), metadata=custom_metadata)
