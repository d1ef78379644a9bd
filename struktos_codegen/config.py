"""Project metadata and engine configuration.

A Struktos project may ship ``config/struktos.metadata.json`` to tell the
generators where each architectural layer lives and where well-known core
symbols are imported from.  Everything in that document is optional: the
built-in defaults describe the standard hexagonal layout, and the document
only needs to list the leaves it wants to change::

    {
      "framework": "grpc",
      "paths": {"infrastructure": {"middleware": "src/interceptors"}}
    }

The document is deep-merged over the defaults.  A missing, unreadable,
malformed or schema-invalid document silently yields the defaults; the only
trace is a DEBUG log record.
"""

from __future__ import annotations

import asyncio
import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from struktos_codegen.paths import ImportTarget
from struktos_codegen.utils import load_json

logger = logging.getLogger(__name__)

METADATA_DIRNAME = "config"
METADATA_FILENAME = "struktos.metadata.json"

FrameworkType = Literal["express", "fastify", "nestjs", "grpc"]

# Alternative top-level spellings accepted in the metadata document.
_KEY_ALIASES: dict[str, str] = {
    "coreImportMap": "coreImports",
    "pathMap": "paths",
    "frameworkVariant": "framework",
}


class UnknownRoleError(KeyError):
    """Raised when a path role is not registered in the metadata."""


# ---------------------------------------------------------------------------
# Path map
# ---------------------------------------------------------------------------


class _PathNode(BaseModel):
    # Extra keys let a project register additional roles of its own.
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class DomainPaths(_PathNode):
    entities: str = "src/domain/entities"
    repositories: str = "src/domain/repositories"
    services: str = "src/domain/services"


class PortPaths(_PathNode):
    grpc: str = "src/application/ports/grpc"
    http: str = "src/application/ports/http"


class ApplicationPaths(_PathNode):
    use_cases: str = Field(default="src/application/use-cases", alias="useCases")
    ports: PortPaths = Field(default_factory=PortPaths)


class AdapterPaths(_PathNode):
    grpc: str = "src/infrastructure/adapters/grpc"
    http: str = "src/infrastructure/adapters/http"
    persistence: str = "src/infrastructure/adapters/persistence"


class InfrastructurePaths(_PathNode):
    adapters: AdapterPaths = Field(default_factory=AdapterPaths)
    middleware: str = "src/infrastructure/middleware"


class PathMap(_PathNode):
    """Directory of every logical role, e.g. ``domain.entities``."""

    domain: DomainPaths = Field(default_factory=DomainPaths)
    application: ApplicationPaths = Field(default_factory=ApplicationPaths)
    infrastructure: InfrastructurePaths = Field(default_factory=InfrastructurePaths)
    protos: str = "protos"


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


def _default_core_imports() -> dict[str, str]:
    return {
        "RequestContext": "@struktos/core",
        "IInterceptor": "@struktos/core",
        "ILogger": "@struktos/core",
        "NextFn": "@struktos/core",
        "IGrpcClientFactory": "@struktos/core",
        "GrpcContextData": "@struktos/adapter-grpc",
    }


class ProjectOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    use_auth: Optional[bool] = Field(default=None, alias="useAuth")
    persistence: Optional[str] = None


class Metadata(BaseModel):
    """Merged project metadata consumed by the generators and templates."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: str = Field(default="1.0.0")
    framework: FrameworkType = Field(
        default="express",
        validation_alias=AliasChoices("framework", "frameworkVariant"),
    )
    core_imports: dict[str, str] = Field(
        default_factory=_default_core_imports,
        alias="coreImports",
        validation_alias=AliasChoices("coreImports", "coreImportMap", "core_imports"),
        description="Symbol name -> module or package it is imported from",
    )
    paths: PathMap = Field(
        default_factory=PathMap,
        validation_alias=AliasChoices("paths", "pathMap"),
    )
    options: ProjectOptions = Field(default_factory=ProjectOptions)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def flat_paths(self) -> dict[str, str]:
        """The path tree as ``{"domain.entities": "src/domain/entities", ...}``."""
        return _flatten(self.paths.model_dump(by_alias=True))

    def path_for(self, role: str) -> str:
        """Directory registered for a dotted *role* such as ``application.useCases``.

        Raises:
            UnknownRoleError: If no such role exists.
        """
        flat = self.flat_paths()
        try:
            return flat[role]
        except KeyError:
            raise UnknownRoleError(
                f'Unknown path role "{role}". Known roles: {", ".join(sorted(flat))}'
            ) from None

    def import_target(self, symbol: str) -> ImportTarget:
        """Where *symbol* is imported from, classified once here."""
        try:
            origin = self.core_imports[symbol]
        except KeyError:
            raise KeyError(f'No import origin registered for "{symbol}"') from None
        return ImportTarget.classify(origin)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def to_document(self) -> dict[str, Any]:
        """Plain dict using the on-disk camelCase keys."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return json.dumps(self.to_document(), indent=2)

    def save(self, path: Path) -> Path:
        """Write the metadata document to *path*, creating parent directories."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.to_json() + "\n", encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Metadata":
        """Strict counterpart of :func:`get_metadata_sync`: errors propagate."""
        return merge_metadata(DEFAULT_METADATA, load_json(path))


DEFAULT_METADATA = Metadata()


# ---------------------------------------------------------------------------
# Merging
# ---------------------------------------------------------------------------


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *override* into a copy of *base*.

    Where both sides hold a dict the merge recurses; any other override value
    replaces the base value outright.  Neither argument is modified.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _canonical_keys(document: dict[str, Any]) -> dict[str, Any]:
    result = dict(document)
    for alias, canonical in _KEY_ALIASES.items():
        if alias in result:
            value = result.pop(alias)
            result.setdefault(canonical, value)
    return result


def _flatten(tree: dict[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in tree.items():
        dotted = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(_flatten(value, dotted))
        else:
            flat[dotted] = value
    return flat


def merge_metadata(defaults: Metadata, overrides: dict[str, Any]) -> Metadata:
    """Merge a raw metadata document over *defaults* and validate the result.

    Raises:
        pydantic.ValidationError: If the merged document is invalid.
    """
    merged = deep_merge(defaults.to_document(), _canonical_keys(overrides))
    return Metadata.model_validate(merged)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def get_metadata_path(project_root: str | Path | None = None) -> Path:
    """``<project_root>/config/struktos.metadata.json`` (root defaults to cwd)."""
    root = Path(project_root) if project_root is not None else Path.cwd()
    return root / METADATA_DIRNAME / METADATA_FILENAME


def get_default_metadata() -> Metadata:
    """A fresh copy of the built-in defaults."""
    return DEFAULT_METADATA.model_copy(deep=True)


def get_metadata_sync(project_root: str | Path | None = None) -> Metadata:
    """Load the project's metadata, falling back to the defaults on any problem."""
    path = get_metadata_path(project_root)
    if not path.is_file():
        return get_default_metadata()

    try:
        document = load_json(path)
    except (OSError, ValueError) as exc:
        logger.debug("Ignoring unreadable metadata file %s: %s", path, exc)
        return get_default_metadata()

    try:
        return merge_metadata(DEFAULT_METADATA, document)
    except ValidationError as exc:
        logger.debug("Ignoring invalid metadata file %s: %s", path, exc)
        return get_default_metadata()


async def get_metadata(project_root: str | Path | None = None) -> Metadata:
    """Async variant of :func:`get_metadata_sync`; the read runs in a worker thread."""
    return await asyncio.to_thread(get_metadata_sync, project_root)


def metadata_document(
    framework: str,
    use_auth: bool | None = None,
    persistence: str | None = None,
) -> str:
    """JSON text of the metadata file a new project of *framework* ships with.

    Raises:
        pydantic.ValidationError: If *framework* is not supported.
    """
    metadata = get_default_metadata().model_copy(
        update={
            "framework": Metadata.model_validate({"framework": framework}).framework,
            "options": ProjectOptions(use_auth=use_auth, persistence=persistence),
        }
    )
    return metadata.to_json()


# ---------------------------------------------------------------------------
# Engine configuration
# ---------------------------------------------------------------------------


class EngineConfig(BaseModel):
    """Settings for one generator run.

    Instances are typically created by the CLI entry point and handed to
    :class:`~struktos_codegen.scaffolder.generator.CodeGenerator`.
    """

    project_root: Path = Field(default_factory=Path.cwd)
    templates_dir: Optional[Path] = Field(
        default=None, description="Override for the bundled template directory"
    )
    overwrite: bool = Field(default=False, description="Replace files that already exist")
    dry_run: bool = Field(default=False, description="Render but do not write")

    @property
    def metadata_path(self) -> Path:
        return get_metadata_path(self.project_root)

    def load_metadata(self) -> Metadata:
        return get_metadata_sync(self.project_root)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build an ``EngineConfig`` from environment variables.

        Recognised variables (all optional):
            STRUKTOS_PROJECT_ROOT, STRUKTOS_TEMPLATES_DIR, STRUKTOS_OVERWRITE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("STRUKTOS_PROJECT_ROOT"):
            kwargs["project_root"] = Path(os.environ["STRUKTOS_PROJECT_ROOT"])
        if os.environ.get("STRUKTOS_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["STRUKTOS_TEMPLATES_DIR"])
        if os.environ.get("STRUKTOS_OVERWRITE"):
            kwargs["overwrite"] = os.environ["STRUKTOS_OVERWRITE"].lower() in ("1", "true", "yes")
        return cls(**kwargs)
