"""Shared plumbing for the artifact generators."""

from __future__ import annotations

from typing import Any

from struktos_codegen.config import Metadata
from struktos_codegen.naming import (
    pluralize,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
    to_upper_snake_case,
)
from struktos_codegen.paths import ImportTarget, build_import_statements

from .artifacts import GeneratedArtifact
from .templates import TemplateRenderer


def derive_names(name: str) -> dict[str, str]:
    """Every casing the templates need for one user-supplied name."""
    pascal = to_pascal_case(name)
    return {
        "pascal": pascal,
        "camel": to_camel_case(name),
        "kebab": to_kebab_case(name),
        "snake": to_snake_case(name),
        "upper_snake": to_upper_snake_case(name),
        "plural_pascal": pluralize(pascal),
        "plural_camel": pluralize(to_camel_case(name)),
        "plural_kebab": pluralize(to_kebab_case(name)),
    }


class BaseGenerator:
    """Holds the renderer and turns metadata roles into paths and imports."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    @property
    def metadata(self) -> Metadata:
        return self.renderer.metadata

    # -- Paths -------------------------------------------------------------

    def logical_path(self, role: str, *parts: str) -> str:
        """``<directory of role>/<parts...>`` with forward slashes."""
        directory = self.metadata.path_for(role).replace("\\", "/").rstrip("/")
        return "/".join([directory, *parts])

    def local_target(self, role: str, *parts: str) -> ImportTarget:
        return ImportTarget.internal(self.logical_path(role, *parts))

    def core_target(self, symbol: str) -> ImportTarget:
        return self.metadata.import_target(symbol)

    # -- Imports -----------------------------------------------------------

    def import_lines(
        self,
        current: str,
        imports: list[tuple[str, ImportTarget]],
    ) -> list[str]:
        """Import statements for *current*, one per resolved module.

        Symbols resolving to the same specifier share a statement, in
        first-seen order.
        """
        grouped: dict[str, list[str]] = {}
        for symbol, target in imports:
            names = grouped.setdefault(target.resolve(current), [])
            if symbol not in names:
                names.append(symbol)
        return build_import_statements(grouped)

    def core_import_lines(self, current: str, symbols: list[str]) -> list[str]:
        return self.import_lines(current, [(s, self.core_target(s)) for s in symbols])

    # -- Rendering ---------------------------------------------------------

    def render(
        self,
        template_name: str,
        logical_path: str,
        context: dict[str, Any],
        suffix: str = ".ts",
    ) -> GeneratedArtifact:
        content = self.renderer.render(
            template_name, {**context, "file_path": f"{logical_path}{suffix}"}
        )
        return GeneratedArtifact(logical_path=logical_path, content=content, suffix=suffix)
