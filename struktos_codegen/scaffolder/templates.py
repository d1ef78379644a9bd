"""Jinja2 template rendering for code generation.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``struktos_codegen/scaffolder/templates/`` directory and renders them with
per-call data merged with the project metadata.  Templates are addressed by
logical name (``"entity/default"`` -> ``entity/default.j2``).

Output is source code, so nothing is ever HTML-escaped.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, Template, TemplateNotFound

from struktos_codegen.config import Metadata, get_metadata_sync
from struktos_codegen.naming import (
    pluralize,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
    to_upper_snake_case,
)
from struktos_codegen.paths import ImportTarget, resolve_import_path
from struktos_codegen.utils import write_text_file

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

TEMPLATE_SUFFIX = ".j2"


class TemplateNotFoundError(LookupError):
    """Raised when a template name has no template file behind it."""


# ---------------------------------------------------------------------------
# Compiled-template cache
# ---------------------------------------------------------------------------


class TemplateCache:
    """Compiled templates keyed by ``(template_dir, template_name)``.

    Each renderer owns one; nothing is shared between instances.  Not
    thread-safe: concurrent renderers need separate caches.
    """

    def __init__(self) -> None:
        self._compiled: dict[tuple[str, str], Template] = {}

    def get(self, key: tuple[str, str]) -> Template | None:
        return self._compiled.get(key)

    def put(self, key: tuple[str, str], template: Template) -> None:
        self._compiled[key] = template

    def clear(self) -> None:
        self._compiled.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._compiled

    def __len__(self) -> int:
        return len(self._compiled)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for code generation.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Every render receives the caller's data plus the
    active metadata under the reserved keys ``metadata``, ``core_imports``
    and ``paths``.
    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        *,
        metadata: Metadata | None = None,
        project_root: str | Path | None = None,
    ) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.metadata = metadata if metadata is not None else get_metadata_sync(project_root)
        # Compiled templates are bound to self.env, so the cache is never shared.
        self.cache = TemplateCache()
        self._partials: dict[str, str] = {}
        self.env = Environment(
            loader=ChoiceLoader([
                DictLoader(self._partials),
                FileSystemLoader(str(self.template_dir)),
            ]),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            # The instance cache above is the only template cache.
            cache_size=0,
        )
        _register_helpers(self.env)

    # -- Single template rendering -----------------------------------------

    def render(self, template_name: str, data: dict[str, Any]) -> str:
        """Render a single template with the provided data.

        Args:
            template_name: Logical name relative to the template directory
                without the ``.j2`` suffix (e.g. ``"middleware/default"``).
            data: Variables available inside the template.

        Returns:
            The rendered text.

        Raises:
            TemplateNotFoundError: If the template, or a partial it
                includes, does not exist.
        """
        return self._render(self.get_template(template_name), data, f'"{template_name}"')

    def render_string(self, source: str, data: dict[str, Any]) -> str:
        """Render an inline template string with the same context and helpers."""
        return self._render(self.env.from_string(source), data, "an inline template")

    def _render(self, template: Template, data: dict[str, Any], origin: str) -> str:
        try:
            return template.render(self._context(data))
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(
                f'Template "{exc.name}" included from {origin} is not registered'
            ) from None

    def _context(self, data: dict[str, Any]) -> dict[str, Any]:
        return {
            **data,
            "metadata": self.metadata,
            "core_imports": self.metadata.core_imports,
            "paths": self.metadata.paths,
        }

    # -- Compilation -------------------------------------------------------

    def get_template(self, template_name: str) -> Template:
        """Return the compiled template, compiling it on first use."""
        key = (str(self.template_dir), template_name)
        template = self.cache.get(key)
        if template is not None:
            return template

        filename = f"{template_name}{TEMPLATE_SUFFIX}"
        try:
            template = self.env.get_template(filename)
        except TemplateNotFound:
            raise TemplateNotFoundError(
                f"Template not found: {self.template_dir / filename}"
            ) from None

        logger.debug("Compiled template %s", filename)
        self.cache.put(key, template)
        return template

    def clear_cache(self) -> None:
        self.cache.clear()

    # -- Partials ----------------------------------------------------------

    def register_partial(self, name: str, template_name: str) -> None:
        """Make *template_name* includable as ``{% include "name" %}``."""
        path = self.template_dir / f"{template_name}{TEMPLATE_SUFFIX}"
        if not path.is_file():
            raise TemplateNotFoundError(f"Template not found: {path}")
        self._partials[name] = path.read_text(encoding="utf-8")

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_name: str,
        output_path: str | Path,
        data: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.  Returns the output
        path.
        """
        content = self.render(template_name, data)
        out = Path(output_path)
        await asyncio.to_thread(write_text_file, out, content)
        return out

    # -- Utility -----------------------------------------------------------

    def template_exists(self, template_name: str) -> bool:
        return (self.template_dir / f"{template_name}{TEMPLATE_SUFFIX}").is_file()

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of logical template names under *prefix*."""
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()[: -len(TEMPLATE_SUFFIX)]
            for p in search_dir.rglob(f"*{TEMPLATE_SUFFIX}")
        )


# ---------------------------------------------------------------------------
# Jinja2 helpers
# ---------------------------------------------------------------------------


def _import_path(target: str | ImportTarget, current: str) -> str:
    """Import specifier for *target* from *current*, passing packages through."""
    if isinstance(target, ImportTarget):
        return target.resolve(current)
    return resolve_import_path(target, current)


def _eq(a: Any, b: Any) -> bool:
    return a == b


def _ne(a: Any, b: Any) -> bool:
    return a != b


def _all_of(*conditions: Any) -> bool:
    return all(conditions)


def _any_of(*conditions: Any) -> bool:
    return any(conditions)


def _includes(items: Any, item: Any) -> bool:
    if not isinstance(items, (list, tuple, set, frozenset)):
        return False
    return item in items


def _concat(*parts: Any) -> str:
    return "".join(str(part) for part in parts)


def _timestamp() -> str:
    """Today's UTC date, ``YYYY-MM-DD``."""
    return datetime.now(timezone.utc).date().isoformat()


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2, default=str)


_FILTERS = {
    "pascal_case": to_pascal_case,
    "camel_case": to_camel_case,
    "kebab_case": to_kebab_case,
    "snake_case": to_snake_case,
    "upper_snake_case": to_upper_snake_case,
    "pluralize": pluralize,
    "import_path": _import_path,
    "to_json": _to_json,
}

_GLOBALS = {
    **_FILTERS,
    "eq": _eq,
    "ne": _ne,
    "all_of": _all_of,
    "any_of": _any_of,
    "includes": _includes,
    "concat": _concat,
    "timestamp": _timestamp,
}


def _register_helpers(env: Environment) -> None:
    env.filters.update(_FILTERS)
    env.globals.update(_GLOBALS)
