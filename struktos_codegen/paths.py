"""Relative import resolution between generated files.

Generated TypeScript imports its collaborators with relative specifiers
(``../../domain/entities/User.entity``) or package specifiers
(``@struktos/core``).  Both sides are *logical paths*: slash-delimited,
project-relative and extension-free.  Resolution is purely lexical; nothing
here touches the filesystem.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Literal

from struktos_codegen.naming import to_kebab_case


_SOURCE_SUFFIX = ".ts"
_SOURCE_ROOT = "src/"


# ---------------------------------------------------------------------------
# Classification & normalisation
# ---------------------------------------------------------------------------


def is_package_import(specifier: str) -> bool:
    """Guess whether *specifier* names a package rather than a project file.

    * ``@scope/pkg`` -> package
    * ``./x``, ``../x``, ``/x`` -> project file
    * ``src/...`` or anything containing ``/src/`` -> project file
    * anything else -> package

    A bare ``lib/util`` is therefore treated as a package.  Prefer declaring
    targets through :class:`ImportTarget`, which does not guess.
    """
    if specifier.startswith("@"):
        return True
    if specifier.startswith((".", "/")):
        return False
    if specifier.startswith(_SOURCE_ROOT) or f"/{_SOURCE_ROOT}" in specifier:
        return False
    return True


def normalize_path(path: str) -> str:
    """Strip ``.ts``, convert ``\\`` to ``/`` and drop a leading ``./``."""
    normalized = path.replace("\\", "/")
    if normalized.endswith(_SOURCE_SUFFIX):
        normalized = normalized[: -len(_SOURCE_SUFFIX)]
    if normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def _segments(path: str) -> list[str]:
    return [part for part in path.split("/") if part and part != "."]


def _lexical_parts(path: str) -> list[str]:
    # normpath on a relative path keeps leading ".." and never touches the cwd.
    normalized = posixpath.normpath(path) if path else "."
    return [] if normalized == "." else normalized.split("/")


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def relative_specifier(target: str, current: str) -> str:
    """Relative specifier from the file *current* to the module *target*.

    Both arguments are treated as project-local, no classification happens.
    A leading ``/`` means the project root, so the result never depends on
    the process working directory.
    """
    target_parts = _lexical_parts(normalize_path(target).lstrip("/"))
    dir_parts = _lexical_parts(posixpath.dirname(normalize_path(current).lstrip("/")))

    common = 0
    for left, right in zip(dir_parts, target_parts):
        if left != right:
            break
        common += 1

    relative = "/".join([".."] * (len(dir_parts) - common) + target_parts[common:]) or "."
    if relative in (".", ".."):
        relative = f"{relative}/"
    elif not relative.startswith("."):
        relative = f"./{relative}"
    return relative


def resolve_import_path(target: str, current: str) -> str:
    """Resolve the import specifier for *target* as seen from *current*.

    Package specifiers are returned unchanged; project paths become a
    relative specifier starting with ``./`` or ``../``.

    Example::

        >>> resolve_import_path(
        ...     "src/domain/repositories/IUserRepository",
        ...     "src/application/use-cases/user/create-user.use-case.ts",
        ... )
        '../../../domain/repositories/IUserRepository'
    """
    if is_package_import(target):
        return target
    return relative_specifier(target, current)


def get_path_depth(path: str) -> int:
    """Number of segments in *path* (``src/domain/User`` -> 3)."""
    return len(_segments(normalize_path(path)))


def get_relative_prefix(from_path: str, to_path: str) -> str:
    """``./`` or one ``../`` per directory level *from_path* must climb.

    Only the "how many levels up" part is computed; the remainder of
    *to_path* is not appended.
    """
    from_parts = _segments(posixpath.dirname(normalize_path(from_path)))
    to_parts = _segments(posixpath.dirname(normalize_path(to_path)))

    common = 0
    for left, right in zip(from_parts, to_parts):
        if left != right:
            break
        common += 1

    levels_up = len(from_parts) - common
    if levels_up == 0:
        return "./"
    return "../" * levels_up


# ---------------------------------------------------------------------------
# Tagged import targets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ImportTarget:
    """Where an imported symbol comes from.

    ``kind`` is fixed when the target is declared, so resolution never has
    to guess from the shape of the string.
    """

    kind: Literal["internal", "external"]
    specifier: str

    @classmethod
    def internal(cls, logical_path: str) -> ImportTarget:
        return cls("internal", normalize_path(logical_path))

    @classmethod
    def external(cls, package: str) -> ImportTarget:
        return cls("external", package)

    @classmethod
    def classify(cls, origin: str) -> ImportTarget:
        """Build a target from a free-form origin string (config values)."""
        if is_package_import(origin):
            return cls.external(origin)
        return cls.internal(origin)

    @property
    def is_external(self) -> bool:
        return self.kind == "external"

    def resolve(self, current: str) -> str:
        """Specifier to print in an import statement inside *current*."""
        if self.is_external:
            return self.specifier
        return relative_specifier(self.specifier, current)


# ---------------------------------------------------------------------------
# Conventional artifact locations
# ---------------------------------------------------------------------------


def resolve_repository_import(
    entity_name: str,
    current: str,
    repositories_path: str = "src/domain/repositories",
) -> str:
    """Import specifier for ``I<Entity>Repository``."""
    return resolve_import_path(f"{repositories_path}/I{entity_name}Repository", current)


def resolve_entity_import(
    entity_name: str,
    current: str,
    entities_path: str = "src/domain/entities",
) -> str:
    """Import specifier for ``<Entity>.entity``."""
    return resolve_import_path(f"{entities_path}/{entity_name}.entity", current)


def resolve_use_case_import(
    use_case_name: str,
    entity_name: str,
    current: str,
    use_cases_path: str = "src/application/use-cases",
) -> str:
    """Import specifier for ``<entity>/<action>-<entity>.use-case``."""
    kebab_entity = to_kebab_case(entity_name)
    kebab_use_case = to_kebab_case(use_case_name)
    target = f"{use_cases_path}/{kebab_entity}/{kebab_use_case}-{kebab_entity}.use-case"
    return resolve_import_path(target, current)


# ---------------------------------------------------------------------------
# Import statements
# ---------------------------------------------------------------------------


def build_import_statement(imports: str | list[str], from_path: str) -> str:
    """``import { A, B } from 'path';``"""
    names = ", ".join(imports) if isinstance(imports, list) else imports
    return f"import {{ {names} }} from '{from_path}';"


def build_import_statements(import_map: dict[str, list[str]]) -> list[str]:
    """One statement per module; symbols from the same module are combined."""
    return [build_import_statement(names, path) for path, names in import_map.items()]
