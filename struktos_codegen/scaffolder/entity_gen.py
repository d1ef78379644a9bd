"""Domain entity and repository generation.

Generates, for one entity name:

- ``src/domain/entities/<Pascal>.entity.ts`` -- the entity class
- ``src/domain/repositories/I<Pascal>Repository.ts`` -- the repository port
- ``src/infrastructure/adapters/persistence/<Pascal>.repository.ts`` -- an
  in-memory adapter implementing the port

Directories come from the project metadata; the ones above are the defaults.
"""

from __future__ import annotations

from typing import Any

from struktos_codegen.parser import FieldDefinition, ensure_id_field, find_id_field

from .artifacts import GeneratedArtifact
from .base import BaseGenerator, derive_names
from .templates import TemplateRenderer

FIELDS_PARTIAL = "entity_fields"


def _find_field(
    fields: list[FieldDefinition], keywords: tuple[str, ...], field_type: str
) -> FieldDefinition | None:
    for field in fields:
        lowered = field.name.lower()
        if field.type == field_type and any(word in lowered for word in keywords):
            return field
    return None


class EntityGenerator(BaseGenerator):
    """Generates an entity class together with its repository port and adapter."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        super().__init__(renderer)
        self._partial_registered = False

    def _register_partial(self) -> None:
        # Registered on first use: template overrides may omit entity templates.
        if not self._partial_registered:
            self.renderer.register_partial(FIELDS_PARTIAL, "entity/fields")
            self._partial_registered = True

    # -- Paths -------------------------------------------------------------

    def entity_path(self, name: str) -> str:
        return self.logical_path("domain.entities", f"{derive_names(name)['pascal']}.entity")

    def repository_interface_path(self, name: str) -> str:
        return self.logical_path("domain.repositories", f"I{derive_names(name)['pascal']}Repository")

    def repository_path(self, name: str) -> str:
        return self.logical_path(
            "infrastructure.adapters.persistence", f"{derive_names(name)['pascal']}.repository"
        )

    # -- Generation --------------------------------------------------------

    def generate_entity(self, name: str, fields: list[FieldDefinition]) -> GeneratedArtifact:
        """Render the entity class; an ``id:string`` field is prepended if missing."""
        self._register_partial()
        all_fields = ensure_id_field(fields)
        context = {
            **self._base_context(name, all_fields),
            "fields": all_fields,
            "email_field": _find_field(all_fields, ("email",), "string"),
            "price_field": _find_field(all_fields, ("price", "amount"), "number"),
        }
        return self.render("entity/default", self.entity_path(name), context)

    def generate_repository_interface(
        self, name: str, fields: list[FieldDefinition] | None = None
    ) -> GeneratedArtifact:
        path = self.repository_interface_path(name)
        pascal = derive_names(name)["pascal"]
        context = {
            **self._base_context(name, fields or []),
            "import_lines": self.import_lines(
                path, [(pascal, self.local_target("domain.entities", f"{pascal}.entity"))]
            ),
        }
        return self.render("entity/repository-interface", path, context)

    def generate_repository_implementation(
        self, name: str, fields: list[FieldDefinition] | None = None
    ) -> GeneratedArtifact:
        path = self.repository_path(name)
        pascal = derive_names(name)["pascal"]
        context = {
            **self._base_context(name, fields or []),
            "import_lines": self.import_lines(
                path,
                [
                    (pascal, self.local_target("domain.entities", f"{pascal}.entity")),
                    (
                        f"I{pascal}Repository",
                        self.local_target("domain.repositories", f"I{pascal}Repository"),
                    ),
                ],
            ),
        }
        return self.render("entity/repository", path, context)

    def generate_all(self, name: str, fields: list[FieldDefinition]) -> list[GeneratedArtifact]:
        """Entity, repository port and repository adapter, in that order."""
        return [
            self.generate_entity(name, fields),
            self.generate_repository_interface(name, fields),
            self.generate_repository_implementation(name, fields),
        ]

    # -- Helpers -----------------------------------------------------------

    @staticmethod
    def _base_context(name: str, fields: list[FieldDefinition]) -> dict[str, Any]:
        names = derive_names(name)
        return {
            "names": names,
            "class_name": names["pascal"],
            "entity_var": names["camel"],
            "plural_name": names["plural_camel"],
            "store_var": names["plural_camel"],
            "id_field": find_id_field(fields),
        }
