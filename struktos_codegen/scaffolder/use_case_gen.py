"""Application use-case generation.

A use case is named by an action and the entity it acts on: ``create`` +
``User`` gives ``CreateUserUseCase`` in
``src/application/use-cases/user/create-user.use-case.ts``.

The CRUD actions (``create``, ``get``, ``list``, ``update``, ``delete``) get a
working body against the entity's repository port.  Any other action gets a
stub that throws until it is filled in.
"""

from __future__ import annotations

from struktos_codegen.parser import FieldDefinition, ensure_id_field, find_id_field
from struktos_codegen.paths import ImportTarget

from .artifacts import GeneratedArtifact
from .base import BaseGenerator, derive_names

CRUD_ACTIONS = ("create", "get", "list", "update", "delete")

_PAGINATION_FIELDS = [
    FieldDefinition(name="limit", type="number", optional=True),
    FieldDefinition(name="offset", type="number", optional=True),
]

_ACTION_PHRASES = {
    "create": "creates a new {entity}",
    "get": "looks up a single {entity} by its identifier",
    "list": "lists {plural}",
    "update": "updates an existing {entity}",
    "delete": "deletes a {entity} by its identifier",
}


def _output_type(kind: str, entity: str) -> str:
    if kind in ("create", "update"):
        return entity
    if kind == "get":
        return f"{entity} | null"
    if kind == "list":
        return f"{entity}[]"
    if kind == "delete":
        return "boolean"
    return "void"


def _input_fields(kind: str, fields: list[FieldDefinition]) -> list[FieldDefinition]:
    id_field = find_id_field(fields)
    if kind == "create":
        return ensure_id_field(fields)
    if kind in ("get", "delete"):
        return [id_field]
    if kind == "update":
        rest = [f.model_copy(update={"optional": True}) for f in fields if not f.is_id]
        return [id_field, *rest]
    if kind == "list":
        return list(_PAGINATION_FIELDS)
    return []


class UseCaseGenerator(BaseGenerator):
    """Generates one use-case class per call."""

    def use_case_path(self, action: str, entity: str) -> str:
        action_kebab = derive_names(action)["kebab"]
        entity_kebab = derive_names(entity)["kebab"]
        return self.logical_path(
            "application.useCases", entity_kebab, f"{action_kebab}-{entity_kebab}.use-case"
        )

    def generate_use_case(
        self,
        action: str,
        entity: str,
        with_repository: bool = True,
        with_logger: bool = True,
        with_validation: bool = True,
        fields: list[FieldDefinition] | None = None,
    ) -> GeneratedArtifact:
        """Render ``<Action><Entity>UseCase``.

        Each ``with_*`` flag adds its constructor dependency, import and code
        block together; turning one off removes all three.

        Args:
            action: Verb such as ``create`` or ``archive``.
            entity: Entity the use case operates on.
            with_repository: Inject ``I<Entity>Repository`` and implement
                the CRUD body against it.
            with_logger: Inject ``ILogger`` and log each execution.
            with_validation: Add a ``validate`` method over the input.
            fields: Entity fields used to shape the input interface.

        Returns:
            The use-case artifact.
        """
        fields = fields or []
        action_names = derive_names(action)
        entity_names = derive_names(entity)
        kind = action_names["kebab"] if action_names["kebab"] in CRUD_ACTIONS else "custom"

        path = self.use_case_path(action, entity)
        class_name = f"{action_names['pascal']}{entity_names['pascal']}UseCase"
        repository_type = f"I{entity_names['pascal']}Repository"
        repository_var = f"{entity_names['camel']}Repository"

        imports: list[tuple[str, ImportTarget]] = [("RequestContext", self.core_target("RequestContext"))]
        dependencies: list[dict[str, str]] = []
        if with_logger:
            imports.append(("ILogger", self.core_target("ILogger")))
        if kind in ("create", "get", "list", "update"):
            imports.append((
                entity_names["pascal"],
                self.local_target("domain.entities", f"{entity_names['pascal']}.entity"),
            ))
        if with_repository:
            imports.append((repository_type, self.local_target("domain.repositories", repository_type)))
            dependencies.append({"name": repository_var, "type": repository_type})
        if with_logger:
            dependencies.append({"name": "logger", "type": "ILogger"})

        phrase = _ACTION_PHRASES.get(kind, f"handles the {action_names['kebab']} action for a {{entity}}")
        context = {
            "action": action_names["kebab"],
            "action_phrase": phrase.format(entity=entity_names["pascal"], plural=entity_names["plural_pascal"]),
            "kind": kind,
            "class_name": class_name,
            "input_name": f"{action_names['pascal']}{entity_names['pascal']}Input",
            "output_type": _output_type(kind, entity_names["pascal"]),
            "entity": entity_names,
            "id_field": find_id_field(fields),
            "input_fields": _input_fields(kind, fields),
            "repository_var": repository_var,
            "dependencies": dependencies,
            "with_repository": with_repository,
            "with_logger": with_logger,
            "with_validation": with_validation,
            "import_lines": self.import_lines(path, imports),
        }
        return self.render("use-case/default", path, context)
