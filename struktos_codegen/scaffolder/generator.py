"""Main generation facade.

``CodeGenerator`` builds one :class:`TemplateRenderer` for a project and hands
it to every artifact generator, so all of them see the same metadata and share
one template cache.  Input validation happens here; the generators below
assume valid names.
"""

from __future__ import annotations

import logging
from typing import Literal

from struktos_codegen.config import EngineConfig, Metadata
from struktos_codegen.parser import (
    FieldDefinition,
    parse_fields,
    parse_methods,
    validate_entity_name,
    validate_service_name,
)

from .artifacts import GeneratedArtifact
from .client_gen import ClientGenerator
from .entity_gen import EntityGenerator
from .middleware_gen import MiddlewareGenerator
from .service_gen import ServiceGenerator
from .templates import TemplateRenderer
from .use_case_gen import UseCaseGenerator

logger = logging.getLogger(__name__)

MiddlewareKind = Literal["default", "logging", "timing"]


def _coerce_fields(fields: str | list[FieldDefinition] | None) -> list[FieldDefinition]:
    if fields is None:
        return []
    if isinstance(fields, str):
        return parse_fields(fields)
    return list(fields)


def _coerce_methods(methods: str | list[str] | None) -> list[str]:
    if isinstance(methods, list):
        return parse_methods(",".join(methods))
    return parse_methods(methods)


class CodeGenerator:
    """Generates Struktos source artifacts for one project.

    Every method returns the rendered artifacts without writing anything;
    pass them to :func:`~struktos_codegen.scaffolder.artifacts.write_artifact`
    to put them on disk.
    """

    def __init__(self, config: EngineConfig | None = None, metadata: Metadata | None = None) -> None:
        self.config = config or EngineConfig()
        if metadata is None:
            metadata = self.config.load_metadata()
        self.renderer = TemplateRenderer(self.config.templates_dir, metadata=metadata)
        self.entity_gen = EntityGenerator(self.renderer)
        self.use_case_gen = UseCaseGenerator(self.renderer)
        self.middleware_gen = MiddlewareGenerator(self.renderer)
        self.client_gen = ClientGenerator(self.renderer)
        self.service_gen = ServiceGenerator(self.renderer)

    @property
    def metadata(self) -> Metadata:
        return self.renderer.metadata

    # -- Public API --------------------------------------------------------

    def entity(
        self,
        name: str,
        fields: str | list[FieldDefinition] | None = None,
    ) -> list[GeneratedArtifact]:
        """Entity, repository port and in-memory repository for *name*."""
        validate_entity_name(name)
        parsed = _coerce_fields(fields)
        logger.debug("Generating entity %s with %d field(s)", name, len(parsed))
        return self.entity_gen.generate_all(name, parsed)

    def use_case(
        self,
        action: str,
        entity: str,
        *,
        with_repository: bool = True,
        with_logger: bool = True,
        with_validation: bool = True,
        fields: str | list[FieldDefinition] | None = None,
    ) -> list[GeneratedArtifact]:
        validate_entity_name(action, kind="Action")
        validate_entity_name(entity)
        return [
            self.use_case_gen.generate_use_case(
                action,
                entity,
                with_repository=with_repository,
                with_logger=with_logger,
                with_validation=with_validation,
                fields=_coerce_fields(fields),
            )
        ]

    def middleware(
        self,
        name: str,
        *,
        kind: MiddlewareKind = "default",
        with_logger: bool = False,
    ) -> list[GeneratedArtifact]:
        """A custom interceptor, or the stock logging/timing one for *kind*."""
        if kind == "logging":
            return [self.middleware_gen.generate_logging_middleware()]
        if kind == "timing":
            return [self.middleware_gen.generate_timing_middleware()]
        validate_service_name(name, kind="Middleware")
        return [self.middleware_gen.generate_middleware(name, with_logger=with_logger)]

    def client(self, service: str, *, with_port: bool = False) -> list[GeneratedArtifact]:
        """Client adapter, preceded by its port when *with_port* is set."""
        validate_service_name(service)
        artifacts: list[GeneratedArtifact] = []
        if with_port:
            artifacts.append(self.client_gen.generate_port_interface(service))
        artifacts.append(self.client_gen.generate_client_adapter(service, with_port=with_port))
        return artifacts

    def grpc_service(self, name: str, methods: str | list[str] | None = None) -> list[GeneratedArtifact]:
        validate_service_name(name)
        return self.service_gen.generate_grpc_service(name, _coerce_methods(methods))

    def http_service(self, name: str, methods: str | list[str] | None = None) -> list[GeneratedArtifact]:
        validate_service_name(name)
        return [self.service_gen.generate_http_controller(name, _coerce_methods(methods))]
