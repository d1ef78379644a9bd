"""gRPC service and HTTP controller generation.

A gRPC service is a triad of files that must agree on names:

- ``protos/<kebab>.proto`` -- the contract (package ``<snake>``, service
  ``<Pascal>Service``)
- ``.../adapters/grpc/<kebab>.service.grpc.ts`` -- handlers plus
  ``register<Pascal>Service``
- ``.../adapters/grpc/<kebab>.registration.ts`` -- wires the proto path to the
  handlers and shows how ``main.ts`` uses it
"""

from __future__ import annotations

from struktos_codegen.parser import SERVICE_METHODS
from struktos_codegen.paths import ImportTarget

from .artifacts import GeneratedArtifact
from .base import BaseGenerator, derive_names

MAIN_MODULE = "src/main.ts"


class ServiceGenerator(BaseGenerator):
    """Generates gRPC services and HTTP controllers."""

    # -- Paths -------------------------------------------------------------

    def proto_path(self, service: str) -> str:
        return self.logical_path("protos", derive_names(service)["kebab"])

    def handler_path(self, service: str) -> str:
        return self.logical_path("infrastructure.adapters.grpc", f"{derive_names(service)['kebab']}.service.grpc")

    def registration_path(self, service: str) -> str:
        return self.logical_path("infrastructure.adapters.grpc", f"{derive_names(service)['kebab']}.registration")

    def controller_path(self, service: str) -> str:
        return self.logical_path("infrastructure.adapters.http", f"{derive_names(service)['kebab']}.controller")

    # -- gRPC --------------------------------------------------------------

    def generate_proto(self, service: str, methods: list[str] | None = None) -> GeneratedArtifact:
        """Render the proto3 contract; only the listed RPCs and their messages appear."""
        context = {"service": derive_names(service), "methods": _methods(methods)}
        return self.render("grpc/proto", self.proto_path(service), context, suffix=".proto")

    def generate_grpc_handler(self, service: str, methods: list[str] | None = None) -> GeneratedArtifact:
        path = self.handler_path(service)
        context = {
            "service": derive_names(service),
            "methods": _methods(methods),
            "proto_file": f"{self.proto_path(service)}.proto",
            "import_lines": self.core_import_lines(path, ["RequestContext", "GrpcContextData"]),
        }
        return self.render("grpc/handler", path, context)

    def generate_registration(self, service: str) -> GeneratedArtifact:
        names = derive_names(service)
        path = self.registration_path(service)
        handler = ImportTarget.internal(self.handler_path(service))
        context = {
            "service": names,
            "proto_file": f"{self.proto_path(service)}.proto",
            "main_path": MAIN_MODULE,
            "registration_target": ImportTarget.internal(path),
            "import_lines": self.import_lines(path, [(f"register{names['pascal']}Service", handler)]),
        }
        return self.render("grpc/registration", path, context)

    def generate_grpc_service(self, service: str, methods: list[str] | None = None) -> list[GeneratedArtifact]:
        """Proto, handler and registration, in that order."""
        return [
            self.generate_proto(service, methods),
            self.generate_grpc_handler(service, methods),
            self.generate_registration(service),
        ]

    # -- HTTP --------------------------------------------------------------

    def generate_http_controller(self, service: str, methods: list[str] | None = None) -> GeneratedArtifact:
        names = derive_names(service)
        path = self.controller_path(service)
        context = {
            "service": names,
            "methods": _methods(methods),
            "base_route": f"/{names['plural_kebab']}",
            "import_lines": self.core_import_lines(path, ["RequestContext"]),
        }
        return self.render("http/controller", path, context)


def _methods(methods: list[str] | None) -> list[str]:
    if not methods:
        return list(SERVICE_METHODS)
    unknown = [m for m in methods if m not in SERVICE_METHODS]
    if unknown:
        raise ValueError(
            f'Invalid method "{unknown[0]}". Valid methods: {", ".join(SERVICE_METHODS)}'
        )
    return list(methods)
