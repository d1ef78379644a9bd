"""gRPC client adapter and port generation."""

from __future__ import annotations

from struktos_codegen.paths import ImportTarget

from .artifacts import GeneratedArtifact
from .base import BaseGenerator, derive_names


class ClientGenerator(BaseGenerator):
    """Generates an outbound gRPC client adapter and, optionally, its port."""

    def adapter_path(self, service: str) -> str:
        return self.logical_path("infrastructure.adapters.grpc", f"{derive_names(service)['kebab']}.client.adapter")

    def port_path(self, service: str) -> str:
        return self.logical_path("application.ports.grpc", f"{derive_names(service)['kebab']}.client.port")

    def generate_client_adapter(self, service: str, with_port: bool = False) -> GeneratedArtifact:
        """Render ``<Pascal>ClientAdapter``.

        With *with_port* the adapter implements ``I<Pascal>ClientPort`` and
        imports the record type from the port; otherwise it declares the
        record type itself.
        """
        names = derive_names(service)
        path = self.adapter_path(service)
        record_type = f"{names['pascal']}Record"

        imports: list[tuple[str, ImportTarget]] = [
            ("RequestContext", self.core_target("RequestContext")),
            ("IGrpcClientFactory", self.core_target("IGrpcClientFactory")),
        ]
        if with_port:
            port = ImportTarget.internal(self.port_path(service))
            imports.append((f"I{names['pascal']}ClientPort", port))
            imports.append((record_type, port))

        context = {
            "service": names,
            "record_type": record_type,
            "with_port": with_port,
            "import_lines": self.import_lines(path, imports),
        }
        return self.render("client/adapter", path, context)

    def generate_port_interface(self, service: str) -> GeneratedArtifact:
        names = derive_names(service)
        path = self.port_path(service)
        context = {
            "service": names,
            "record_type": f"{names['pascal']}Record",
            "import_lines": self.core_import_lines(path, ["RequestContext"]),
        }
        return self.render("client/port", path, context)
