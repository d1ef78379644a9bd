"""Interceptor (middleware) generation.

Custom interceptors land in ``src/infrastructure/middleware/<kebab>.interceptor.ts``;
the stock logging and timing interceptors use the fixed slugs ``logging`` and
``timing``.
"""

from __future__ import annotations

from .artifacts import GeneratedArtifact
from .base import BaseGenerator, derive_names


class MiddlewareGenerator(BaseGenerator):
    """Generates request interceptors."""

    def middleware_path(self, name: str) -> str:
        return self.logical_path("infrastructure.middleware", f"{derive_names(name)['kebab']}.interceptor")

    def generate_middleware(self, name: str, with_logger: bool = False) -> GeneratedArtifact:
        """Render a pass-through ``<Pascal>Interceptor`` skeleton."""
        path = self.middleware_path(name)
        symbols = ["IInterceptor", "RequestContext", "NextFn"]
        if with_logger:
            symbols.append("ILogger")
        context = {
            "class_name": f"{derive_names(name)['pascal']}Interceptor",
            "with_logger": with_logger,
            "import_lines": self.core_import_lines(path, symbols),
        }
        return self.render("middleware/default", path, context)

    def generate_logging_middleware(self) -> GeneratedArtifact:
        path = self.middleware_path("logging")
        context = {
            "import_lines": self.core_import_lines(
                path, ["IInterceptor", "RequestContext", "NextFn", "ILogger"]
            ),
        }
        return self.render("middleware/logging", path, context)

    def generate_timing_middleware(self) -> GeneratedArtifact:
        path = self.middleware_path("timing")
        context = {
            "import_lines": self.core_import_lines(path, ["IInterceptor", "RequestContext", "NextFn"]),
        }
        return self.render("middleware/timing", path, context)
