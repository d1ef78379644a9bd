"""Struktos scaffolder -- renders hexagonal-architecture source files.

Each generator turns a name (plus options) into ``GeneratedArtifact``
values: a project-relative path and the rendered TypeScript or proto text.
Nothing is written until the caller asks for it.

Quick usage::

    from struktos_codegen.scaffolder import CodeGenerator, write_artifact

    generator = CodeGenerator()
    for artifact in generator.entity("User", "name:string,email:string"):
        write_artifact(artifact, ".")
"""

from struktos_codegen.scaffolder.artifacts import GeneratedArtifact, write_artifact, write_artifacts
from struktos_codegen.scaffolder.generator import CodeGenerator
from struktos_codegen.scaffolder.templates import TemplateNotFoundError, TemplateRenderer

__all__ = [
    "CodeGenerator",
    "GeneratedArtifact",
    "TemplateNotFoundError",
    "TemplateRenderer",
    "write_artifact",
    "write_artifacts",
]
