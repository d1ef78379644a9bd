"""Integration tests for generating a whole feature slice through the CLI.

These tests run the real CLI against a temporary project, then check that
every relative import in the generated TypeScript points at a file that was
actually generated.  No Node.js toolchain is required.
"""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from struktos_codegen.cli import main

pytestmark = pytest.mark.integration

_IMPORT = re.compile(r"^import \{ [^}]+ \} from '([^']+)';$", re.MULTILINE)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _generate_slice(project_root: Path) -> None:
    root = ["--project-root", str(project_root)]
    main([*root, "entity", "Product", "-f", "name:string,price:number,contactEmail:string?"])
    for action in ("create", "get", "list", "update", "delete"):
        main([*root, "use-case", action, "-e", "Product", "-f", "name:string,price:number"])
    main([*root, "middleware", "audit", "--with-logger"])
    main([*root, "middleware", "logging", "--logging"])
    main([*root, "client", "inventory", "--with-port"])
    main([*root, "service", "product"])
    main([*root, "service", "product", "-t", "http"])


def _relative_imports(path: Path) -> list[str]:
    found = _IMPORT.findall(path.read_text(encoding="utf-8"))
    return [specifier for specifier in found if specifier.startswith(".")]


def _assert_imports_resolve(project_root: Path, local_roots: tuple[str, ...] = ()) -> int:
    checked = 0
    for source in project_root.rglob("*.ts"):
        for specifier in _relative_imports(source):
            target = (source.parent / f"{specifier}.ts").resolve()
            if any(target.is_relative_to((project_root / r).resolve()) for r in local_roots):
                continue
            assert target.exists(), f"{source.relative_to(project_root)} imports missing {specifier}"
            checked += 1
    return checked


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestFeatureSlice:
    def test_all_relative_imports_resolve(self, project_root):
        _generate_slice(project_root)

        assert _assert_imports_resolve(project_root) > 10

    def test_expected_files(self, project_root):
        _generate_slice(project_root)

        generated = sorted(p.relative_to(project_root).as_posix() for p in project_root.rglob("*.*"))
        assert generated == [
            "protos/product.proto",
            "src/application/ports/grpc/inventory.client.port.ts",
            "src/application/use-cases/product/create-product.use-case.ts",
            "src/application/use-cases/product/delete-product.use-case.ts",
            "src/application/use-cases/product/get-product.use-case.ts",
            "src/application/use-cases/product/list-product.use-case.ts",
            "src/application/use-cases/product/update-product.use-case.ts",
            "src/domain/entities/Product.entity.ts",
            "src/domain/repositories/IProductRepository.ts",
            "src/infrastructure/adapters/grpc/inventory.client.adapter.ts",
            "src/infrastructure/adapters/grpc/product.registration.ts",
            "src/infrastructure/adapters/grpc/product.service.grpc.ts",
            "src/infrastructure/adapters/http/product.controller.ts",
            "src/infrastructure/adapters/persistence/Product.repository.ts",
            "src/infrastructure/middleware/audit.interceptor.ts",
            "src/infrastructure/middleware/logging.interceptor.ts",
        ]

    def test_proto_and_handler_agree(self, project_root):
        _generate_slice(project_root)

        proto = (project_root / "protos/product.proto").read_text(encoding="utf-8")
        handler = (project_root / "src/infrastructure/adapters/grpc/product.service.grpc.ts").read_text(
            encoding="utf-8"
        )

        package = re.search(r"^package (\w+);", proto, re.MULTILINE).group(1)
        service = re.search(r"^service (\w+) \{", proto, re.MULTILINE).group(1)
        assert f"'{package}.{service}'" in handler
        for rpc in re.findall(r"rpc (\w+) \(", proto):
            assert f"  {rpc}: async" in handler


class TestCustomLayout:
    def test_relocated_layers_still_resolve(self, project_root, write_metadata):
        write_metadata({
            "coreImports": {"ILogger": "src/shared/logger"},
            "paths": {
                "domain": {"entities": "src/core/model", "repositories": "src/core/ports"},
                "application": {"useCases": "src/features"},
                "infrastructure": {"middleware": "src/http/interceptors"},
            },
        })

        _generate_slice(project_root)

        assert (project_root / "src/core/model/Product.entity.ts").exists()
        assert (project_root / "src/features/product/create-product.use-case.ts").exists()
        # src/shared/logger is provided by the project, not generated.
        _assert_imports_resolve(project_root, local_roots=("src/shared",))

        use_case = (project_root / "src/features/product/create-product.use-case.ts").read_text(encoding="utf-8")
        assert "import { ILogger } from '../../shared/logger';" in use_case
