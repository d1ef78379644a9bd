"""Tests for relative import resolution between generated files."""

from __future__ import annotations

import pytest

from struktos_codegen.paths import (
    ImportTarget,
    build_import_statement,
    build_import_statements,
    get_path_depth,
    get_relative_prefix,
    is_package_import,
    normalize_path,
    relative_specifier,
    resolve_entity_import,
    resolve_import_path,
    resolve_repository_import,
    resolve_use_case_import,
)

pytestmark = pytest.mark.unit

USE_CASE_FILE = "src/application/use-cases/user/create-user.use-case.ts"


class TestClassification:
    @pytest.mark.parametrize("specifier", ["@struktos/core", "lodash", "lib/util"])
    def test_packages(self, specifier):
        assert is_package_import(specifier)

    @pytest.mark.parametrize(
        "specifier", ["./user", "../domain/user", "/abs/path", "src/domain/User", "app/src/domain/User"]
    )
    def test_project_files(self, specifier):
        assert not is_package_import(specifier)


class TestNormalize:
    def test_strips_extension_and_leading_dot(self):
        assert normalize_path("./src/domain/User.entity.ts") == "src/domain/User.entity"

    def test_converts_backslashes(self):
        assert normalize_path("src\\domain\\User.ts") == "src/domain/User"

    def test_depth(self):
        assert get_path_depth("src/domain/User") == 3
        assert get_path_depth("./src/domain/User.ts") == 3


class TestResolveImportPath:
    def test_use_case_to_repository(self):
        assert (
            resolve_import_path("src/domain/repositories/IUserRepository", USE_CASE_FILE)
            == "../../../domain/repositories/IUserRepository"
        )

    def test_same_directory(self):
        assert (
            resolve_import_path("src/domain/entities/User.entity", "src/domain/entities/Order.entity.ts")
            == "./User.entity"
        )

    def test_child_directory(self):
        assert resolve_import_path("src/domain/entities/User.entity", "src/main.ts") == "./domain/entities/User.entity"

    def test_packages_pass_through(self):
        assert resolve_import_path("@struktos/core", USE_CASE_FILE) == "@struktos/core"

    def test_extension_on_target_is_dropped(self):
        assert resolve_import_path("src/domain/entities/User.entity.ts", USE_CASE_FILE) == (
            "../../../domain/entities/User.entity"
        )

    def test_windows_separators(self):
        target = "src\\domain\\entities\\User.entity"
        assert resolve_import_path(target, USE_CASE_FILE) == "../../../domain/entities/User.entity"


class TestRelativeSpecifier:
    def test_leading_slash_means_project_root(self):
        assert relative_specifier("/src/a/b", "src/a/c.ts") == "./b"

    def test_target_is_current_directory(self):
        assert relative_specifier("src/a", "src/a/b.ts") == "./"

    def test_target_is_parent_directory(self):
        assert relative_specifier("src", "src/a/b.ts") == "../"

    def test_target_above_project_root_stays_lexical(self):
        assert resolve_import_path("../../shared/x", "src/a.ts") == "../../../shared/x"

    def test_independent_of_working_directory(self, tmp_path, monkeypatch):
        deep = tmp_path / "a" / "b" / "c"
        deep.mkdir(parents=True)
        results = []
        for cwd in (deep, tmp_path.anchor):
            monkeypatch.chdir(cwd)
            results.append(resolve_import_path("../../shared/x", "src/a.ts"))

        assert results[0] == results[1] == "../../../shared/x"


class TestRelativePrefix:
    def test_same_directory(self):
        assert get_relative_prefix("src/domain/a.ts", "src/domain/b.ts") == "./"

    def test_levels_up(self):
        assert get_relative_prefix(USE_CASE_FILE, "src/domain/entities/User.ts") == "../../../"


class TestImportTarget:
    def test_internal_is_never_guessed(self):
        target = ImportTarget.internal("lib/util")
        assert not target.is_external
        assert target.resolve("lib/services/x.ts") == "../util"

    def test_external(self):
        assert ImportTarget.external("@struktos/core").resolve(USE_CASE_FILE) == "@struktos/core"

    def test_classify(self):
        assert ImportTarget.classify("@struktos/core").is_external
        assert not ImportTarget.classify("src/shared/logger").is_external

    def test_internal_normalises(self):
        assert ImportTarget.internal("./src/x.ts").specifier == "src/x"


class TestConventionalLocations:
    def test_repository(self):
        assert resolve_repository_import("User", USE_CASE_FILE) == "../../../domain/repositories/IUserRepository"

    def test_entity(self):
        assert resolve_entity_import("User", USE_CASE_FILE) == "../../../domain/entities/User.entity"

    def test_use_case(self):
        assert (
            resolve_use_case_import("create", "orderItem", "src/infrastructure/adapters/http/order.controller.ts")
            == "../../../application/use-cases/order-item/create-order-item.use-case"
        )

    def test_custom_directory(self):
        assert resolve_entity_import("User", "src/app/x.ts", entities_path="src/model") == "../model/User.entity"


class TestImportStatements:
    def test_single(self):
        assert build_import_statement("User", "./User") == "import { User } from './User';"

    def test_multiple_names(self):
        assert build_import_statement(["A", "B"], "@x/y") == "import { A, B } from '@x/y';"

    def test_one_statement_per_module(self):
        assert build_import_statements({"@struktos/core": ["RequestContext", "ILogger"], "./User": ["User"]}) == [
            "import { RequestContext, ILogger } from '@struktos/core';",
            "import { User } from './User';",
        ]
