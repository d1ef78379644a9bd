"""Tests for GeneratedArtifact and the artifact writers."""

from __future__ import annotations

import dataclasses

import pytest

from struktos_codegen.scaffolder.artifacts import GeneratedArtifact, write_artifact, write_artifacts

pytestmark = pytest.mark.unit


def _artifact(path: str = "src/domain/entities/User.entity", content: str = "export class User {}\n"):
    return GeneratedArtifact(logical_path=path, content=content)


class TestGeneratedArtifact:
    def test_file_path(self):
        assert _artifact().file_path == "src/domain/entities/User.entity.ts"

    def test_custom_suffix(self):
        assert GeneratedArtifact("protos/user", "", suffix=".proto").file_path == "protos/user.proto"

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            _artifact().content = "changed"


class TestWriteArtifact:
    def test_creates_parents(self, project_root):
        path = write_artifact(_artifact(), project_root)

        assert path == project_root / "src" / "domain" / "entities" / "User.entity.ts"
        assert path.read_text(encoding="utf-8") == "export class User {}\n"

    def test_refuses_to_overwrite(self, project_root):
        write_artifact(_artifact(), project_root)

        with pytest.raises(FileExistsError):
            write_artifact(_artifact(content="new"), project_root)

        assert (project_root / "src/domain/entities/User.entity.ts").read_text(encoding="utf-8") == (
            "export class User {}\n"
        )

    def test_overwrite(self, project_root):
        write_artifact(_artifact(), project_root)
        path = write_artifact(_artifact(content="new"), project_root, overwrite=True)

        assert path.read_text(encoding="utf-8") == "new"


class TestWriteArtifacts:
    @pytest.mark.asyncio
    async def test_writes_all(self, project_root):
        paths = await write_artifacts([_artifact(), _artifact("protos/user", "syntax")], project_root)

        assert [p.name for p in paths] == ["User.entity.ts", "user.ts"]
        assert all(p.exists() for p in paths)

    @pytest.mark.asyncio
    async def test_conflict_writes_nothing(self, project_root):
        write_artifact(_artifact("b"), project_root)

        with pytest.raises(FileExistsError):
            await write_artifacts([_artifact("a"), _artifact("b")], project_root)

        assert not (project_root / "a.ts").exists()
