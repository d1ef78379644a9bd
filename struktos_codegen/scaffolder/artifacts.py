"""Generated artifacts and the file writer.

The generators only produce :class:`GeneratedArtifact` values; writing them
to disk is a separate step so callers can preview, diff or discard output.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

from struktos_codegen.utils import write_text_file


@dataclass(frozen=True)
class GeneratedArtifact:
    """Rendered source text plus the project-relative place it belongs.

    ``logical_path`` is slash-delimited and extension-free
    (``src/domain/entities/User.entity``); ``suffix`` completes it.
    """

    logical_path: str
    content: str
    suffix: str = ".ts"

    @property
    def file_path(self) -> str:
        return f"{self.logical_path}{self.suffix}"


def write_artifact(
    artifact: GeneratedArtifact,
    project_root: str | Path,
    overwrite: bool = False,
) -> Path:
    """Write *artifact* below *project_root*, creating parent directories.

    Raises:
        FileExistsError: If the file exists and *overwrite* is false.
    """
    target = Path(project_root) / artifact.file_path
    if target.exists() and not overwrite:
        raise FileExistsError(f"File already exists: {target}")
    write_text_file(target, artifact.content)
    return target


async def write_artifacts(
    artifacts: list[GeneratedArtifact],
    project_root: str | Path,
    overwrite: bool = False,
) -> list[Path]:
    """Write every artifact in a worker thread.

    All targets are checked before anything is written, so a conflict leaves
    the project untouched.
    """
    root = Path(project_root)
    if not overwrite:
        for artifact in artifacts:
            target = root / artifact.file_path
            if target.exists():
                raise FileExistsError(f"File already exists: {target}")

    written: list[Path] = []
    for artifact in artifacts:
        path = await asyncio.to_thread(write_artifact, artifact, root, True)
        written.append(path)
    return written
