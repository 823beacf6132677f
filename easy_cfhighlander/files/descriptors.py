"""Builds the ordered list of files a command generates."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from easy_cfhighlander.files.models import FileDescriptor

TEMPLATE_EXTENSION = ".j2"
PROJECT_TOKEN = "project"


@dataclass(frozen=True)
class Catalogue:
    """The fixed set of files a command is responsible for.

    Attributes:
        template_prefix: Subdirectory of the template root holding this
            catalogue's templates.
        project_files: Filenames in which every ``project`` token is replaced
            by the resolved project name.
        simple_files: Filenames used as-is.
    """

    template_prefix: str
    project_files: Sequence[str] = field(default_factory=tuple)
    simple_files: Sequence[str] = field(default_factory=tuple)

    def template_id(self, filename: str) -> str:
        return f"{self.template_prefix}/{filename}{TEMPLATE_EXTENSION}"

    def templates(self) -> list[str]:
        """Every template id this catalogue needs, in generation order."""
        return [self.template_id(name) for name in (*self.project_files, *self.simple_files)]


def build_descriptors(
    catalogue: Catalogue,
    project: str,
    root: str | Path,
) -> list[FileDescriptor]:
    """Return the files to generate for *catalogue*, project files first.

    The template id is always built from the catalogue filename, never from
    the substituted output name.  No filesystem access happens here.
    """
    root = Path(root)
    descriptors = [
        FileDescriptor(
            root=root,
            filename=name.replace(PROJECT_TOKEN, project),
            template_id=catalogue.template_id(name),
            source=name,
        )
        for name in catalogue.project_files
    ]
    descriptors.extend(
        FileDescriptor(
            root=root,
            filename=name,
            template_id=catalogue.template_id(name),
            source=name,
        )
        for name in catalogue.simple_files
    )
    return descriptors
