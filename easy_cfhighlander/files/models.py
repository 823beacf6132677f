"""Data models shared by the file generation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class FileStatus(str, Enum):
    """Outcome of processing one catalogue file."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    REMOVED = "removed"


@dataclass(frozen=True)
class FileDescriptor:
    """A concrete file to generate.

    ``filename`` is relative to ``root``; ``template_id`` is the template path
    relative to the template directory.  ``source`` is the catalogue filename
    before project substitution; feature gates match against it.
    """

    root: Path
    filename: str
    template_id: str
    source: str

    @property
    def output_path(self) -> Path:
        return self.root / self.filename


class FileOutcome(BaseModel):
    """One manifest entry: a file and what happened to it in this run."""

    filename: str
    status: FileStatus


class Manifest(BaseModel):
    """The persisted record of the most recent run."""

    version: str = Field(..., description="Version of the tool that produced the files")
    files: list[FileOutcome] = Field(default_factory=list)
