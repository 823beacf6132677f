"""Writes the manifest of the most recent generation run."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from easy_cfhighlander.files.models import FileOutcome, Manifest

logger = logging.getLogger(__name__)


class ManifestGenerator:
    """Persists ``Manifest`` documents as pretty-printed JSON."""

    def __init__(self, filename: str = "easy-cfhighlander-manifest.json") -> None:
        self.filename = filename

    def generate(
        self,
        output_dir: str | Path,
        version: str,
        outcomes: Iterable[FileOutcome],
    ) -> Path:
        """Write the manifest into *output_dir*, replacing any previous one.

        Args:
            output_dir: Directory receiving the manifest file.
            version: Tool version stamp.
            outcomes: Per-file outcomes, recorded in the order given.

        Returns:
            The path written.

        Raises:
            OSError: The manifest could not be written.
        """
        manifest = Manifest(version=version, files=list(outcomes))
        target = Path(output_dir) / self.filename
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(manifest.model_dump_json(indent=2) + "\n", encoding="utf-8")
        logger.debug("Wrote manifest with %d entries to %s", len(manifest.files), target)
        return target

    @staticmethod
    def load(path: str | Path) -> Manifest:
        """Load a previously written manifest."""
        return Manifest.model_validate_json(Path(path).read_text(encoding="utf-8"))
