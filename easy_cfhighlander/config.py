"""easy-cfhighlander configuration.

Typed run configuration for a single generation.  Settings use a Pydantic v2
model so they are validated at construction time and can be built from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}


class GeneratorConfig(BaseModel):
    """Configuration for one invocation of a templates command.

    Holds the output root and derived locations of the two persisted
    documents (cached parameters and manifest).  Instances are created by the
    CLI entry point and then passed to ``TemplatesCommand.run``.
    """

    cwd: Path = Field(default_factory=Path.cwd, description="Output root")
    interactive: bool = Field(default=True)
    max_attempts: int | None = Field(
        default=None,
        ge=1,
        description="Interactive attempts per parameter (None means unlimited)",
    )
    template_dir: Path | None = Field(
        default=None, description="Override for the bundled template directory"
    )
    easy_dir_name: str = Field(default=".easy")
    params_filename: str = Field(default="easy-cfhighlander-params.yaml")
    manifest_filename: str = Field(default="easy-cfhighlander-manifest.json")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def easy_dir(self) -> Path:
        """Directory holding the params cache and the manifest.

        A params file sitting directly in ``cwd`` keeps ``cwd`` as the easy
        directory; otherwise the hidden ``.easy`` subdirectory is used.
        """
        if (self.cwd / self.params_filename).exists():
            return self.cwd
        return self.cwd / self.easy_dir_name

    @property
    def cache_path(self) -> Path:
        """Path to the cached parameters YAML document."""
        return self.easy_dir / self.params_filename

    @property
    def manifest_path(self) -> Path:
        """Path to the JSON manifest of the last run."""
        return self.easy_dir / self.manifest_filename

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            EASY_CFHIGHLANDER_CWD, EASY_CFHIGHLANDER_NO_INTERACTION,
            EASY_CFHIGHLANDER_MAX_ATTEMPTS, EASY_CFHIGHLANDER_TEMPLATE_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EASY_CFHIGHLANDER_CWD"):
            kwargs["cwd"] = Path(os.environ["EASY_CFHIGHLANDER_CWD"])
        if os.environ.get("EASY_CFHIGHLANDER_NO_INTERACTION"):
            flag = os.environ["EASY_CFHIGHLANDER_NO_INTERACTION"].strip().lower()
            kwargs["interactive"] = flag not in _TRUTHY
        if os.environ.get("EASY_CFHIGHLANDER_MAX_ATTEMPTS"):
            kwargs["max_attempts"] = int(os.environ["EASY_CFHIGHLANDER_MAX_ATTEMPTS"])
        if os.environ.get("EASY_CFHIGHLANDER_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["EASY_CFHIGHLANDER_TEMPLATE_DIR"])
        return cls(**kwargs)

    def ensure_directories(self) -> None:
        """Create the output root and the easy directory if missing."""
        for directory in (self.cwd, self.easy_dir):
            directory.mkdir(parents=True, exist_ok=True)
