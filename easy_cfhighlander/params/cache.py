"""Persistent store for the resolved parameter map."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from easy_cfhighlander.exceptions import CacheFormatError

logger = logging.getLogger(__name__)


class ParameterCache:
    """Loads and saves a flat parameter map as a YAML document.

    The file is read once at the start of a run and overwritten in full at the
    end of a successful resolution.  A missing file reads as an empty map.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, Any]:
        if not self.path.exists():
            logger.debug("No parameters cache at %s", self.path)
            return {}

        try:
            payload = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise CacheFormatError(self.path, str(exc)) from exc

        if payload is None:
            return {}
        if not isinstance(payload, Mapping):
            raise CacheFormatError(self.path, "document must be a mapping")

        logger.debug("Loaded %d cached parameters from %s", len(payload), self.path)
        return {str(key): value for key, value in payload.items()}

    def save(self, params: Mapping[str, Any]) -> Path:
        """Overwrite the cache with *params*, keeping their order.

        Returns:
            The path written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        content = yaml.safe_dump(
            dict(params),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
        self.path.write_text(content, encoding="utf-8")
        logger.debug("Saved %d parameters to %s", len(params), self.path)
        return self.path
