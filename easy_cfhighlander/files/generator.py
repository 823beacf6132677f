"""Renders templates to disk and classifies what changed.

Every catalogue file produces exactly one ``FileOutcome`` per run:

* ``created``   -- the file did not exist and was written
* ``updated``   -- the file existed with different content and was overwritten
* ``unchanged`` -- the file existed with identical content and was left alone
* ``removed``   -- a feature gate disabled the file; any existing copy is
  deleted

Feature gates are checked before rendering, so a disabled file never needs
its template to render.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from easy_cfhighlander.files.models import FileDescriptor, FileOutcome, FileStatus
from easy_cfhighlander.files.templates import TemplateRenderer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Feature gates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FeatureGate:
    """Disables catalogue files matching ``matches`` unless ``param`` is true.

    Gates see the unsubstituted catalogue filename, so a project name never
    trips a gate.
    """

    param: str
    matches: Callable[[str], bool]

    @classmethod
    def substring(cls, param: str, token: str) -> "FeatureGate":
        """Gate every filename containing *token* behind *param*."""
        return cls(param=param, matches=lambda filename: token in filename)

    def is_enabled(self, params: Mapping[str, Any]) -> bool:
        return bool(params.get(self.param, False))

    def blocks(self, filename: str, params: Mapping[str, Any]) -> bool:
        return self.matches(filename) and not self.is_enabled(params)


FEATURE_GATES: tuple[FeatureGate, ...] = (
    FeatureGate.substring("elasticsearch_enabled", "elasticsearch"),
    FeatureGate.substring("redis_enabled", "redis"),
)


# ---------------------------------------------------------------------------
# FileGenerator
# ---------------------------------------------------------------------------


class FileGenerator:
    """Writes rendered templates, touching the disk only when content differs."""

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        gates: Sequence[FeatureGate] = FEATURE_GATES,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.gates = tuple(gates)

    def blocking_gate(
        self, descriptor: FileDescriptor, params: Mapping[str, Any]
    ) -> FeatureGate | None:
        """Return the first gate that disables *descriptor*, if any."""
        for gate in self.gates:
            if gate.blocks(descriptor.source, params):
                return gate
        return None

    def process(self, descriptor: FileDescriptor, params: Mapping[str, Any]) -> FileOutcome:
        """Remove the file if a gate disables it, otherwise generate it."""
        gate = self.blocking_gate(descriptor, params)
        if gate is not None:
            logger.debug("%s disabled by %s", descriptor.filename, gate.param)
            return self.remove(descriptor)
        return self.generate(descriptor, params)

    def generate(self, descriptor: FileDescriptor, params: Mapping[str, Any]) -> FileOutcome:
        """Render *descriptor*'s template and write it if needed.

        Raises:
            TemplateRenderError: Rendering failed; nothing is written.
            OSError: The file could not be read or written.
        """
        content = self.renderer.render(descriptor.template_id, params).encode("utf-8")
        path = descriptor.output_path

        if path.is_file():
            if path.read_bytes() == content:
                status = FileStatus.UNCHANGED
            else:
                path.write_bytes(content)
                status = FileStatus.UPDATED
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
            status = FileStatus.CREATED

        logger.debug("%s %s", status.value, path)
        return FileOutcome(filename=descriptor.filename, status=status)

    def remove(self, descriptor: FileDescriptor) -> FileOutcome:
        """Delete *descriptor*'s file if present; always reports ``removed``."""
        path = descriptor.output_path
        if path.is_file():
            path.unlink()
            logger.debug("removed %s", path)
        return FileOutcome(filename=descriptor.filename, status=FileStatus.REMOVED)
