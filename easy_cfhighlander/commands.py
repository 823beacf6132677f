"""Templates commands.

A command owns a catalogue of files and the list of parameters its
templates need.  ``TemplatesCommand.run`` wires one invocation:

1. pick the easy directory (cached params + manifest)
2. register resolvers and modifiers, resolve the parameter map
3. build the ordered file descriptors
4. generate or remove each file, reporting every outcome as it happens
5. write the manifest

Concurrent invocations against the same output root are not supported: the
params cache and the manifest are last-writer-wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from easy_cfhighlander import __version__
from easy_cfhighlander.config import GeneratorConfig
from easy_cfhighlander.files.descriptors import Catalogue, build_descriptors
from easy_cfhighlander.files.generator import FileGenerator
from easy_cfhighlander.files.manifest import ManifestGenerator
from easy_cfhighlander.files.models import FileDescriptor, FileOutcome, FileStatus
from easy_cfhighlander.files.templates import TemplateRenderer
from easy_cfhighlander.params.cache import ParameterCache
from easy_cfhighlander.params.resolver import (
    Modifier,
    ParameterResolver,
    Prompter,
    PromptResolver,
    Resolver,
)
from easy_cfhighlander.params.validators import alpha, boolean, required

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[FileOutcome, int, int], None]


@dataclass
class RunResult:
    """Everything one invocation produced."""

    params: dict[str, Any]
    outcomes: list[FileOutcome] = field(default_factory=list)
    manifest_path: Path | None = None
    manifest_error: OSError | None = None

    def count(self, status: FileStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)


# ---------------------------------------------------------------------------
# Base command
# ---------------------------------------------------------------------------


class TemplatesCommand:
    """Generates a fixed catalogue of files from resolved parameters.

    Subclasses set ``name``, ``template_prefix``, ``project_files`` and
    ``simple_files``, and may narrow :meth:`resolvers` or add
    :meth:`modifiers`.
    """

    name: str = ""
    description: str = ""
    template_prefix: str = ""
    project_files: Sequence[str] = ()
    simple_files: Sequence[str] = ()

    def catalogue(self) -> Catalogue:
        return Catalogue(
            template_prefix=self.template_prefix,
            project_files=tuple(self.project_files),
            simple_files=tuple(self.simple_files),
        )

    def resolvers(self) -> list[Resolver]:
        """Parameters this command asks for, in prompt order."""
        return [
            PromptResolver("project", "Project name", required),
            PromptResolver("db_name", "Database name", alpha),
            PromptResolver("db_username", "Database username", alpha, fallback="db_name"),
            PromptResolver("dns_domain", "DNS domain", required),
            PromptResolver("redis_enabled", "Redis enabled", boolean),
            PromptResolver("elasticsearch_enabled", "Elasticsearch enabled", boolean),
            PromptResolver("ssm_prefix", "SSM Prefix", alpha, fallback="project"),
            PromptResolver("sqs_queue", "SQS Queue", alpha, fallback="project"),
            PromptResolver("dev_account", "AWS DEV Account", required),
            PromptResolver("ops_account", "AWS OPS Account", required),
            PromptResolver("prod_account", "AWS PROD Account", required),
            PromptResolver("cli_enabled", "CLI enabled", boolean),
        ]

    def modifiers(self) -> list[Modifier]:
        return []

    # -- Pipeline steps ----------------------------------------------------

    def build_resolver(
        self,
        cache: ParameterCache,
        config: GeneratorConfig,
        prompter: Prompter | None = None,
    ) -> ParameterResolver:
        resolver = ParameterResolver(
            cache,
            prompter,
            interactive=config.interactive,
            max_attempts=config.max_attempts,
        )
        for item in self.resolvers():
            resolver.add_resolver(item)
        for modifier in self.modifiers():
            resolver.add_modifier(modifier)
        return resolver

    def descriptors(self, params: Mapping[str, Any], root: Path) -> list[FileDescriptor]:
        return build_descriptors(self.catalogue(), str(params["project"]), root)

    def iter_outcomes(
        self,
        generator: FileGenerator,
        descriptors: Sequence[FileDescriptor],
        params: Mapping[str, Any],
    ) -> Iterator[FileOutcome]:
        """Lazily process *descriptors* in order, one outcome per file."""
        for descriptor in descriptors:
            yield generator.process(descriptor, params)

    def run(
        self,
        config: GeneratorConfig,
        answers: Mapping[str, Any] | None = None,
        prompter: Prompter | None = None,
        on_outcome: OutcomeCallback | None = None,
    ) -> RunResult:
        """Resolve parameters, generate every catalogue file, write the manifest.

        Args:
            config: Output root and run options.
            answers: Explicit parameter values (skip prompting).
            prompter: Terminal collaborator for interactive runs.
            on_outcome: Called with ``(outcome, position, total)`` after each
                file, for progress reporting.

        Returns:
            A ``RunResult``.  A manifest write failure is reported on it
            rather than raised.

        Raises:
            ValidationError, RequiredValueMissing, ModifierError: Resolution
                failed; nothing was generated.
            TemplateRenderError: A template failed; files processed before it
                stay on disk.
            OSError: The params cache or a generated file could not be
                written.
        """
        easy_dir = config.easy_dir
        cache = ParameterCache(easy_dir / config.params_filename)
        params = self.build_resolver(cache, config, prompter).resolve(answers)

        descriptors = self.descriptors(params, config.cwd)
        config.ensure_directories()

        logger.info("Generating %d files in %s", len(descriptors), config.cwd)
        generator = FileGenerator(TemplateRenderer(config.template_dir))
        result = RunResult(params=params)
        total = len(descriptors)
        for position, outcome in enumerate(
            self.iter_outcomes(generator, descriptors, params), start=1
        ):
            result.outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome, position, total)

        try:
            result.manifest_path = ManifestGenerator(config.manifest_filename).generate(
                easy_dir, __version__, result.outcomes
            )
        except OSError as exc:
            logger.warning("Could not write manifest in %s: %s", easy_dir, exc)
            result.manifest_error = exc

        return result


# ---------------------------------------------------------------------------
# Concrete commands
# ---------------------------------------------------------------------------


_PROJECT_STACK_FILES = (
    "project.cfhighlander.rb",
    "project.config.yaml",
    "project-schema.cfhighlander.rb",
    "project-schema.config.yaml",
)


class CodeCommand(TemplatesCommand):
    """Generates the CloudFormation files kept in the application repository."""

    name = "code"
    description = "Generate cfhighlander templates for an application repository"
    template_prefix = "code"
    project_files = _PROJECT_STACK_FILES
    simple_files = ("Jenkinsfile",)

    def resolvers(self) -> list[Resolver]:
        excluded = {"ssm_prefix", "sqs_queue", "cli_enabled"}
        return [item for item in super().resolvers() if item.name not in excluded]


class CloudFormationCommand(TemplatesCommand):
    """Generates the full infrastructure stack, with optional Redis/Elasticsearch."""

    name = "cloudformation"
    description = "Generate the cfhighlander infrastructure stack"
    template_prefix = "cloudformation"
    project_files = (
        *_PROJECT_STACK_FILES,
        "project-redis.config.yaml",
        "project-elasticsearch.config.yaml",
    )
    simple_files = ("Jenkinsfile", "ssm-parameters.yaml", "sqs.config.yaml")

    def modifiers(self) -> list[Modifier]:
        return [Modifier("dns_domain", _normalize_domain)]


def _normalize_domain(params: Mapping[str, Any]) -> str:
    return str(params["dns_domain"]).lower().rstrip(".")


COMMANDS: dict[str, type[TemplatesCommand]] = {
    CodeCommand.name: CodeCommand,
    CloudFormationCommand.name: CloudFormationCommand,
}
