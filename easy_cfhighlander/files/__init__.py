"""File generation: descriptors, rendering, change classification, manifest.

Quick usage::

    from easy_cfhighlander.files import Catalogue, FileGenerator, build_descriptors

    catalogue = Catalogue("code", project_files=["project.config.yaml"])
    generator = FileGenerator()
    for descriptor in build_descriptors(catalogue, params["project"], "/tmp/out"):
        outcome = generator.process(descriptor, params)
"""

from easy_cfhighlander.files.descriptors import Catalogue, build_descriptors
from easy_cfhighlander.files.generator import FEATURE_GATES, FeatureGate, FileGenerator
from easy_cfhighlander.files.manifest import ManifestGenerator
from easy_cfhighlander.files.models import (
    FileDescriptor,
    FileOutcome,
    FileStatus,
    Manifest,
)
from easy_cfhighlander.files.templates import TemplateRenderer

__all__ = [
    "Catalogue",
    "FEATURE_GATES",
    "FeatureGate",
    "FileDescriptor",
    "FileGenerator",
    "FileOutcome",
    "FileStatus",
    "Manifest",
    "ManifestGenerator",
    "TemplateRenderer",
    "build_descriptors",
]
