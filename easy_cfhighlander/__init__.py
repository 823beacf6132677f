"""easy-cfhighlander -- scaffolds cfhighlander CloudFormation projects.

Resolves a set of named parameters (project name, database credentials, DNS
domain, AWS account ids, feature toggles), renders a fixed catalogue of
templates into a target directory, and records what changed.

Quick usage::

    from easy_cfhighlander.commands import CodeCommand
    from easy_cfhighlander.config import GeneratorConfig

    config = GeneratorConfig(cwd="/tmp/acme", interactive=False)
    result = CodeCommand().run(config, answers={"project": "acme", ...})
"""

__version__ = "1.0.0"
