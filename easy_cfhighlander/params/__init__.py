"""Parameter resolution: cache store, validators and the resolver."""

from easy_cfhighlander.params.cache import ParameterCache
from easy_cfhighlander.params.resolver import (
    ComputedResolver,
    Modifier,
    ParameterResolver,
    Prompter,
    PromptResolver,
    Resolver,
)
from easy_cfhighlander.params.validators import alpha, boolean, required

__all__ = [
    "ComputedResolver",
    "Modifier",
    "ParameterCache",
    "ParameterResolver",
    "PromptResolver",
    "Prompter",
    "Resolver",
    "alpha",
    "boolean",
    "required",
]
