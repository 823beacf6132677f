"""Parameter resolution.

Resolves a named, ordered set of parameters.  Each parameter is produced by a
resolver strategy registered on a ``ParameterResolver``; registration order is
resolution order, and a resolver sees every value resolved before it.  After
all resolvers ran, modifiers post-process their own parameter.  The result is
written back to the ``ParameterCache`` so the next run can offer it as the
default answers.

Starting value precedence for a parameter, highest first:

1. an explicit answer passed to :meth:`ParameterResolver.resolve`
2. the cached value (or the value resolved earlier in this run)
3. the resolver's fallback (for example ``db_username`` falls back to
   ``db_name``)

Only parameters with a registered resolver survive a run; stale cached keys
are dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from easy_cfhighlander.exceptions import (
    ModifierError,
    RequiredValueMissing,
    ValidationError,
)
from easy_cfhighlander.params.cache import ParameterCache
from easy_cfhighlander.params.validators import Validator, required

logger = logging.getLogger(__name__)

Fallback = Callable[[Mapping[str, Any]], Any]


class Prompter(Protocol):
    """Terminal collaborator used for interactive resolution."""

    def ask(self, question: str, default: str | None) -> str | None:
        """Ask *question* and return the raw answer (``default`` on empty input)."""

    def reject(self, message: str) -> None:
        """Show a validator's rejection message before asking again."""


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class Resolver:
    """Base resolver strategy: one named parameter."""

    interactive = False

    def __init__(self, name: str, validator: Validator | None = None) -> None:
        self.name = name
        self.validator = validator or Validator()

    def default(self, params: Mapping[str, Any]) -> Any:
        """Return the starting value for this parameter from *params*."""
        return params.get(self.name)

    def validate(self, answer: Any) -> Any:
        try:
            return self.validator.validate(answer)
        except ValidationError as exc:
            raise exc.for_param(self.name) from exc

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class PromptResolver(Resolver):
    """Asks the user for a value, offering the cached or fallback value.

    *fallback* is either the name of another parameter whose value is used
    when this one has none, or a callable receiving the current map.
    """

    interactive = True

    def __init__(
        self,
        name: str,
        question: str,
        validator: Validator = required,
        fallback: str | Fallback | None = None,
    ) -> None:
        super().__init__(name, validator)
        self.question = question
        self.fallback = fallback

    def default(self, params: Mapping[str, Any]) -> Any:
        value = params.get(self.name)
        if value is not None or self.fallback is None:
            return value
        if callable(self.fallback):
            return self.fallback(params)
        return params.get(self.fallback)


class ComputedResolver(Resolver):
    """Derives a value from the parameters resolved so far, never prompts."""

    def __init__(
        self,
        name: str,
        func: Fallback,
        validator: Validator | None = None,
    ) -> None:
        super().__init__(name, validator)
        self.func = func

    def default(self, params: Mapping[str, Any]) -> Any:
        return self.func(params)


class Modifier:
    """Post-processes an already resolved parameter."""

    def __init__(self, name: str, func: Callable[[Mapping[str, Any]], Any]) -> None:
        self.name = name
        self.func = func

    def modify(self, params: Mapping[str, Any]) -> Any:
        return self.func(params)

    def __repr__(self) -> str:
        return f"Modifier({self.name!r})"


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


class ParameterResolver:
    """Resolves registered parameters against cached values and answers.

    Attributes:
        cache: Store for the previous run's parameters.
        prompter: Terminal collaborator; without one, resolution is
            non-interactive.
        interactive: Whether prompting is allowed at all.
        max_attempts: Prompts per parameter before a ``ValidationError``
            escapes.  ``None`` asks until the answer is valid.
    """

    def __init__(
        self,
        cache: ParameterCache,
        prompter: Prompter | None = None,
        *,
        interactive: bool = True,
        max_attempts: int | None = None,
    ) -> None:
        self.cache = cache
        self.prompter = prompter
        self.interactive = interactive and prompter is not None
        self.max_attempts = max_attempts
        self._resolvers: dict[str, Resolver] = {}
        self._modifiers: dict[str, Modifier] = {}

    # -- Registration ------------------------------------------------------

    def add_resolver(self, resolver: Resolver) -> "ParameterResolver":
        self._resolvers[resolver.name] = resolver
        return self

    def add_modifier(self, modifier: Modifier) -> "ParameterResolver":
        self._modifiers[modifier.name] = modifier
        return self

    @property
    def resolvers(self) -> tuple[Resolver, ...]:
        return tuple(self._resolvers.values())

    @property
    def modifiers(self) -> tuple[Modifier, ...]:
        return tuple(self._modifiers.values())

    # -- Resolution --------------------------------------------------------

    def resolve(self, answers: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Resolve every registered parameter and persist the result.

        Args:
            answers: Explicit answers (typically from the command line).  They
                skip the prompt but still go through the validator.

        Returns:
            The resolved parameter map, in registration order.

        Raises:
            ValidationError: An answer was rejected and could not be asked
                again.
            RequiredValueMissing: A parameter has no usable value and
                prompting is not possible.
            ModifierError: A modifier targets an unregistered parameter.
        """
        answers = dict(answers or {})
        cached = self.cache.load()
        resolved: dict[str, Any] = {}

        for resolver in self._resolvers.values():
            current = {**cached, **resolved}
            resolved[resolver.name] = self._resolve_one(resolver, current, answers)

        for modifier in self._modifiers.values():
            if modifier.name not in resolved:
                raise ModifierError(modifier.name)
            resolved[modifier.name] = modifier.modify(dict(resolved))

        self.cache.save(resolved)
        logger.info("Resolved %d parameters", len(resolved))
        return resolved

    def _resolve_one(
        self,
        resolver: Resolver,
        current: Mapping[str, Any],
        answers: Mapping[str, Any],
    ) -> Any:
        if resolver.name in answers:
            try:
                return resolver.validate(answers[resolver.name])
            except ValidationError as exc:
                if not (resolver.interactive and self.interactive):
                    if _is_blank(answers[resolver.name]):
                        raise RequiredValueMissing(resolver.name) from None
                    raise
                self.prompter.reject(exc.message)

        value = resolver.default(current)

        if not (resolver.interactive and self.interactive):
            try:
                return resolver.validate(value)
            except ValidationError:
                if _is_blank(value):
                    raise RequiredValueMissing(resolver.name) from None
                raise

        return self._prompt(resolver, resolver.validator.as_answer(value))

    def _prompt(self, resolver: PromptResolver, default: str | None) -> Any:
        attempts = 0
        while True:
            attempts += 1
            answer = self.prompter.ask(resolver.question, default)
            try:
                return resolver.validate(answer)
            except ValidationError as exc:
                if self.max_attempts is not None and attempts >= self.max_attempts:
                    raise
                logger.debug("Rejected answer for %s: %s", resolver.name, exc.message)
                self.prompter.reject(exc.message)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
