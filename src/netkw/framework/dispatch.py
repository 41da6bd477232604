"""
Keyword-presence dispatch.

A wrapper function describes its engine overloads as an ordered list of
rules. Each rule pairs a guard with an action; the first guard that accepts
the supplied options wins, regardless of whether a later rule would match
more keys. Keys the matching rule does not name are ignored.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple, Union
import logging

logger = logging.getLogger(__name__)

Options = Mapping[str, Any]
Guard = Union[Tuple[str, ...], Callable[[Options], bool]]


class DispatchError(ValueError):
    """No rule accepted the supplied keyword arguments."""


def contains_many(opts: Options, *keys: str) -> bool:
    """True when every key is present in ``opts`` (``None`` values count)."""
    return all(key in opts for key in keys)


def supplied(opts: Options, key: str) -> bool:
    """True when ``key`` is present with a value other than None or False."""
    value = opts.get(key)
    return value is not None and value is not False


@dataclass(frozen=True)
class Rule:
    """One engine overload: required keys (or a predicate) and the call to make."""

    guard: Guard
    action: Callable[[Options], Any]
    name: str = ""

    def matches(self, opts: Options) -> bool:
        if callable(self.guard):
            return bool(self.guard(opts))
        return contains_many(opts, *self.guard)

    def describe(self) -> str:
        if self.name:
            return self.name
        if callable(self.guard):
            return getattr(self.guard, "__name__", "predicate")
        return "{" + ", ".join(self.guard) + "}"


def dispatch(opts: Options,
             rules: Sequence[Rule],
             otherwise: Optional[Callable[[Options], Any]] = None,
             message: str = "no matching arguments supplied",
             operation: str = "dispatch") -> Any:
    """
    Run the action of the first rule whose guard accepts ``opts``.

    Args:
        opts: Supplied keyword arguments
        rules: Rules in priority order
        otherwise: Fallback action when no rule matches
        message: Error message when no rule matches and there is no fallback
        operation: Name used in debug logging

    Returns:
        Whatever the selected action returns

    Raises:
        DispatchError: if no rule matches and ``otherwise`` is None
    """
    for rule in rules:
        if rule.matches(opts):
            logger.debug(f"{operation}: selected {rule.describe()}")
            return rule.action(opts)

    if otherwise is not None:
        logger.debug(f"{operation}: no rule matched, using fallback")
        return otherwise(opts)

    raise DispatchError(message)


def require_keys(opts: Options, *keys: str, message: str) -> Dict[str, Any]:
    """
    Check the single valid key set of an operation.

    Raises:
        DispatchError: with ``message`` if any key is absent
    """
    if not contains_many(opts, *keys):
        raise DispatchError(message)
    return dict(opts)
