"""Result type for expected failures in application operations.

Operations such as "complete the task with this id" can fail for
ordinary reasons (the id is unknown, the title is blank). Those
failures are returned as ``Err`` values rather than raised, so callers
handle them explicitly.

Example usage:
    >>> result = toggle_task(tasks, "a1b2")
    >>> if is_ok(result):
    ...     tasks, event = result.value
    ... else:
    ...     print(result.error)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``."""

    error: E


# Union keeps the alias usable at runtime with TypeVars
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Return True if the result is an ``Ok``."""
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    """Return True if the result is an ``Err``."""
    return isinstance(result, Err)


def unwrap_or(result: Ok[T] | Err[E], default: T) -> T:
    """Return the ``Ok`` value, or ``default`` for an ``Err``."""
    if isinstance(result, Ok):
        return result.value
    return default
