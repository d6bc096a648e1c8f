"""
Candidates and the argument sets they are invoked with.

An argument set is an explicit variant: ``Single(value)`` calls each
candidate with one positional argument, ``Multi(values)`` spreads an
ordered sequence as positional arguments. Callers pick the variant, so a
list meant as one argument is never mistaken for several.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence, Union


def safe_repr(value: Any) -> str:
    """``repr`` that falls back to ``object.__repr__`` when ``__repr__`` raises."""
    try:
        return repr(value)
    except Exception:
        return object.__repr__(value)


@dataclass(frozen=True)
class Single:
    """One value passed as the only argument."""

    value: Any

    spread = False

    def invoke(self, fn: Callable) -> Any:
        return fn(self.value)

    def describe(self) -> str:
        return safe_repr(self.value)


@dataclass(frozen=True)
class Multi:
    """Ordered values spread as positional arguments (the slower path)."""

    values: tuple = ()

    spread = True

    def __post_init__(self):
        # Freeze the sequence so every candidate sees identical arguments
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))

    def invoke(self, fn: Callable) -> Any:
        return fn(*self.values)

    def describe(self) -> str:
        return ", ".join(safe_repr(v) for v in self.values)


ArgumentSet = Union[Single, Multi]

NO_ARGS = Multi(())


def as_argument_set(arguments: Any) -> ArgumentSet:
    """Wrap a raw value as ``Single``; variants pass through untouched."""
    if isinstance(arguments, (Single, Multi)):
        return arguments
    return Single(arguments)


def invoke(fn: Callable, arguments: ArgumentSet) -> Any:
    """Apply a candidate to an argument set. Exceptions propagate unchanged."""
    return arguments.invoke(fn)


def preview(value: Any, limit: int = 200) -> str:
    """Short string form of a value for log lines."""
    return str(value)[:limit]


@dataclass(frozen=True)
class Candidate:
    """A named function under comparison."""

    name: str
    fn: Callable

    @classmethod
    def of(cls, obj: Any, position: int = 1) -> "Candidate":
        """Build a candidate from a callable or a ``(name, callable)`` pair.

        ``position`` is 1-based and names candidates that have no usable
        ``__name__`` (lambdas, partials, callable instances).
        """
        if isinstance(obj, Candidate):
            return obj
        if isinstance(obj, tuple) and len(obj) == 2 and callable(obj[1]):
            return cls(str(obj[0]), obj[1])
        if not callable(obj):
            raise TypeError(f"Candidate {position} is not callable: {obj!r}")
        name = getattr(obj, "__name__", None)
        if not name or name == "<lambda>":
            name = f"candidate_{position}"
        return cls(name, obj)


CandidateLike = Union[Candidate, Callable, tuple]


def as_candidates(candidates: Union[CandidateLike, Iterable[CandidateLike]]) -> list[Candidate]:
    """Normalize one candidate or a sequence of them to a list."""
    if callable(candidates) or isinstance(candidates, Candidate):
        return [Candidate.of(candidates)]
    if isinstance(candidates, tuple) and len(candidates) == 2 and callable(candidates[1]) \
            and not callable(candidates[0]):
        return [Candidate.of(candidates)]
    items: Sequence = list(candidates)
    return [Candidate.of(obj, position) for position, obj in enumerate(items, start=1)]
