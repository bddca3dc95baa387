"""
Inclusion/exclusion filters over levels and tags.

A Filter is one of three variants:

    include(S)   passes when the value is in S
    exclude(S)   passes when the value is not in S
    all          always passes

Two tests are provided.  test() checks a single value (used for levels),
test_many() checks a collection (used for tags) by intersection:
include passes when at least one value is in S, exclude passes when
none is.  An empty tag list therefore never passes include and always
passes exclude.

Filter text syntax (used by route specs and config files):

    ""  or  "*"        all
    "warning,error"    include({warning, error})
    "!debug"           exclude({debug})
"""

from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Iterable, Literal

INCLUDE = 'include'
EXCLUDE = 'exclude'
ALL = 'all'


def _collect(values: tuple) -> FrozenSet[Any]:
    # include('a', 'b') and include(['a', 'b']) mean the same thing
    if len(values) == 1 and not isinstance(values[0], (str, bytes)):
        try:
            return frozenset(values[0])
        except TypeError:
            pass
    return frozenset(values)


@dataclass(frozen=True)
class Filter:
    """An immutable include/exclude/all predicate.

    Build with Filter.include(), Filter.exclude() or Filter.all();
    a filter is never changed in place.
    """
    kind: Literal['include', 'exclude', 'all'] = ALL
    values: FrozenSet[Any] = field(default_factory=frozenset)

    def __post_init__(self):
        if self.kind not in (INCLUDE, EXCLUDE, ALL):
            raise ValueError(f"Unknown filter kind {self.kind!r}")
        if not isinstance(self.values, frozenset):
            object.__setattr__(self, 'values', frozenset(self.values))

    @classmethod
    def include(cls, *values: Any) -> 'Filter':
        return cls(INCLUDE, _collect(values))

    @classmethod
    def exclude(cls, *values: Any) -> 'Filter':
        return cls(EXCLUDE, _collect(values))

    @classmethod
    def all(cls) -> 'Filter':
        return PASS_ALL

    def test(self, value: Any) -> bool:
        """Test a single value for membership."""
        if self.kind == INCLUDE:
            return value in self.values
        if self.kind == EXCLUDE:
            return value not in self.values
        return True

    def test_many(self, values: Iterable[Any]) -> bool:
        """Test a collection of values by intersection with the set."""
        if self.kind == INCLUDE:
            return any(v in self.values for v in values)
        if self.kind == EXCLUDE:
            return not any(v in self.values for v in values)
        return True

    def __str__(self) -> str:
        if self.kind == ALL:
            return '*'
        names = ','.join(sorted(str(v) for v in self.values))
        return names if self.kind == INCLUDE else f"!{names}"


PASS_ALL = Filter(ALL)


def parse_filter(text: str, convert: Callable[[str], Any] = str) -> Filter:
    """Parse filter text into a Filter.

    Args:
        text: "" or "*" for all, "a,b" to include, "!a,b" to exclude
        convert: Applied to each token (e.g. parse_level)

    Returns:
        The parsed Filter
    """
    text = (text or '').strip()
    if text in ('', '*'):
        return PASS_ALL

    kind = INCLUDE
    if text.startswith('!'):
        kind = EXCLUDE
        text = text[1:]

    tokens = [t.strip() for t in text.split(',') if t.strip()]
    if not tokens:
        raise ValueError("Filter needs at least one value after '!'")
    return Filter(kind, frozenset(convert(t) for t in tokens))
