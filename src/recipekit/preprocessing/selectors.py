"""Column selectors resolved against a recipe's variable-info table.

A step receives any mix of plain column names and selector objects::

    rec.step_normalize(all_numeric_predictors(), -one_of("Year_Built"))

Resolution starts from nothing (or from every variable when the first term is
negated), then walks the terms left to right: positive terms add their matches,
negated terms remove theirs. The result follows column order in the data.
"""
import re

import pandas as pd

from recipekit.preprocessing import roles
from recipekit.preprocessing.errors import SelectorError


class Selector:
    """Base selector: subclasses implement `match(info)` returning variable names."""

    negated = False

    def match(self, info: pd.DataFrame) -> list[str]:
        raise NotImplementedError

    def __neg__(self) -> "Selector":
        return Negated(self)

    def describe(self) -> str:
        return f"{type(self).__name__}()"

    def __repr__(self) -> str:
        return self.describe()

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash(self.describe())


class Negated(Selector):
    negated = True

    def __init__(self, inner: Selector):
        self.inner = inner

    def match(self, info: pd.DataFrame) -> list[str]:
        return self.inner.match(info)

    def __neg__(self) -> Selector:
        return self.inner

    def describe(self) -> str:
        return f"-{self.inner.describe()}"


class _Everything(Selector):
    def match(self, info):
        return info['variable'].tolist()

    def describe(self):
        return "everything()"


class _Filter(Selector):
    """Selects variables whose role and/or type match."""

    def __init__(self, name: str, role: str | None = None, type_: str | None = None):
        self.name = name
        self.role = role
        self.type_ = type_

    def match(self, info):
        mask = pd.Series(True, index=info.index)
        if self.role is not None:
            mask &= info['role'] == self.role
        if self.type_ is not None:
            mask &= info['type'] == self.type_
        return info.loc[mask, 'variable'].tolist()

    def describe(self):
        return self.name


class _Pattern(Selector):
    def __init__(self, kind: str, pattern: str):
        self.kind = kind
        self.pattern = pattern

    def match(self, info):
        names = info['variable'].tolist()
        if self.kind == 'starts_with':
            return [n for n in names if n.startswith(self.pattern)]
        if self.kind == 'ends_with':
            return [n for n in names if n.endswith(self.pattern)]
        if self.kind == 'contains':
            return [n for n in names if self.pattern in n]
        regex = re.compile(self.pattern)
        return [n for n in names if regex.search(n)]

    def describe(self):
        return f"{self.kind}({self.pattern!r})"


class _OneOf(Selector):
    def __init__(self, names: tuple[str, ...]):
        self.names = tuple(names)

    def match(self, info):
        known = set(info['variable'])
        missing = [n for n in self.names if n not in known]
        if missing:
            raise SelectorError(f"Unknown columns: {missing}")
        return list(self.names)

    def describe(self):
        return f"one_of({', '.join(repr(n) for n in self.names)})"


def everything() -> Selector:
    return _Everything()


def all_predictors() -> Selector:
    return _Filter("all_predictors()", role=roles.PREDICTOR)


def all_outcomes() -> Selector:
    return _Filter("all_outcomes()", role=roles.OUTCOME)


def all_numeric() -> Selector:
    return _Filter("all_numeric()", type_=roles.NUMERIC)


def all_nominal() -> Selector:
    return _Filter("all_nominal()", type_=roles.NOMINAL)


def all_numeric_predictors() -> Selector:
    return _Filter("all_numeric_predictors()", role=roles.PREDICTOR, type_=roles.NUMERIC)


def all_nominal_predictors() -> Selector:
    return _Filter("all_nominal_predictors()", role=roles.PREDICTOR, type_=roles.NOMINAL)


def has_role(role: str) -> Selector:
    return _Filter(f"has_role({role!r})", role=role)


def has_type(type_: str) -> Selector:
    return _Filter(f"has_type({type_!r})", type_=type_)


def starts_with(prefix: str) -> Selector:
    return _Pattern('starts_with', prefix)


def ends_with(suffix: str) -> Selector:
    return _Pattern('ends_with', suffix)


def contains(text: str) -> Selector:
    return _Pattern('contains', text)


def matches(regex: str) -> Selector:
    return _Pattern('matches', regex)


def one_of(*names: str) -> Selector:
    return _OneOf(names)


def _describe(term) -> str:
    if isinstance(term, str):
        return term
    if isinstance(term, tuple):
        # interaction pairs
        return ':'.join(_describe(t) for t in term)
    return term.describe()


def describe_terms(terms) -> list[str]:
    return [_describe(t) for t in terms]


def resolve(terms, info: pd.DataFrame) -> list[str]:
    """Resolve selector terms (strings or Selector objects) to column names."""
    terms = list(terms)
    if not terms:
        return []
    known = info['variable'].tolist()
    known_set = set(known)

    first = terms[0]
    selected: set[str] = set(known) if isinstance(first, Selector) and first.negated else set()
    for term in terms:
        if isinstance(term, str):
            if term not in known_set:
                raise SelectorError(f"Column {term!r} not found among {known}")
            selected.add(term)
        elif isinstance(term, Selector):
            names = term.match(info)
            if term.negated:
                selected.difference_update(names)
            else:
                selected.update(names)
        else:
            raise SelectorError(f"Unsupported selector term: {term!r}")
    return [name for name in known if name in selected]
