import re

from recipekit.preprocessing.errors import FormulaError

_NAME = re.compile(r'^[A-Za-z_.][A-Za-z0-9_.]*$')


def _split_terms(side: str) -> list[tuple[str, str]]:
    """Split 'a + b - c' into [('+', 'a'), ('+', 'b'), ('-', 'c')]."""
    side = side.strip()
    if not side:
        return []
    tokens = re.split(r'\s*([+-])\s*', side)
    terms = []
    if tokens[0] == '':
        tokens = tokens[1:]
    else:
        tokens = ['+'] + tokens
    for i in range(0, len(tokens), 2):
        sign = tokens[i]
        if i + 1 >= len(tokens) or not tokens[i + 1]:
            raise FormulaError(f"Dangling operator {sign!r} in formula side {side!r}")
        terms.append((sign, tokens[i + 1].strip()))
    return terms


def _check_name(term: str, columns: list[str]) -> None:
    if term == '.':
        return
    if not _NAME.match(term):
        raise FormulaError(
            f"Term {term!r} is not a plain column name; inline functions and interactions belong in steps"
        )
    if term not in columns:
        raise FormulaError(f"Formula term {term!r} is not a column of the data")


def parse_formula(formula: str, columns: list[str]) -> tuple[list[str], list[str]]:
    """Return (outcomes, predictors) for a formula like 'y ~ a + b' or 'y ~ . - id'."""
    if formula.count('~') != 1:
        raise FormulaError(f"Formula must contain exactly one '~': {formula!r}")
    lhs, rhs = formula.split('~')
    columns = list(columns)

    outcomes = []
    for sign, term in _split_terms(lhs):
        if sign == '-' or term == '.':
            raise FormulaError(f"Only added column names are allowed left of '~': {formula!r}")
        _check_name(term, columns)
        if term not in outcomes:
            outcomes.append(term)

    rhs_terms = _split_terms(rhs)
    if not rhs_terms:
        raise FormulaError(f"Formula has no predictors: {formula!r}")

    selected: list[str] = []
    for sign, term in rhs_terms:
        _check_name(term, columns)
        names = [c for c in columns if c not in outcomes] if term == '.' else [term]
        if sign == '+':
            selected.extend(n for n in names if n not in selected)
        else:
            selected = [n for n in selected if n not in names]

    # column order, not formula order
    predictors = [c for c in columns if c in selected]
    return outcomes, predictors
