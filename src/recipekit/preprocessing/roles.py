import pandas as pd
from pandas.api import types as ptypes

NUMERIC = 'numeric'
NOMINAL = 'nominal'
LOGICAL = 'logical'
DATE = 'date'

OUTCOME = 'outcome'
PREDICTOR = 'predictor'

ORIGINAL = 'original'
DERIVED = 'derived'

INFO_COLUMNS = ['variable', 'type', 'role', 'source']


def infer_type(series: pd.Series) -> str:
    if ptypes.is_bool_dtype(series):
        return LOGICAL
    if ptypes.is_numeric_dtype(series):
        return NUMERIC
    if ptypes.is_datetime64_any_dtype(series):
        return DATE
    return NOMINAL


def _clean_roles(roles) -> list:
    # unassigned roles stay None, never NaN
    return [r if isinstance(r, str) else None for r in roles]


def _frame(rows: list[dict]) -> pd.DataFrame:
    out = pd.DataFrame(rows, columns=INFO_COLUMNS)
    out['role'] = pd.Series(_clean_roles(out['role']), index=out.index, dtype=object)
    return out


def build_var_info(df: pd.DataFrame, roles: dict | None = None, source: str = ORIGINAL) -> pd.DataFrame:
    """Variable-info table for every column of df; roles maps column -> role."""
    roles = roles or {}
    rows = [
        {
            'variable': col,
            'type': infer_type(df[col]),
            'role': roles.get(col),
            'source': source,
        }
        for col in df.columns
    ]
    return _frame(rows)


def update_var_info(info: pd.DataFrame, df: pd.DataFrame, new_role: str | None) -> pd.DataFrame:
    """Sync the info table with the columns of df after a step ran.

    Columns that disappeared are dropped, surviving columns get a refreshed type
    and columns not seen before are added as derived with new_role.
    """
    known = {row.variable: row for row in info.itertuples(index=False)}
    rows = []
    for col in df.columns:
        if col in known:
            row = known[col]
            rows.append({'variable': col, 'type': infer_type(df[col]), 'role': row.role, 'source': row.source})
        else:
            rows.append({'variable': col, 'type': infer_type(df[col]), 'role': new_role, 'source': DERIVED})
    return _frame(rows)


def set_roles(info: pd.DataFrame, variables: list[str], new_role: str | None) -> pd.DataFrame:
    selected = set(variables)
    rows = [
        {
            'variable': row.variable,
            'type': row.type,
            'role': new_role if row.variable in selected else row.role,
            'source': row.source,
        }
        for row in info.itertuples(index=False)
    ]
    return _frame(rows)
