from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Optional

import pandas as pd

from recipekit.preprocessing import roles, selectors
from recipekit.preprocessing.errors import MissingColumnsError, NotPreparedError, RecipeError
from recipekit.utils.logging import get_logger

logger = get_logger(__name__)

STEP_REGISTRY: dict[str, type["Step"]] = {}


def register_step(name: str):
    """Class decorator: make a step reachable as `Recipe.step_<name>(...)`."""
    def decorator(cls):
        if name in STEP_REGISTRY and STEP_REGISTRY[name] is not cls:
            logger.warning(f"[-] Step '{name}' re-registered by {cls.__name__}")
        cls.step_type = name
        STEP_REGISTRY[name] = cls
        return cls
    return decorator


def get_step_class(name: str) -> type["Step"]:
    try:
        return STEP_REGISTRY[name]
    except KeyError:
        raise RecipeError(f"Unknown step '{name}'. Registered steps: {sorted(STEP_REGISTRY)}") from None


def names0(num: int, prefix: str) -> list[str]:
    """Component names zero-padded to a common width: PC1..PC9, PC01..PC12."""
    width = len(str(num))
    return [f"{prefix}{str(i).zfill(width)}" for i in range(1, num + 1)]


class Step(ABC):
    """One preprocessing operation inside a recipe.

    Subclasses implement:
    - _fit: estimate parameters from the training frame (self.columns is resolved)
    - _transform: apply them to a copy of new data
    - _tidy: return a frame with a `terms` column plus step-specific values

    Optional:
    - accepts: tuple of variable types the selected columns must have
    - required_columns: columns that must exist at bake time
    """

    step_type = 'step'
    operation = 'step'
    accepts: Optional[tuple[str, ...]] = None

    def __init__(self, *terms, role: Optional[str] = roles.PREDICTOR, skip: bool = False, id: Optional[str] = None):
        self.terms = list(terms)
        self.role = role
        self.skip = skip
        self.trained = False
        self.columns: list[str] = []
        self.id = id or f"{self.step_type}_{uuid.uuid4().hex[:5]}"

    # ---------- lifecycle ----------
    def prep(self, training: pd.DataFrame, info: pd.DataFrame) -> "Step":
        self.columns = selectors.resolve(self.terms, info)
        if not self.columns:
            logger.debug(f"[+] {self.id}: selection is empty, step is a no-op")
        self._check_types(info)
        self._fit(training, info)
        self._check_new_names(info)
        self.trained = True
        return self

    def bake(self, new_data: pd.DataFrame) -> pd.DataFrame:
        if not self.trained:
            raise NotPreparedError(f"Step {self.id} must be prepared before it can be baked")
        missing = [c for c in self.required_columns() if c not in new_data.columns]
        if missing:
            raise MissingColumnsError(missing, context=f"data baked by {self.id}")
        return self._transform(new_data.copy())

    def tidy(self) -> pd.DataFrame:
        if not self.trained:
            out = pd.DataFrame({'terms': selectors.describe_terms(self.terms)})
        else:
            out = self._tidy()
        out['id'] = self.id
        return out.reset_index(drop=True)

    def required_columns(self) -> list[str]:
        return list(self.columns)

    def new_columns(self) -> list[str]:
        """Columns this step adds to the data."""
        return []

    def dropped_columns(self) -> list[str]:
        """Columns this step removes from the data."""
        return []

    # ---------- hooks ----------
    def _check_types(self, info: pd.DataFrame) -> None:
        if self.accepts is None or not self.columns:
            return
        types = info.set_index('variable').loc[self.columns, 'type']
        bad = types[~types.isin(self.accepts)]
        if not bad.empty:
            raise RecipeError(
                f"Step {self.step_type} needs {list(self.accepts)} columns; got {dict(bad)}"
            )

    def _check_new_names(self, info: pd.DataFrame) -> None:
        created = self.new_columns()
        kept = set(info['variable']) - set(self.dropped_columns())
        clash = sorted({c for c in created if c in kept} | {c for c in created if created.count(c) > 1})
        if clash:
            raise RecipeError(f"Name collision occurred in {self.id}; columns already exist: {clash}")

    @abstractmethod
    def _fit(self, training: pd.DataFrame, info: pd.DataFrame) -> None:
        raise NotImplementedError

    @abstractmethod
    def _transform(self, data: pd.DataFrame) -> pd.DataFrame:
        raise NotImplementedError

    def _tidy(self) -> pd.DataFrame:
        return pd.DataFrame({'terms': self.columns})

    # ---------- display ----------
    def label(self) -> str:
        return self.step_type.replace('_', ' ').capitalize()

    def describe(self) -> str:
        what = ', '.join(self.columns) if self.trained else ', '.join(selectors.describe_terms(self.terms))
        suffix = ' [trained]' if self.trained else ''
        skip = ' [skip]' if self.skip else ''
        return f"{self.label()} for {what or '<none>'}{suffix}{skip}"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"
