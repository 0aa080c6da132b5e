from __future__ import annotations

import copy
import functools
import os
from typing import Optional

import joblib
import pandas as pd
from tqdm import tqdm

from recipekit.preprocessing import roles, selectors
from recipekit.preprocessing.errors import MissingColumnsError, NotPreparedError, RecipeError
from recipekit.preprocessing.formula import parse_formula
from recipekit.preprocessing.steps.base import STEP_REGISTRY, Step, get_step_class
from recipekit.utils.logging import get_logger

logger = get_logger(__name__)


class Recipe:
    """An ordered list of preprocessing steps plus variable roles.

    Building a recipe only records intent. `prep` estimates every step on
    training data and returns a trained copy; `bake` applies the trained steps
    to any data with the same original columns; `juice` returns the processed
    training set. Adding steps or changing roles returns a new recipe so a base
    recipe can be shared between variants::

        base = Recipe(train, formula="Class ~ .").step_normalize(all_numeric_predictors())
        pca = base.step_pca(all_numeric_predictors(), num_comp=2).prep()
        kpca = base.step_kpca(all_numeric_predictors(), num_comp=2).prep()
    """

    def __init__(self, data: pd.DataFrame, formula: Optional[str] = None,
                 outcomes: Optional[list[str]] = None, predictors: Optional[list[str]] = None):
        if not isinstance(data, pd.DataFrame):
            raise RecipeError(f"Recipe needs a pandas DataFrame, got {type(data).__name__}")
        if data.columns.duplicated().any():
            raise RecipeError(f"Duplicate column names: {data.columns[data.columns.duplicated()].tolist()}")
        if formula is not None and (outcomes or predictors):
            raise RecipeError("Use either a formula or explicit outcomes/predictors, not both")

        non_str = [c for c in data.columns if not isinstance(c, str)]
        if non_str:
            raise RecipeError(f"Column names must be strings, got {non_str}")
        columns = list(data.columns)
        if formula is not None:
            outcomes, predictors = parse_formula(formula, columns)
        role_map: dict[str, str] = {}
        for name, role in ((outcomes or [], roles.OUTCOME), (predictors or [], roles.PREDICTOR)):
            unknown = [c for c in name if c not in columns]
            if unknown:
                raise MissingColumnsError(unknown, context="template data")
            role_map.update({c: role for c in name})

        self.formula = formula
        self.template = data
        self.var_info = roles.build_var_info(data, role_map)
        self.term_info = self.var_info.copy()
        self.steps: list[Step] = []
        self.trained = False
        self.retained: Optional[pd.DataFrame] = None

    # ---------- construction ----------
    def _clone(self, deep: bool = False) -> "Recipe":
        if deep:
            # template is read-only, share it
            return copy.deepcopy(self, memo={id(self.template): self.template})
        new = copy.copy(self)
        new.steps = list(self.steps)
        return new

    def add_step(self, step: Step) -> "Recipe":
        if not isinstance(step, Step):
            raise RecipeError(f"Expected a Step, got {type(step).__name__}")
        if any(s.id == step.id for s in self.steps):
            raise RecipeError(f"Step id '{step.id}' is already used in this recipe")
        new = self._clone()
        new.steps.append(step)
        new.trained = self.trained and step.trained
        return new

    def step(self, name: str, *terms, **kwargs) -> "Recipe":
        return self.add_step(get_step_class(name)(*terms, **kwargs))

    def __getattr__(self, name: str):
        if name.startswith('step_') and name[len('step_'):] in STEP_REGISTRY:
            return functools.partial(self.step, name[len('step_'):])
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def _with_roles(self, terms, new_role: Optional[str]) -> "Recipe":
        if self.trained:
            raise RecipeError("Roles cannot change after the recipe is prepared")
        variables = selectors.resolve(terms, self.var_info)
        new = self._clone()
        new.var_info = roles.set_roles(self.var_info, variables, new_role)
        new.term_info = new.var_info.copy()
        return new

    def update_role(self, *terms, new_role: str) -> "Recipe":
        return self._with_roles(terms, new_role)

    def remove_role(self, *terms) -> "Recipe":
        return self._with_roles(terms, None)

    # ---------- prepare / bake ----------
    @property
    def original_variables(self) -> list[str]:
        return self.var_info['variable'].tolist()

    def prep(self, training: Optional[pd.DataFrame] = None, fresh: bool = False,
             retain: bool = True, verbose: bool = False) -> "Recipe":
        """Estimate every untrained step (all of them when fresh) and return a trained recipe."""
        if training is None:
            training = self.template
        missing = [c for c in self.original_variables if c not in training.columns]
        if missing:
            raise MissingColumnsError(missing, context="training data")

        new = self._clone(deep=True)
        x = training[self.original_variables].copy()
        info = new.var_info.copy()

        iterator = enumerate(new.steps, start=1)
        if verbose:
            iterator = tqdm(iterator, total=len(new.steps), desc="prep", unit="step")
        for number, step in iterator:
            if fresh or not step.trained:
                step.prep(x, info)
                if verbose:
                    logger.info(f"[+] {number}. {step.describe()}")
            x = step.bake(x)
            info = roles.update_var_info(info, x, step.role)

        new.term_info = info
        new.trained = True
        new.retained = x if retain else None
        logger.debug(f"[+] Prepared recipe with {len(new.steps)} steps on {len(training)} rows -> {x.shape[1]} columns")
        return new

    def bake(self, new_data: pd.DataFrame, *terms) -> pd.DataFrame:
        """Apply trained steps to new data; steps with skip=True are left out."""
        if not self.trained:
            raise NotPreparedError("Recipe must be prepared with prep() before baking")
        needed = self.var_info.loc[self.var_info['role'] != roles.OUTCOME, 'variable'].tolist()
        missing = [c for c in needed if c not in new_data.columns]
        if missing:
            raise MissingColumnsError(missing, context="new data")

        x = new_data[[c for c in self.original_variables if c in new_data.columns]].copy()
        for step in self.steps:
            if step.skip:
                continue
            x = step.bake(x)
        return x[self._select(terms, x.columns)]

    def juice(self, *terms) -> pd.DataFrame:
        """Processed training data kept by prep(retain=True)."""
        if not self.trained:
            raise NotPreparedError("Recipe must be prepared with prep() before juicing")
        if self.retained is None:
            raise RecipeError("Training data was not retained; use prep(retain=True) or bake() the training set")
        return self.retained[self._select(terms, self.retained.columns)].copy()

    def _select(self, terms, present) -> list[str]:
        present = set(present)
        info = self.term_info[self.term_info['variable'].isin(present)].reset_index(drop=True)
        terms = terms or (selectors.everything(),)
        return selectors.resolve(terms, info)

    # ---------- inspection ----------
    def summary(self, original: bool = False) -> pd.DataFrame:
        info = self.var_info if original or not self.trained else self.term_info
        return info.copy()

    def tidy(self, number: Optional[int] = None, id: Optional[str] = None, **kwargs) -> pd.DataFrame:
        """Overview of the steps, or the details of one step (1-based number or id)."""
        if number is None and id is None:
            return pd.DataFrame({
                'number': list(range(1, len(self.steps) + 1)),
                'operation': [s.operation for s in self.steps],
                'type': [s.step_type for s in self.steps],
                'trained': [s.trained for s in self.steps],
                'skip': [s.skip for s in self.steps],
                'id': [s.id for s in self.steps],
            })
        if number is not None:
            if not 1 <= number <= len(self.steps):
                raise RecipeError(f"number must be between 1 and {len(self.steps)}, got {number}")
            step = self.steps[number - 1]
        else:
            matching = [s for s in self.steps if s.id == id]
            if not matching:
                raise RecipeError(f"No step with id '{id}'")
            step = matching[0]
        return step.tidy(**kwargs)

    # ---------- persistence ----------
    def save(self, path: str) -> str:
        folder = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        joblib.dump(self, path)
        logger.info(f"[+] Saved recipe to {path}")
        return path

    @classmethod
    def load(cls, path: str) -> "Recipe":
        if not os.path.exists(path):
            raise FileNotFoundError(f"Missing recipe file: {path}")
        obj = joblib.load(path)
        if not isinstance(obj, cls):
            raise RecipeError(f"{path} does not contain a {cls.__name__} (found {type(obj).__name__})")
        logger.info(f"[+] Loaded recipe from {path}")
        return obj

    def __repr__(self) -> str:
        counts = self.var_info['role'].fillna('undeclared role').value_counts(sort=False)
        lines = ['Recipe', '', 'Inputs:', '']
        width = max([len('role')] + [len(r) for r in counts.index])
        lines.append(f"  {'role':>{width}} #variables")
        for role, n in counts.items():
            lines.append(f"  {role:>{width}} {n:>10}")
        if self.steps:
            lines += ['', 'Operations:', '']
            lines += [f"{i}. {s.describe()}" for i, s in enumerate(self.steps, start=1)]
        return '\n'.join(lines)
