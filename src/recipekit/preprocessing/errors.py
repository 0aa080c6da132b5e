class RecipeError(ValueError):
    """Base error for recipe construction, preparation and baking."""


class SelectorError(RecipeError):
    pass


class FormulaError(RecipeError):
    pass


class MissingColumnsError(RecipeError):
    def __init__(self, missing, context: str = "data"):
        self.missing = list(missing)
        super().__init__(f"Columns missing from {context}: {self.missing}")


class CheckError(RecipeError):
    pass


class NotPreparedError(RecipeError, RuntimeError):
    pass
