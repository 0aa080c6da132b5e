"""Housing example: the roles a model formula implies, then the same design
matrix built as an explicit, re-usable recipe."""
import os

from recipekit import Recipe, all_nominal_predictors, all_numeric_predictors, all_outcomes, starts_with
from recipekit.argparsers import BaseParser
from recipekit.configs import housing
from recipekit.dataservice import DataService, load_csv, make_housing
from recipekit.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_recipe(train):
    return (
        Recipe(train, formula=f"{housing.OUTCOME_COLUMN} ~ .")
        .step_log(all_outcomes(), base=10, skip=True)
        .step_other("Neighborhood", threshold=0.05)
        .step_dummy(all_nominal_predictors())
        .step_interact(("Gr_Liv_Area", starts_with("Bldg_Type_")))
        .step_normalize(all_numeric_predictors())
    )


def main():
    parser = BaseParser("Formula vs recipe on the housing table")
    parser.add_deck_arguments(housing.REPORT_FOLDER)
    args = parser.parse_args()
    setup_logging(args.log_level)

    if args.data:
        df = load_csv(args.data)
    else:
        df = make_housing(random_state=args.seed)
    if housing.OUTCOME_COLUMN not in df.columns:
        raise SystemExit(f"Outcome column '{housing.OUTCOME_COLUMN}' not found in data")
    DataService.info_dataset(df)

    train, test = DataService.split_data(df, strata=housing.OUTCOME_COLUMN, random_state=args.seed)
    logger.info(f"[+] Train: {train.shape}, test: {test.shape}")

    rec = build_recipe(train)
    logger.info(f"[+] Roles implied by the formula:\n{rec.summary()}")
    logger.info(f"\n{rec}")

    trained = rec.prep(train, verbose=args.log_level == 'DEBUG')
    logger.info(f"\n{trained}")
    logger.info(f"[+] Steps:\n{trained.tidy()}")
    logger.info(f"[+] Neighborhood levels kept by step_other:\n{trained.tidy(number=2)}")

    train_x = trained.juice()
    test_x = trained.bake(test)
    logger.info(f"[+] Processed train: {train_x.shape} (outcome on log10 scale)")
    logger.info(f"[+] Processed test: {test_x.shape} (skip=True keeps the raw outcome)")
    logger.info(f"[+] Predictors only: {trained.bake(test, all_numeric_predictors()).shape}")

    out_path = trained.save(os.path.join(args.out_dir, "housing_recipe.joblib"))
    logger.info(f"[+] Done. Prepared recipe at {out_path}")


if __name__ == "__main__":
    main()
