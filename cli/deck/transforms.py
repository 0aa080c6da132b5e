"""Segmentation example: Box-Cox vs Yeo-Johnson on skewed predictors."""
import os

from recipekit import Recipe, all_numeric_predictors
from recipekit.argparsers import BaseParser
from recipekit.configs import segmentation
from recipekit.dataservice import DataService, load_csv, make_segmentation
from recipekit.eval import plot_density_comparison, plot_step_lambdas
from recipekit.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def main():
    parser = BaseParser("Box-Cox and Yeo-Johnson transformations on the segmentation table")
    parser.add_deck_arguments(segmentation.REPORT_FOLDER)
    parser.add_argument("--feature", type=str, default="AvgIntenCh1", help="Column to draw before/after")
    args = parser.parse_args()
    setup_logging(args.log_level)

    df = load_csv(args.data) if args.data else make_segmentation(random_state=args.seed)
    if args.feature not in df.columns:
        raise SystemExit(f"Feature '{args.feature}' not found in data")
    if segmentation.CLASS_COLUMN not in df.columns:
        raise SystemExit(f"Class column '{segmentation.CLASS_COLUMN}' not found in data")
    has_case = segmentation.CASE_COLUMN in df.columns
    train = df[df[segmentation.CASE_COLUMN] == 'Train'] if has_case else df
    DataService.info_dataset(train, segmentation.CLASS_COLUMN)

    base = Recipe(train, formula=f"{segmentation.CLASS_COLUMN} ~ .")
    if has_case:
        base = base.update_role(segmentation.CASE_COLUMN, new_role="split")

    for name in ("boxcox", "yeojohnson"):
        trained = base.step(name, all_numeric_predictors()).prep()
        lambdas = trained.tidy(number=1)
        logger.info(f"[+] {name} lambdas:\n{lambdas}")
        baked = trained.juice()
        plot_density_comparison(
            train[args.feature], baked[args.feature], args.feature,
            os.path.join(args.out_dir, f"{name}_{args.feature}.png"),
        )
        plot_step_lambdas(lambdas, os.path.join(args.out_dir, f"{name}_lambdas.png"), title=f"{name} lambdas")

    logger.info(f"[+] Done. Figures in {args.out_dir}")


if __name__ == "__main__":
    main()
