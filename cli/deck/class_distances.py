"""Segmentation example: distances to the PS / WS class centroids as new predictors."""
import os

from recipekit import Recipe, all_numeric_predictors
from recipekit.argparsers import BaseParser
from recipekit.configs import segmentation
from recipekit.dataservice import load_csv, make_segmentation
from recipekit.eval import plot_projection
from recipekit.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def main():
    parser = BaseParser("Class centroid distances on the segmentation table")
    parser.add_deck_arguments(segmentation.REPORT_FOLDER)
    parser.add_argument("--pool", action="store_true", help="Use one pooled covariance matrix")
    args = parser.parse_args()
    setup_logging(args.log_level)

    df = load_csv(args.data) if args.data else make_segmentation(random_state=args.seed)
    if segmentation.CASE_COLUMN not in df.columns:
        raise SystemExit(f"Case column '{segmentation.CASE_COLUMN}' with Train/Test rows not found in data")
    train = df[df[segmentation.CASE_COLUMN] == 'Train']
    test = df[df[segmentation.CASE_COLUMN] == 'Test']
    if train.empty or test.empty:
        raise SystemExit("Data needs both Train and Test rows in the Case column")

    trained = (
        Recipe(train, formula=f"{segmentation.CLASS_COLUMN} ~ .")
        .update_role(segmentation.CASE_COLUMN, new_role="split")
        .step_yeojohnson(all_numeric_predictors())
        .step_classdist(all_numeric_predictors(), class_col=segmentation.CLASS_COLUMN, pool=args.pool)
        .prep()
    )
    logger.info(f"[+] Class centroids:\n{trained.tidy(number=2)}")

    levels = list(trained.steps[-1].objects)
    if len(levels) < 2:
        raise SystemExit(f"Need at least two classes in '{segmentation.CLASS_COLUMN}', found {levels}")
    x, y = (f"classdist_{level}" for level in levels[:2])
    projected = trained.bake(test)
    plot_projection(projected, x, y, segmentation.CLASS_COLUMN,
                    os.path.join(args.out_dir, "classdist_test.png"), title="Log distance to class centroids")
    logger.info(f"[+] Done. Figure in {args.out_dir}")


if __name__ == "__main__":
    main()
