"""Segmentation example: PCA and kernel PCA from one shared base recipe."""
import os

from recipekit import Recipe, all_numeric_predictors
from recipekit.argparsers import BaseParser
from recipekit.configs import defaults, segmentation
from recipekit.dataservice import load_csv, make_segmentation
from recipekit.eval import plot_projection
from recipekit.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def main():
    parser = BaseParser("PCA vs kernel PCA projections on the segmentation table")
    parser.add_deck_arguments(segmentation.REPORT_FOLDER)
    parser.add_argument("--gamma", type=float, default=defaults.KPCA_GAMMA, help="RBF kernel width for kernel PCA")
    args = parser.parse_args()
    setup_logging(args.log_level)

    df = load_csv(args.data) if args.data else make_segmentation(random_state=args.seed)
    if segmentation.CASE_COLUMN not in df.columns:
        raise SystemExit(f"Case column '{segmentation.CASE_COLUMN}' with Train/Test rows not found in data")
    train = df[df[segmentation.CASE_COLUMN] == 'Train']
    test = df[df[segmentation.CASE_COLUMN] == 'Test']
    if train.empty or test.empty:
        raise SystemExit("Data needs both Train and Test rows in the Case column")

    base = (
        Recipe(train, formula=f"{segmentation.CLASS_COLUMN} ~ .")
        .update_role(segmentation.CASE_COLUMN, new_role="split")
        .step_yeojohnson(all_numeric_predictors())
        .step_normalize(all_numeric_predictors())
    )
    pca = base.step_pca(all_numeric_predictors(), num_comp=2).prep()
    kpca = base.step_kpca(all_numeric_predictors(), num_comp=2, gamma=args.gamma).prep()
    logger.info(f"[+] PCA variance:\n{pca.tidy(number=3, type='variance')}")

    for name, trained, (x, y) in (("pca", pca, ("PC1", "PC2")), ("kpca", kpca, ("kPC1", "kPC2"))):
        projected = trained.bake(test)
        plot_projection(projected, x, y, segmentation.CLASS_COLUMN,
                        os.path.join(args.out_dir, f"{name}_test.png"), title=f"{name.upper()} (test set)")
        logger.info(f"[+] {name}: test projected to {projected.shape}")

    logger.info(f"[+] Done. Figures in {args.out_dir}")


if __name__ == "__main__":
    main()
