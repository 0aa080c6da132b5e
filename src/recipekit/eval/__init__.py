from .plots import plot_density_comparison, plot_projection, plot_step_lambdas

__all__ = ['plot_projection', 'plot_density_comparison', 'plot_step_lambdas']
