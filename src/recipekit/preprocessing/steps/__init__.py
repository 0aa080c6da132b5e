from .base import STEP_REGISTRY, Step, get_step_class, register_step
from .scaling import StepCenter, StepNormalize, StepRange, StepScale
from .transforms import StepBoxCox, StepLog, StepYeoJohnson
from .imputation import StepImputeMean, StepImputeMedian, StepImputeMode
from .encoding import StepDummy, StepInteract, StepOther
from .filters import StepCorr, StepNzv, StepRm, StepZv
from .projection import StepKpca, StepPca
from .classdist import StepClassdist
from .checks import StepCheckMissing

__all__ = [
    'STEP_REGISTRY',
    'Step',
    'get_step_class',
    'register_step',
    'StepCenter',
    'StepScale',
    'StepNormalize',
    'StepRange',
    'StepLog',
    'StepBoxCox',
    'StepYeoJohnson',
    'StepImputeMean',
    'StepImputeMedian',
    'StepImputeMode',
    'StepOther',
    'StepDummy',
    'StepInteract',
    'StepZv',
    'StepNzv',
    'StepCorr',
    'StepRm',
    'StepPca',
    'StepKpca',
    'StepClassdist',
    'StepCheckMissing',
]
