from .preprocessing import *  # noqa: F401,F403
from .preprocessing import __all__

__version__ = "0.3.0"
