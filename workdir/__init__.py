"""workdir - a working directory object whose registered files follow it around."""

from workdir.core import *  # noqa: F401,F403
from workdir.core import __all__

__version__ = "0.1.0"
