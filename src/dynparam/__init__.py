"""dynparam: opt-in dynamic scope for Python.

Parameters are guarded, callable cells. parameterize rebinds a set of them
while a body runs and restores the previous values afterwards, so code deep
in the call stack can read configuration without threading it through every
signature.
"""

# Export the public API
from .api import *  # noqa: F403, F401
from .api import __all__, __version__  # noqa: F401
