"""Public API for dynparam.

Dynamically scoped parameters: guarded callable cells and a combinator that
rebinds them for the duration of a call.
"""

# Parameters
from .parameter import (
    Parameter,
    make_parameter,
    is_parameter,
)

# Scoped rebinding
from .scope import (
    parameterize,
    parameterize_async,
    parameterized,
)

# Guards
from .guards import (
    identity,
    instance_of,
    one_of,
    bounded,
    as_array,
    chain,
)

# Errors
from .errors import (
    ParameterError,
    InvalidGuardError,
    InvalidArgumentError,
    ValidationError,
)

# Version
try:
    from importlib.metadata import version
    __version__ = version("dynparam")
except Exception:
    __version__ = "0.1.0"

# Public API Export List
__all__ = [
    # Parameters
    "Parameter",
    "make_parameter",
    "is_parameter",

    # Scoped rebinding
    "parameterize",
    "parameterize_async",
    "parameterized",

    # Guards
    "identity",
    "instance_of",
    "one_of",
    "bounded",
    "as_array",
    "chain",

    # Errors
    "ParameterError",
    "InvalidGuardError",
    "InvalidArgumentError",
    "ValidationError",

    # Version
    "__version__",
]
