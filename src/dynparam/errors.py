"""Exceptions raised by dynparam.

All package errors share ParameterError as a base. The misuse errors also
subclass TypeError and ValidationError subclasses ValueError, so callers that
only know the builtin hierarchy still catch them.
"""


class ParameterError(Exception):
    """Base class for errors raised by dynparam."""


class InvalidGuardError(ParameterError, TypeError):
    """Guard passed to make_parameter is not a one-argument callable."""


class InvalidArgumentError(ParameterError, TypeError):
    """Malformed bindings or body passed to parameterize."""


class ValidationError(ParameterError, ValueError):
    """Raised by guards when a candidate value is rejected.

    Guards are free to raise any exception; this one is what the bundled
    guards use and what guard authors are encouraged to use.
    """
