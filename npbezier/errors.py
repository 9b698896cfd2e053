# npbezier/errors.py
# MIT License
# Created on 2025-10-02
# Last update: 2025-10-19

"""
Exceptions raised by the curve evaluation.

InvalidArgumentError derives from ValueError and DegenerateGeometryError from
ArithmeticError so that callers can catch the builtin types.
"""

__all__ = ['InvalidArgumentError', 'DegenerateGeometryError']


class InvalidArgumentError(ValueError):
    """Bad input: non positive steps or sampling, too few points, empty LUT..."""
    pass


class DegenerateGeometryError(ArithmeticError):
    """The geometry doesn't define the requested value (null tangent for instance)."""
    pass
