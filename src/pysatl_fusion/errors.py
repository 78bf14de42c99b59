"""
Error definitions for PySATL Fusion.

All errors derive from :class:`FusionError` and additionally from the builtin
exception a caller would naturally catch (mostly :class:`ValueError`).
"""

from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class FusionError(Exception):
    """Base class for all PySATL Fusion errors."""


class InvalidParameterError(FusionError, ValueError):
    """
    Raised when distribution parameters are invalid.

    The typical cause is a non-positive (or non-finite) standard deviation
    passed to evaluation or node creation.
    """


class InsufficientParentsError(FusionError, ValueError):
    """
    Raised when a fusion is requested with fewer than two resolvable parents.

    The graph is left unchanged when this error is raised.
    """


class InvalidSampleCountError(FusionError, ValueError):
    """Raised when a sampling routine receives an unusable number of points."""


class DecodeError(FusionError, ValueError):
    """
    Raised when a snapshot cannot be decoded.

    Parameters
    ----------
    message : str
        Human-readable explanation of what is wrong with the input.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DerivedNodeError(FusionError, TypeError):
    """Raised on an attempt to assign parameters of a product node directly."""


__all__ = [
    "FusionError",
    "InvalidParameterError",
    "InsufficientParentsError",
    "InvalidSampleCountError",
    "DecodeError",
    "DerivedNodeError",
]
