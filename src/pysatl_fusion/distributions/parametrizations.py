"""
Parametrizations of the Gaussian distribution.

This module provides the declarative parametrization machinery (constraint
validation and conversion to the base parametrization) together with the two
views of a Gaussian used by the fusion engine:

- :class:`MeanStd`: mean and standard deviation (base parametrization);
- :class:`MeanPrec`: mean and precision (inverse variance), the natural
  coordinates for precision-weighted fusion.
"""

from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ParamSpec

from pysatl_fusion.errors import InvalidParameterError

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Constraint on parameter values for a parametrization.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    check : Callable[[Any], bool]
        Validation function that returns True if constraint is satisfied.
    """

    description: str
    check: Callable[[Any], bool]


class Parametrization(ABC):
    """
    Abstract base class for Gaussian parametrizations.

    Defines parameter validation and conversion to the base parametrization.
    """

    # Set by the @parametrization decorator
    __param_name__: ClassVar[str]

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    @property
    def name(self) -> str:
        """Get the name of this parametrization."""
        return self.__class__.__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Get parameters as a dictionary."""
        fields = getattr(self, "__dataclass_fields__", None)
        if fields:
            return {f: getattr(self, f) for f in fields}
        ann = getattr(self, "__annotations__", {})
        return {k: getattr(self, k) for k in ann}

    def validate(self) -> None:
        """
        Validate all constraints for this parametrization.

        Raises
        ------
        InvalidParameterError
            If any constraint is not satisfied.
        """
        for constraint in self._constraints:
            if not constraint.check(self):
                raise InvalidParameterError(
                    f'Constraint "{constraint.description}" does not hold for '
                    f"{self.name} {self.parameters}"
                )

    @abstractmethod
    def transform_to_base_parametrization(self) -> MeanStd:
        """Convert this parametrization to :class:`MeanStd`."""


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Decorator to mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.

    Returns
    -------
    Callable[[Callable[P, bool]], Callable[P, bool]]
        Decorator that marks the function as a constraint.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return func(*args, **kwargs)

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def parametrization(*, name: str) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Decorator to declare a class as a named parametrization.

    Parameters
    ----------
    name : str
        Name of the parametrization.

    Notes
    -----
    Converts the class to a frozen dataclass if it is not one already and
    collects the methods marked with :func:`constraint`.
    """

    def _collect_constraints(cls: type[Parametrization]) -> list[ParametrizationConstraint]:
        constraints: list[ParametrizationConstraint] = []
        for attr_name, attr in cls.__dict__.items():
            if isinstance(attr, staticmethod | classmethod):
                raise TypeError(f"@constraint '{attr_name}' must be an instance method")

            func = attr if callable(attr) and isfunction(attr) else None
            if not func:
                continue
            if getattr(func, "__is_constraint", False):
                desc = getattr(func, "__constraint_description", func.__name__)
                constraints.append(ParametrizationConstraint(description=desc, check=func))
        return constraints

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)

        cls.__param_name__ = name
        cls._constraints = _collect_constraints(cls)
        return cls

    return decorator


@parametrization(name="meanStd")
class MeanStd(Parametrization):
    """
    Standard parametrization of the Gaussian.

    Parameters
    ----------
    mu : float
        Mean of the distribution.
    sigma : float
        Standard deviation of the distribution.
    """

    mu: float
    sigma: float

    @constraint(description="mu is finite")
    def check_mu_finite(self) -> bool:
        return math.isfinite(self.mu)

    @constraint(description="sigma > 0")
    def check_sigma_positive(self) -> bool:
        """Check that standard deviation is positive and finite."""
        return math.isfinite(self.sigma) and self.sigma > 0

    def to_precision(self, scale: float = 1.0) -> MeanPrec:
        """
        Express the same Gaussian in mean-precision coordinates.

        Parameters
        ----------
        scale : float, default 1.0
            Reference standard deviation; ``tau`` is measured in units of
            ``scale**-2``. Passing the smallest σ of a group keeps every
            ``tau`` in ``(0, 1]`` even when ``1/σ²`` is not representable.
        """
        ratio = scale / self.sigma
        return MeanPrec(mu=self.mu, tau=ratio * ratio)

    def transform_to_base_parametrization(self) -> MeanStd:
        return self


@parametrization(name="meanPrec")
class MeanPrec(Parametrization):
    """
    Mean-precision parametrization of the Gaussian.

    Parameters
    ----------
    mu : float
        Mean of the distribution.
    tau : float
        Precision (inverse variance), possibly relative to a reference scale
        (see :meth:`MeanStd.to_precision`).
    """

    mu: float
    tau: float

    @constraint(description="tau > 0")
    def check_tau_positive(self) -> bool:
        """Check that precision is positive and finite."""
        return math.isfinite(self.tau) and self.tau > 0

    def transform_to_base_parametrization(self, scale: float = 1.0) -> MeanStd:
        """
        Transform to :class:`MeanStd`.

        Parameters
        ----------
        scale : float, default 1.0
            Reference standard deviation ``tau`` is measured against.

        Returns
        -------
        MeanStd
            Equivalent mean/standard deviation parameters.
        """
        return MeanStd(mu=self.mu, sigma=scale / math.sqrt(self.tau))


__all__ = [
    "ParametrizationConstraint",
    "Parametrization",
    "MeanStd",
    "MeanPrec",
    "constraint",
    "parametrization",
]
