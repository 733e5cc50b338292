"""Parameter models for the Basu-Dhar bivariate geometric distribution.

``Theta`` holds (theta1, theta2, theta3) and ``CureFractions`` holds the
mixing weights (phi11, phi10, phi01, phi00) of the cure-fraction model.
Both are immutable pydantic models; bounds are checked on construction and
reported as ``ParameterDomainError`` naming the offending parameter.
"""

from typing import Any, Dict, Iterable, Tuple, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParameterDomainError

PHI_SUM_TOLERANCE = 1e-9

THETA_NAMES = ('theta1', 'theta2', 'theta3')
PHI_NAMES = ('phi11', 'phi10', 'phi01', 'phi00')


def _open_unit(name: str, v: float) -> float:
    if not (0.0 < v < 1.0):
        raise ValueError(f"{name} must lie in (0, 1), got {v}")
    return v


class Theta(BaseModel):
    """Parameters of the base distribution.

    theta1 and theta2 are the marginal "survival" probabilities of the
    individual shocks and theta3 that of the common shock. theta3 = 1
    gives independent geometric margins.
    """
    model_config = ConfigDict(frozen=True)

    theta1: float
    theta2: float
    theta3: float

    @field_validator('theta1', 'theta2')
    @classmethod
    def validate_open_unit(cls, v, info):
        return _open_unit(info.field_name, v)

    @field_validator('theta3')
    @classmethod
    def validate_theta3(cls, v):
        if not (0.0 < v <= 1.0):
            raise ValueError(f"theta3 must lie in (0, 1], got {v}")
        return v

    @property
    def gamma1(self) -> float:
        """theta1 * theta3, the survival probability of X per step."""
        return self.theta1 * self.theta3

    @property
    def gamma2(self) -> float:
        """theta2 * theta3, the survival probability of Y per step."""
        return self.theta2 * self.theta3

    @property
    def gamma3(self) -> float:
        return self.theta1 * self.theta2 * self.theta3

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.theta1, self.theta2, self.theta3)


class CureFractions(BaseModel):
    """Mixing weights of the cure-fraction model.

    phi11 is the share of units susceptible in both components, phi10 and
    phi01 the shares susceptible in only X or only Y, and phi00 the share
    cured in both.
    """
    model_config = ConfigDict(frozen=True)

    phi11: float
    phi10: float
    phi01: float
    phi00: float

    @field_validator('phi11', 'phi10', 'phi01', 'phi00')
    @classmethod
    def validate_open_unit(cls, v, info):
        return _open_unit(info.field_name, v)

    @model_validator(mode='after')
    def validate_total(self):
        total = self.phi11 + self.phi10 + self.phi01 + self.phi00
        if abs(total - 1.0) > PHI_SUM_TOLERANCE:
            raise ValueError(f"phi11 + phi10 + phi01 + phi00 must equal 1, got {total}")
        return self

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.phi11, self.phi10, self.phi01, self.phi00)


def _raise_domain_error(exc: PydanticValidationError, default_name: str) -> None:
    """Translate the first pydantic error into a ParameterDomainError."""
    error = exc.errors()[0]
    name = str(error['loc'][0]) if error.get('loc') else default_name
    reason = error.get('ctx', {}).get('error', error['msg'])
    raise ParameterDomainError(
        f"{name} out of bounds: {reason}",
        parameter_name=name,
        parameter_value=error.get('input'),
    ) from exc


def _named_values(values: Any, names: Tuple[str, ...], label: str) -> Dict[str, Any]:
    if isinstance(values, dict):
        return values
    if isinstance(values, (str, bytes)):
        raise ParameterDomainError(
            f"{label} must be a sequence of {len(names)} numbers",
            parameter_name=label,
            parameter_value=values,
        )
    try:
        flat = list(np.ravel(np.asarray(values, dtype=float)))
    except (TypeError, ValueError) as exc:
        raise ParameterDomainError(
            f"{label} must be a sequence of {len(names)} numbers",
            parameter_name=label,
            parameter_value=values,
        ) from exc
    if len(flat) != len(names):
        raise ParameterDomainError(
            f"{label} must have {len(names)} components, got {len(flat)}",
            parameter_name=label,
            parameter_value=values,
        )
    return dict(zip(names, flat))


def validate_theta(theta: Union[Theta, Iterable[float], Dict[str, float]]) -> Theta:
    """Coerce ``theta`` into a validated ``Theta``.

    Args:
        theta: A ``Theta``, a sequence (theta1, theta2, theta3) or a mapping

    Returns:
        Validated parameters

    Raises:
        ParameterDomainError: If a component is missing or out of bounds
    """
    if isinstance(theta, Theta):
        return theta
    try:
        return Theta(**_named_values(theta, THETA_NAMES, 'theta'))
    except PydanticValidationError as exc:
        _raise_domain_error(exc, 'theta')


def validate_phi(phi: Union[CureFractions, Iterable[float], Dict[str, float]]) -> CureFractions:
    """Coerce ``phi`` into validated ``CureFractions``."""
    if isinstance(phi, CureFractions):
        return phi
    try:
        return CureFractions(**_named_values(phi, PHI_NAMES, 'phi'))
    except PydanticValidationError as exc:
        _raise_domain_error(exc, 'phi')


def validate_phi11(phi11: Any) -> float:
    """Validate the single mixing weight used by the cure-fraction pmf."""
    if phi11 is None:
        raise ParameterDomainError(
            "phi11 is required", parameter_name='phi11', parameter_value=None
        )
    try:
        value = float(phi11)
    except (TypeError, ValueError) as exc:
        raise ParameterDomainError(
            f"phi11 must be a number, got {phi11!r}",
            parameter_name='phi11',
            parameter_value=phi11,
        ) from exc
    if not (0.0 < value < 1.0):
        raise ParameterDomainError(
            f"phi11 out of bounds: must lie in (0, 1), got {value}",
            parameter_name='phi11',
            parameter_value=value,
            bound='(0, 1)',
        )
    return value
