"""Exception hierarchy for bivgeo.

Every error carries a category, a severity, a stable error code, a context
dict and a list of recovery hints, and serializes with ``to_dict`` for
structured logging. Errors about bad input also derive from ``ValueError``.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence


class ErrorSeverity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    VALIDATION = "validation"
    COMPUTATION = "computation"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


class BivGeoError(Exception):
    """Base class of all bivgeo errors.

    Subclasses set ``default_category``, ``default_severity`` and
    ``default_suggestions``; explicit constructor arguments override them.
    """

    default_category: ErrorCategory = ErrorCategory.SYSTEM
    default_severity: ErrorSeverity = ErrorSeverity.MEDIUM
    default_suggestions: Sequence[str] = ()

    def __init__(
        self,
        message: str,
        category: Optional[ErrorCategory] = None,
        severity: Optional[ErrorSeverity] = None,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.severity = severity or self.default_severity
        self.error_code = error_code or f"BG_{type(self).__name__.upper()}"
        self.context = dict(context or {})
        self.recovery_suggestions = list(recovery_suggestions or self.default_suggestions)
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view of the error."""
        return {
            'error_code': self.error_code,
            'message': self.message,
            'category': self.category.value,
            'severity': self.severity.value,
            'context': self.context,
            'recovery_suggestions': self.recovery_suggestions,
            'exception_type': type(self).__name__,
            'cause': str(self.cause) if self.cause else None,
        }


class ValidationError(BivGeoError, ValueError):
    """A parameter or an observation is outside its domain."""

    default_category = ErrorCategory.VALIDATION
    default_suggestions = (
        "Check input values against the documented domain",
        "Verify x and y are paired observations of equal length",
    )

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Any = None,
        validation_rule: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.pop('context', None) or {}
        context.update(field_name=field_name, field_value=field_value, validation_rule=validation_rule)
        super().__init__(message, context=context, **kwargs)
        self.field_name = field_name
        self.field_value = field_value


class ParameterDomainError(ValidationError):
    """A distribution parameter violates its bound."""

    def __init__(self, message: str, parameter_name: str, parameter_value: Any,
                 bound: Optional[str] = None, **kwargs):
        kwargs.setdefault('recovery_suggestions', [
            f"Check the {parameter_name} parameter",
            "theta1 and theta2 must lie in (0, 1), theta3 in (0, 1]",
            "phi components must lie in (0, 1) and sum to 1",
        ])
        super().__init__(message, field_name=parameter_name, field_value=parameter_value,
                         validation_rule=bound, **kwargs)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ObservationError(ValidationError):
    """Observation data has the wrong shape or inadmissible values."""

    default_suggestions = (
        "Pass x and y as equal-length sequences, or a two-column table as x",
        "Observations must be integers (>= 1 for the pmf, >= 0 for cdf/sf)",
    )

    def __init__(self, message: str, field_name: str = "x", **kwargs):
        super().__init__(message, field_name=field_name, **kwargs)


class ComputationError(BivGeoError):
    """A numerical procedure failed."""

    default_category = ErrorCategory.COMPUTATION
    default_suggestions = (
        "Verify parameters are within valid ranges",
        "Report the parameters and seed that triggered the failure",
    )

    def __init__(self, message: str, operation: str, **kwargs):
        context = kwargs.pop('context', None) or {}
        context['operation'] = operation
        super().__init__(message, context=context, **kwargs)


class InversionError(ComputationError):
    """The conditional inverse-cdf search ran out of candidates."""

    default_severity = ErrorSeverity.CRITICAL
    default_suggestions = (
        "Increase max_search_steps in SamplerConfig",
        "Use the shock-model sampler as a cross-check",
    )

    def __init__(self, message: str, steps_taken: int, unresolved_draws: int, **kwargs):
        context = kwargs.pop('context', None) or {}
        context.update(steps_taken=steps_taken, unresolved_draws=unresolved_draws)
        super().__init__(message, operation="conditional_inversion", context=context, **kwargs)


class ConfigurationError(BivGeoError, ValueError):
    """A sampler configuration value is invalid."""

    default_category = ErrorCategory.CONFIGURATION
    default_suggestions = (
        "n_samples and max_search_steps must be positive",
        "method must be 'inverse' or 'shock'",
    )

    def __init__(self, message: str, config_key: Optional[str] = None,
                 config_value: Any = None, **kwargs):
        context = kwargs.pop('context', None) or {}
        context.update(config_key=config_key, config_value=config_value)
        super().__init__(message, context=context, **kwargs)


def handle_exception(
    exception: Exception,
    logger,
    context: Optional[Dict[str, Any]] = None,
    reraise: bool = True
) -> Optional[BivGeoError]:
    """Log ``exception`` as a structured error.

    Foreign exceptions are wrapped in ``BivGeoError`` with the original kept
    as ``cause``.

    Returns:
        The (possibly wrapped) error when ``reraise`` is False

    Raises:
        BivGeoError: When ``reraise`` is True
    """
    error = exception if isinstance(exception, BivGeoError) else \
        BivGeoError(str(exception), context=context, cause=exception)

    logger.error(f"{error.error_code}: {error.message}", extra={'error': error.to_dict()})

    if reraise:
        raise error
    return error
