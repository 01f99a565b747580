"""Custom exceptions for DRV Estimator."""


class PensionEstimatorError(Exception):
    """Base exception for all DRV Estimator errors."""

    pass


class PreconditionViolation(PensionEstimatorError):
    """The engine was called with inputs the caller should have rejected.

    This is a programming-contract error. The computation is aborted and no
    result is produced.
    """

    pass


class ConfigurationError(PensionEstimatorError):
    """Configuration is incomplete or inconsistent."""

    pass


class ValidationError(PensionEstimatorError):
    """User input validation error."""

    pass


class PersonValidationError(ValidationError):
    """Person data failed one or more plausibility checks."""

    def __init__(self, issues):
        self.issues = list(issues)
        message = "; ".join(issue.message for issue in self.issues)
        super().__init__(message or "Ungültige Eingaben")
