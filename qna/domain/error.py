"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed input (too-short title, empty tag list, too many tags...)."""

    pass


class InvalidArgumentError(ValidationError):
    """An argument is well-formed but refers to something it cannot.

    Raised for negative answer counts and for accepting an answer that
    belongs to a different question.
    """

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class PermissionDeniedError(DomainError):
    """Raised when a user attempts an action reserved to someone else."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not allowed to {action} {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """A concurrent write hit a uniqueness invariant.

    The operation did not take effect and can be retried.
    """

    pass


class TransientError(DomainError):
    """The backing store is unavailable. Safe to retry the whole operation."""

    pass
