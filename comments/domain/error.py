"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationFailedError(DomainError):
    """Raised when a submission fails validation.

    Carries every failure found, keyed by the field it belongs to, so the
    caller can surface them together.
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        summary = "; ".join(
            f"{field}: {message}"
            for field, messages in errors.items()
            for message in messages
        )
        super().__init__(f"Validation failed: {summary}")


class NotAuthorizedError(DomainError):
    """Raised when an actor attempts to modify content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str | None):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id or 'guest'} is not authorized to modify "
            f"{resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
