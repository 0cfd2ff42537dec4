"""Exceptions raised by the role registry and the assignment engine."""


class RoleNotFoundError(LookupError):
    """Raised when a role id is not present in the registry."""

    def __init__(self, role_id: str):
        self.role_id = role_id
        super().__init__(f'Role with ID "{role_id}" not found in registry')


class AssignmentError(ValueError):
    """Raised when assignment inputs are rejected before any shuffling."""


class AssignmentIntegrityError(AssignmentError):
    """Raised when a produced assignment does not match its configuration.

    A mismatch between requested and realized role counts must never reach
    the reveal screen, so this is always fatal to the operation.
    """
