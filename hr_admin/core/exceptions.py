class HRAdminError(Exception):
    """Base exception for employee persistence failures."""


class EmployeeNotFoundError(HRAdminError, LookupError):
    """Raised when an update or delete targets an unknown employee."""

    def __init__(self, employee_id):
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id} not found")


class EmployeeIdGenerationError(HRAdminError):
    """Raised when the employee number sequence yields no usable value."""


class CredentialPreparationError(HRAdminError):
    """Raised when a temporary password cannot be hashed."""
