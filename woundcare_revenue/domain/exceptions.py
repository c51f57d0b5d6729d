"""Domain-specific exceptions"""

from typing import List


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MissingProductSelectionError(DomainException):
    """No graft product was chosen for the computation"""

    def __init__(self, message: str = "missing product selection"):
        super().__init__(message)


class InvalidInputError(DomainException):
    """Numeric input is outside the range the calculators accept"""

    pass


class ProductNotFoundError(DomainException):
    """No active graft product matches the selection"""

    pass


class AmbiguousProductError(DomainException):
    """Selection matches more than one active graft product"""

    pass


class PriceTableConfigError(DomainException):
    """Graft price table failed validation at load time"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Invalid graft price table: " + "; ".join(self.errors))


class ReportRenderError(DomainException):
    """Report renderer returned an error or is unavailable"""

    pass
