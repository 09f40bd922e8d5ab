"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class StorageAPIError(DomainException):
    """Storage API returned an error or is unavailable"""

    pass


class InvalidPurchaseDataError(DomainException):
    """Purchase or card data from a collaborator is malformed"""

    pass
