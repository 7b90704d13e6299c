"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidWindowError(DomainException):
    """Upcoming-items window is not one of all/week/month"""

    pass


class PaymentTooSmallError(DomainException):
    """Monthly payment does not cover the interest charged"""

    pass


class InvalidCredentialsError(DomainException):
    """Identity provider rejected the bearer credential"""

    pass


class IdentityProviderError(DomainException):
    """Identity provider timed out, errored, or returned an unusable payload"""

    pass
