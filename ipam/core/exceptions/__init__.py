"""Business Exceptions

Domain-specific exceptions. Storage adapters translate their own failures
into these at the repository boundary; the HTTP layer maps each class to a
fixed status code and message.
"""


class IPAMException(Exception):
    """Base exception for IPAM"""

    pass


class NotFoundException(IPAMException):
    """Requested entity does not exist"""

    pass


class SubnetNotFoundException(NotFoundException):
    """Subnet not found"""

    pass


class IPNotFoundException(NotFoundException):
    """IP address not found"""

    pass


class InvalidInputException(IPAMException):
    """Malformed CIDR or IP, or an address outside its subnet"""

    pass


class ConflictException(IPAMException):
    """Storage rejected an insert on a uniqueness constraint"""

    pass


class UnauthorizedException(IPAMException):
    """Request carries no usable credentials"""

    pass


class InvalidTokenException(UnauthorizedException):
    """Bearer token failed verification"""

    def __init__(self, message: str = "invalid token"):
        super().__init__(message)


class ConfigurationError(IPAMException):
    """Settings are missing or inconsistent at startup"""

    pass
