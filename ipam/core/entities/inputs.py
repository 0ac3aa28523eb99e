"""Operation inputs accepted by the network service.

Values are raw strings as received from callers; parsing and validation
belong to the service.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CreateSubnetInput:
    cidr: str
    description: str = ""


@dataclass(frozen=True)
class CreateIPInput:
    ip: str
    hostname: str = ""


@dataclass(frozen=True)
class UpdateIPInput:
    hostname: str
