"""Domain Entities

Pure business objects without framework dependencies.
"""

from .inputs import CreateIPInput, CreateSubnetInput, UpdateIPInput
from .ip_address import IPAddress, IPAddressValue
from .subnet import IPNetwork, Subnet

__all__ = [
    "CreateIPInput",
    "CreateSubnetInput",
    "IPAddress",
    "IPAddressValue",
    "IPNetwork",
    "Subnet",
    "UpdateIPInput",
]
