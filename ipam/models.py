"""
IPAM Data Models

Pydantic request/response models for the HTTP API
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .core.entities import CreateIPInput, CreateSubnetInput, IPAddress, Subnet, UpdateIPInput


class SubnetResponse(BaseModel):
    """Subnet as returned to clients"""

    id: int = Field(..., examples=[1])
    cidr: str = Field(..., examples=["10.0.0.0/24"])
    description: str = Field(default="", examples=["Office network"])
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, subnet: Subnet) -> "SubnetResponse":
        return cls(
            id=subnet.id,
            cidr=str(subnet.cidr),
            description=subnet.description,
            created_at=subnet.created_at,
            updated_at=subnet.updated_at,
        )


class CreateSubnetRequest(BaseModel):
    """Request to create a subnet"""

    cidr: str = Field(..., description="Network prefix", examples=["10.0.0.0/24"])
    description: str = Field(default="", examples=["Office network"])

    def to_input(self) -> CreateSubnetInput:
        return CreateSubnetInput(cidr=self.cidr, description=self.description)


class IPResponse(BaseModel):
    """IP address as returned to clients"""

    id: str = Field(..., examples=["550e8400-e29b-41d4-a716-446655440000"])
    ip: str = Field(..., examples=["10.0.0.1"])
    hostname: str = Field(default="", examples=["printer-1"])
    subnet_id: int = Field(..., examples=[4])
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, ip: IPAddress) -> "IPResponse":
        return cls(
            id=ip.id,
            ip=str(ip.ip),
            hostname=ip.hostname,
            subnet_id=ip.subnet_id,
            created_at=ip.created_at,
            updated_at=ip.updated_at,
        )


class CreateIPRequest(BaseModel):
    """Request to record an IP address in a subnet"""

    ip: str = Field(default="", examples=["10.0.0.1"])
    hostname: str = Field(default="", examples=["printer-1"])

    def to_input(self) -> CreateIPInput:
        return CreateIPInput(ip=self.ip, hostname=self.hostname)


class UpdateIPRequest(BaseModel):
    """Request to change an IP address hostname"""

    hostname: str = Field(..., examples=["pc-1"])

    def to_input(self) -> UpdateIPInput:
        return UpdateIPInput(hostname=self.hostname)


class ErrorResponse(BaseModel):
    """Error envelope"""

    error: str = Field(..., examples=["subnet not found"])
