"""IP Address API Routes

Addresses are always addressed through their parent subnet.
"""

import uuid

import structlog  # type: ignore[import-untyped]
from fastapi import APIRouter, HTTPException, Response

from ..core.exceptions import (
    ConflictException,
    InvalidInputException,
    NotFoundException,
    SubnetNotFoundException,
)
from ..models import CreateIPRequest, ErrorResponse, IPResponse, UpdateIPRequest
from .dependencies import NetworkServiceDep, PrincipalDep, SubnetIdPath

router = APIRouter(
    prefix="/api/v1/subnets/{subnet_id}/ips",
    tags=["ips"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
logger = structlog.get_logger()


def _parse_ip_id(ip_id: str) -> str:
    try:
        return str(uuid.UUID(ip_id))
    except ValueError:
        raise HTTPException(status_code=400, detail="bad request") from None


def _subject(principal) -> str | None:
    return principal.subject if principal else None


@router.post("", response_model=IPResponse, status_code=201)
async def create_ip(
    subnet_id: SubnetIdPath,
    request: CreateIPRequest,
    network_service: NetworkServiceDep,
    principal: PrincipalDep,
):
    """Record an address in the subnet"""
    try:
        ip = await network_service.create_ip(subnet_id, request.to_input())
    except NotFoundException as e:
        raise HTTPException(status_code=404, detail="subnet not found") from e
    except ConflictException as e:
        raise HTTPException(status_code=400, detail="bad request, ip exists") from e
    except InvalidInputException as e:
        raise HTTPException(status_code=400, detail="bad request") from e
    except Exception as e:
        logger.error(
            "create_ip_request_failed", subnet_id=subnet_id, ip=request.ip, error=str(e)
        )
        raise HTTPException(
            status_code=500, detail="internal server error while creating ip"
        ) from e

    logger.info(
        "ip_create_requested",
        subnet_id=subnet_id,
        ip_id=ip.id,
        subject=_subject(principal),
    )
    return IPResponse.from_entity(ip)


@router.get("", response_model=list[IPResponse])
async def list_ips(subnet_id: SubnetIdPath, network_service: NetworkServiceDep):
    """List the addresses recorded in the subnet"""
    try:
        ips = await network_service.list_ips(subnet_id)
    except NotFoundException as e:
        raise HTTPException(status_code=404, detail="subnet not found") from e
    except Exception as e:
        logger.error("list_ips_request_failed", subnet_id=subnet_id, error=str(e))
        raise HTTPException(status_code=500, detail="internal server error") from e

    return [IPResponse.from_entity(ip) for ip in ips]


@router.patch("/{ip_id}", response_model=IPResponse)
async def update_ip(
    subnet_id: SubnetIdPath,
    ip_id: str,
    request: UpdateIPRequest,
    network_service: NetworkServiceDep,
    principal: PrincipalDep,
):
    """Change the hostname of an address"""
    ip_id = _parse_ip_id(ip_id)
    try:
        ip = await network_service.update_ip_hostname(subnet_id, ip_id, request.to_input())
    except SubnetNotFoundException as e:
        raise HTTPException(status_code=404, detail="subnet not found") from e
    except NotFoundException as e:
        raise HTTPException(status_code=404, detail="ip not found") from e
    except InvalidInputException as e:
        raise HTTPException(status_code=400, detail="bad request") from e
    except Exception as e:
        logger.error(
            "update_ip_request_failed", subnet_id=subnet_id, ip_id=ip_id, error=str(e)
        )
        raise HTTPException(status_code=500, detail="internal server error") from e

    logger.info(
        "ip_update_requested",
        subnet_id=subnet_id,
        ip_id=ip_id,
        subject=_subject(principal),
    )
    return IPResponse.from_entity(ip)


@router.delete("/{ip_id}", status_code=204, response_class=Response)
async def delete_ip(
    subnet_id: SubnetIdPath,
    ip_id: str,
    network_service: NetworkServiceDep,
    principal: PrincipalDep,
):
    """Delete an address from the subnet"""
    ip_id = _parse_ip_id(ip_id)
    try:
        await network_service.delete_ip(subnet_id, ip_id)
    except NotFoundException as e:
        raise HTTPException(status_code=404, detail="subnet or ip not found") from e
    except InvalidInputException as e:
        raise HTTPException(status_code=400, detail="bad request") from e
    except Exception as e:
        logger.error(
            "delete_ip_request_failed", subnet_id=subnet_id, ip_id=ip_id, error=str(e)
        )
        raise HTTPException(status_code=500, detail="internal server error") from e

    logger.info(
        "ip_delete_requested",
        subnet_id=subnet_id,
        ip_id=ip_id,
        subject=_subject(principal),
    )
    return Response(status_code=204)
