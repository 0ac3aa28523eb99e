"""Subnet API Routes

Route → NetworkService → Repository
"""

import structlog  # type: ignore[import-untyped]
from fastapi import APIRouter, HTTPException, Response

from ..core.exceptions import InvalidInputException, NotFoundException
from ..models import CreateSubnetRequest, ErrorResponse, SubnetResponse
from .dependencies import NetworkServiceDep, PrincipalDep, SubnetIdPath

router = APIRouter(
    prefix="/api/v1/subnets",
    tags=["subnets"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
logger = structlog.get_logger()


@router.get("", response_model=list[SubnetResponse])
async def list_subnets(network_service: NetworkServiceDep):
    """List all subnets"""
    try:
        subnets = await network_service.list_subnets()
    except Exception as e:
        logger.error("list_subnets_request_failed", error=str(e))
        raise HTTPException(status_code=500, detail="internal server error") from e

    return [SubnetResponse.from_entity(subnet) for subnet in subnets]


@router.post("", response_model=SubnetResponse, status_code=201)
async def create_subnet(
    request: CreateSubnetRequest,
    network_service: NetworkServiceDep,
    principal: PrincipalDep,
):
    """Create a subnet from a CIDR such as ``10.0.0.0/24``"""
    try:
        subnet = await network_service.create_subnet(request.to_input())
    except InvalidInputException as e:
        raise HTTPException(status_code=400, detail="invalid cidr") from e
    except Exception as e:
        logger.error("create_subnet_request_failed", cidr=request.cidr, error=str(e))
        raise HTTPException(
            status_code=500, detail="internal server error while saving subnet to db"
        ) from e

    logger.info(
        "subnet_create_requested",
        subnet_id=subnet.id,
        subject=principal.subject if principal else None,
    )
    return SubnetResponse.from_entity(subnet)


@router.get(
    "/{subnet_id}",
    response_model=SubnetResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_subnet(subnet_id: SubnetIdPath, network_service: NetworkServiceDep):
    """Get a subnet by id"""
    try:
        subnet = await network_service.get_subnet(subnet_id)
    except NotFoundException as e:
        raise HTTPException(status_code=404, detail="subnet not found") from e
    except Exception as e:
        logger.error("get_subnet_request_failed", subnet_id=subnet_id, error=str(e))
        raise HTTPException(status_code=500, detail="internal server error") from e

    return SubnetResponse.from_entity(subnet)


@router.delete(
    "/{subnet_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
)
async def delete_subnet(
    subnet_id: SubnetIdPath,
    network_service: NetworkServiceDep,
    principal: PrincipalDep,
):
    """Delete a subnet together with its addresses"""
    try:
        await network_service.delete_subnet(subnet_id)
    except NotFoundException as e:
        raise HTTPException(status_code=404, detail="subnet not found") from e
    except Exception as e:
        logger.error("delete_subnet_request_failed", subnet_id=subnet_id, error=str(e))
        raise HTTPException(status_code=500, detail="internal server error") from e

    logger.info(
        "subnet_delete_requested",
        subnet_id=subnet_id,
        subject=principal.subject if principal else None,
    )
    return Response(status_code=204)
