"""
RoboFriends — Robots Route Handlers
=====================================

What:  GET /api/robots, GET /api/robots/check-phone/{phone}, POST /api/robots.
How:   Each handler delegates to RobotService; failures are raised as
       application exceptions and shaped by the global handlers in main.py.
Who:   Called by the directory client (robofriends.client).
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from robofriends.database import get_db_session
from robofriends.schemas.robot import (
    ClientErrorResponse,
    PhoneCheckResponse,
    RobotCreate,
    RobotResponse,
    ServerErrorResponse,
)
from robofriends.services.robot_service import robot_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/robots", tags=["Robots"])


@router.get(
    "",
    response_model=List[RobotResponse],
    responses={
        500: {"description": "Store failure", "model": ServerErrorResponse},
    },
    summary="List all robots",
    description="Returns every robot in the directory, in insertion order.",
)
async def list_robots(
    db: AsyncSession = Depends(get_db_session),
) -> List[RobotResponse]:
    return await robot_service.list_robots(db)


@router.get(
    "/check-phone/{phone:path}",
    response_model=PhoneCheckResponse,
    responses={
        500: {"description": "Store failure", "model": ServerErrorResponse},
    },
    summary="Check whether a phone number is taken",
    description=(
        "Exact string match against stored phone numbers. No normalization is "
        "applied, so formatting differences count as different numbers. The "
        "phone may itself contain slashes."
    ),
)
async def check_phone(
    phone: str,
    db: AsyncSession = Depends(get_db_session),
) -> PhoneCheckResponse:
    exists = await robot_service.phone_exists(db, phone)
    return PhoneCheckResponse(exists=exists)


@router.post(
    "",
    response_model=RobotResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing field or duplicate robot", "model": ClientErrorResponse},
        500: {"description": "Store failure", "model": ServerErrorResponse},
    },
    summary="Add a robot",
    description=(
        "Creates a robot from six required string fields "
        "(name, username, email, phone, image, styleType) and returns the "
        "stored record. username, email and phone must each be unique."
    ),
)
async def create_robot(
    payload: RobotCreate,
    db: AsyncSession = Depends(get_db_session),
) -> RobotResponse:
    """
    Create a robot.

    The returned record is the stored row, unmodified. Missing fields and
    uniqueness conflicts both come back as 400 with a `msg`.
    """
    return await robot_service.create_robot(db, payload)
