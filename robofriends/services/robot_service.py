"""
RoboFriends — Robot Service (Business Logic)
==============================================

What:  List, phone-existence check, and create operations over the robots store.
Why:   Keeps store access and error translation out of the route handlers.
How:   Each method takes the request's AsyncSession and translates store
       failures into application exceptions handled globally in main.py.
Who:   Called by the /api/robots route handlers.

Create flow:
    ┌──────────┐    ┌────────────┐    ┌──────────────┐    ┌──────────┐
    │  Body    │───▶│  Required  │───▶│  INSERT +    │───▶│  Echo    │
    │  (Route) │    │  fields    │    │  flush       │    │  (201)   │
    └──────────┘    └────────────┘    └──────────────┘    └──────────┘
                      │ missing          │ IntegrityError
                      ▼                  ▼
                ValidationError    DuplicateRobotError
                     (400)              (400)

    The response echoes the stored row as-is. Field values are never
    rewritten between persisting and responding.

RobotService is stateless; the session is passed in for every call.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from robofriends.exceptions import (
    DatabaseError,
    DuplicateRobotError,
    ValidationError,
)
from robofriends.models.robot import Robot
from robofriends.schemas.robot import RobotCreate, RobotResponse

logger = logging.getLogger(__name__)


class RobotService:
    """
    Business logic layer for robot operations.

    Responsibilities:
        - list_robots(): every record, in insertion order
        - phone_exists(): exact-match existence probe on phone
        - create_robot(): validate, persist, echo

    Error Handling Strategy:
        Validation and uniqueness problems become ValidationError /
        DuplicateRobotError (400). Anything else the store raises is logged
        and wrapped in DatabaseError (500) with an operation-level message.
    """

    async def list_robots(self, db: AsyncSession) -> List[RobotResponse]:
        """
        Return all robots in the order they were stored.

        Query plan:
            SELECT * FROM robots ORDER BY id
        """
        try:
            result = await db.execute(select(Robot).order_by(Robot.id))
            robots = result.scalars().all()
            return [RobotResponse.model_validate(robot) for robot in robots]
        except Exception as e:
            logger.error("Error fetching robots: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Server error while fetching robots.",
                context={"error_type": type(e).__name__},
            )

    async def phone_exists(self, db: AsyncSession, phone: str) -> bool:
        """
        Check whether any robot has exactly this phone string.

        No normalization: whitespace and punctuation are significant, so
        "555-0100" and "5550100" are different numbers. This is a UX probe;
        the UNIQUE constraint on insert is what actually guarantees
        uniqueness.
        """
        try:
            result = await db.execute(
                select(Robot.id).where(Robot.phone == phone).limit(1)
            )
            return result.scalar_one_or_none() is not None
        except Exception as e:
            logger.error("Error checking phone number: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Server error while checking phone number.",
                context={"error_type": type(e).__name__},
            )

    async def create_robot(self, db: AsyncSession, payload: RobotCreate) -> RobotResponse:
        """
        Persist a new robot and return the stored record.

        Workflow Steps:
            1. Reject the request if any of the six fields is missing or empty
            2. INSERT and flush (assigns id; UNIQUE constraints are checked)
            3. Return the stored row (commit happens in get_db_session)

        Raises:
            ValidationError: a required field is missing or empty (→ 400)
            DuplicateRobotError: username, email or phone already taken (→ 400)
            DatabaseError: any other store failure (→ 500)
        """
        missing = payload.missing_fields()
        if missing:
            raise ValidationError(context={"missing_fields": missing})

        robot = Robot(
            name=payload.name,
            username=payload.username,
            email=payload.email,
            phone=payload.phone,
            image=payload.image,
            style_type=payload.style_type,
        )

        try:
            db.add(robot)
            await db.flush()
        except IntegrityError as e:
            logger.info(
                "Rejected duplicate robot username=%s email=%s phone=%s",
                payload.username,
                payload.email,
                payload.phone,
            )
            raise DuplicateRobotError(context={"constraint": str(e.orig)})
        except Exception as e:
            logger.error("Error saving robot: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Server error while saving robot.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Robot %s created (username=%s)", robot.id, robot.username)
        return RobotResponse.model_validate(robot)


# Stateless; one shared instance
robot_service = RobotService()
