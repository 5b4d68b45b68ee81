"""
RoboFriends — Directory Client
================================

    api.RobotsAPI                  async HTTP wrapper returning typed results
    results                        Ok / ValidationFailure / ConflictFailure / TransportFailure
    state                          ViewState, RobotForm and pure transitions
    controller.DirectoryController list, search and add-robot flows
"""

from robofriends.client.api import RobotsAPI
from robofriends.client.controller import DirectoryController
from robofriends.client.results import (
    ApiResult,
    ConflictFailure,
    Ok,
    TransportFailure,
    ValidationFailure,
)
from robofriends.client.state import RobotForm, ViewState

__all__ = [
    "ApiResult",
    "ConflictFailure",
    "DirectoryController",
    "Ok",
    "RobotForm",
    "RobotsAPI",
    "TransportFailure",
    "ValidationFailure",
    "ViewState",
]
