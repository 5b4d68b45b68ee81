"""
RoboFriends Client — Directory Controller
===========================================

What:  Drives the list/search and add-robot flows against the service.
Why:   The only place in the client that performs I/O; every state change
       goes through the pure transitions in robofriends.client.state.
How:   Holds the current ViewState, a RobotsAPI and an `alert` callable that
       receives blocking user prompts (a UI shows them as dialogs).

Submit flow:
    ┌──────────┐   ┌──────────────┐   ┌─────────────┐   ┌──────────────┐
    │ complete │──▶│ check-phone  │──▶│ create      │──▶│ append, close│
    │ form?    │   │ exists?      │   │ 201?        │   │ and reset    │
    └──────────┘   └──────────────┘   └─────────────┘   └──────────────┘
         │ no            │ yes / error       │ error
         ▼               ▼                   ▼
      prompt          prompt              prompt (form kept for retry)

    The two requests are awaited one after the other. The submitting flag
    is set before the first await and cleared on every exit path.
"""

import logging
from typing import Callable, List, Optional

from robofriends.client import state as transitions
from robofriends.client.api import RobotsAPI
from robofriends.client.results import Ok
from robofriends.client.state import (
    INCOMPLETE_PROMPT,
    PHONE_TAKEN_PROMPT,
    ViewState,
)
from robofriends.schemas.robot import RobotResponse

logger = logging.getLogger(__name__)

AlertFn = Callable[[str], None]


def _log_alert(message: str) -> None:
    logger.warning("Alert: %s", message)


class DirectoryController:
    """
    Stateful front for one directory view and its add-robot form.

    Args:
        api:   RobotsAPI used for all service calls
        alert: Receives user-facing prompts; defaults to logging them
        state: Initial view state (mainly for tests)
    """

    def __init__(
        self,
        api: RobotsAPI,
        alert: Optional[AlertFn] = None,
        state: Optional[ViewState] = None,
    ):
        self.api = api
        self.alert = alert or _log_alert
        self._state = state or ViewState()

    @property
    def state(self) -> ViewState:
        return self._state

    # ── List & search ─────────────────────────────────────────────────────

    async def load(self) -> None:
        """Fetch the robot list; on failure the list stays empty."""
        self._state = transitions.loading_started(self._state)
        result = await self.api.list_robots()
        if isinstance(result, Ok):
            self._state = transitions.robots_loaded(self._state, result.value)
        else:
            logger.error("Error fetching robots: %s", result.message)
            self._state = transitions.robots_load_failed(self._state)

    def search(self, text: str) -> List[RobotResponse]:
        self._state = transitions.search_changed(self._state, text)
        return self.visible_robots()

    def visible_robots(self) -> List[RobotResponse]:
        return transitions.filtered_robots(self._state)

    # ── Add-robot form ────────────────────────────────────────────────────

    def open_form(self) -> None:
        self._state = transitions.open_form(self._state)

    def close_form(self) -> None:
        self._state = transitions.close_form(self._state)

    def update_field(self, field: str, value: str) -> None:
        self._state = transitions.field_changed(self._state, field, value)

    def select_style(self, style: str) -> None:
        self._state = transitions.style_selected(self._state, style)

    def generate_image(self) -> bool:
        """Fill in the avatar URL; prompts and returns False if inputs are missing."""
        self._state, prompt = transitions.generate_image(self._state)
        if prompt:
            self.alert(prompt)
            return False
        return True

    async def submit(self) -> bool:
        """
        Run the add-robot flow. Returns True when a robot was created.

        A call made while another submit is in flight returns False at once
        without prompting.
        """
        if self._state.submitting:
            return False

        draft = transitions.build_draft(self._state.form)
        if not transitions.draft_is_complete(draft):
            self.alert(INCOMPLETE_PROMPT)
            return False

        self._state = transitions.submission_started(self._state)
        try:
            check = await self.api.check_phone(draft.phone)
            if not isinstance(check, Ok):
                self._report_error(check.message)
                return False
            if check.value:
                self.alert(PHONE_TAKEN_PROMPT)
                return False

            created = await self.api.create_robot(draft)
            if not isinstance(created, Ok):
                self._report_error(created.message)
                return False

            self._state = transitions.robot_added(self._state, created.value)
            logger.info("Robot added: %s", created.value.name)
            return True
        finally:
            self._state = transitions.submission_finished(self._state)

    def _report_error(self, message: str) -> None:
        logger.error("Error adding robot: %s", message)
        self.alert(f"An error occurred: {message}")
