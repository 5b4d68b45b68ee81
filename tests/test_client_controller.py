"""
RoboFriends — Directory Controller Tests
==========================================

What:  Tests for the list/search and add-robot flows.
How:   End-to-end tests drive DirectoryController against the real app
       (ASGITransport + SQLite); flow-control tests use a mocked RobotsAPI.

What we test:
    ✅ Load fills the list; a failed load leaves it empty
    ✅ Rob Ot end-to-end: generate → check-phone → create → append → reset
    ✅ Duplicate phone: prompt, no create, list unchanged
    ✅ A phone containing "/" goes through check-phone and create
    ✅ Incomplete form and create errors prompt and keep the form
    ✅ A second submit while one is in flight is ignored
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from robofriends.client.controller import DirectoryController
from robofriends.client.results import ConflictFailure, Ok, TransportFailure
from robofriends.client.state import (
    GENERATE_PROMPT,
    INCOMPLETE_PROMPT,
    PHONE_TAKEN_PROMPT,
    RobotForm,
)
from robofriends.exceptions import DUPLICATE_ROBOT_MESSAGE
from robofriends.schemas.robot import RobotResponse


def fill_rob_ot(controller, phone="555-0100"):
    controller.open_form()
    controller.update_field("firstname", "Rob")
    controller.update_field("lastname", "Ot")
    controller.update_field("username", "robot")
    controller.update_field("email", "rob@ot.io")
    controller.update_field("phone_number", phone)
    controller.select_style("Robots")


def rob_ot_record():
    return RobotResponse(
        id=9,
        name="Rob Ot",
        username="robot",
        email="rob@ot.io",
        phone="555-0100",
        image="https://robohash.org/RobOt.png?set=set1",
        style_type="Robots",
    )


def mocked_api():
    api = MagicMock()
    api.list_robots = AsyncMock(return_value=Ok(value=[]))
    api.check_phone = AsyncMock(return_value=Ok(value=False))
    api.create_robot = AsyncMock(return_value=Ok(value=rob_ot_record()))
    return api


class TestEndToEnd:

    @pytest.mark.asyncio
    async def test_add_rob_ot(self, robots_api, test_client, robot_payload):
        await test_client.post("/api/robots", json=robot_payload)
        alerts = []
        controller = DirectoryController(robots_api, alert=alerts.append)
        await controller.load()
        assert len(controller.state.robots) == 1

        fill_rob_ot(controller)
        assert controller.generate_image() is True
        assert "RobOt" in controller.state.form.image_url
        assert controller.state.form.image_url.endswith(".png?set=set1")

        assert await controller.submit() is True

        assert alerts == []
        assert [r.name for r in controller.state.robots] == ["Leanne Graham", "Rob Ot"]
        assert controller.state.show_form is False
        assert controller.state.form == RobotForm()
        assert controller.state.submitting is False
        stored = (await test_client.get("/api/robots")).json()
        assert stored[-1]["name"] == "Rob Ot"
        assert stored[-1]["styleType"] == "Robots"

    @pytest.mark.asyncio
    async def test_duplicate_phone_is_caught_before_create(self, robots_api, test_client, robot_payload):
        robot_payload["phone"] = "555-0100"
        await test_client.post("/api/robots", json=robot_payload)
        alerts = []
        controller = DirectoryController(robots_api, alert=alerts.append)
        await controller.load()

        fill_rob_ot(controller, phone="555-0100")
        controller.generate_image()
        assert await controller.submit() is False

        assert alerts == [PHONE_TAKEN_PROMPT]
        assert len(controller.state.robots) == 1
        assert controller.state.show_form is True
        assert controller.state.form.firstname == "Rob"
        assert len((await test_client.get("/api/robots")).json()) == 1

    @pytest.mark.asyncio
    async def test_add_robot_with_slash_in_phone(self, robots_api, test_client):
        alerts = []
        controller = DirectoryController(robots_api, alert=alerts.append)
        await controller.load()

        fill_rob_ot(controller, phone="555/0100")
        controller.generate_image()
        assert await controller.submit() is True

        assert alerts == []
        assert controller.state.robots[-1].phone == "555/0100"

        # The same phone is now reported as taken
        fill_rob_ot(controller, phone="555/0100")
        controller.generate_image()
        assert await controller.submit() is False
        assert alerts == [PHONE_TAKEN_PROMPT]

    @pytest.mark.asyncio
    async def test_duplicate_username_surfaces_at_create(self, robots_api, test_client, robot_payload):
        robot_payload["username"] = "robot"
        await test_client.post("/api/robots", json=robot_payload)
        alerts = []
        controller = DirectoryController(robots_api, alert=alerts.append)
        await controller.load()

        fill_rob_ot(controller)
        controller.generate_image()
        assert await controller.submit() is False

        assert alerts == [f"An error occurred: {DUPLICATE_ROBOT_MESSAGE}"]
        assert len(controller.state.robots) == 1

    @pytest.mark.asyncio
    async def test_search_after_load(self, robots_api, test_client, robot_payload):
        await test_client.post("/api/robots", json=robot_payload)
        controller = DirectoryController(robots_api, alert=lambda message: None)
        await controller.load()

        assert [r.name for r in controller.search("graham")] == ["Leanne Graham"]
        assert controller.search("bob") == []


class TestLoad:

    @pytest.mark.asyncio
    async def test_failed_load_leaves_list_empty(self):
        api = mocked_api()
        api.list_robots = AsyncMock(return_value=TransportFailure(message="connection refused"))
        controller = DirectoryController(api, alert=lambda message: None)

        await controller.load()

        assert controller.state.robots == ()
        assert controller.state.loading is False

    @pytest.mark.asyncio
    async def test_loading_flag_while_pending(self):
        api = mocked_api()
        controller = DirectoryController(api, alert=lambda message: None)
        seen = {}

        async def list_robots():
            seen["loading"] = controller.state.loading
            return Ok(value=[rob_ot_record()])

        api.list_robots = list_robots
        await controller.load()

        assert seen["loading"] is True
        assert controller.state.loading is False


class TestSubmitFlow:

    @pytest.mark.asyncio
    async def test_incomplete_form_prompts_without_requests(self):
        api = mocked_api()
        alerts = []
        controller = DirectoryController(api, alert=alerts.append)
        fill_rob_ot(controller)

        # No image generated yet
        assert await controller.submit() is False

        assert alerts == [INCOMPLETE_PROMPT]
        api.check_phone.assert_not_awaited()
        api.create_robot.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_generate_without_style_prompts(self):
        alerts = []
        controller = DirectoryController(mocked_api(), alert=alerts.append)
        controller.update_field("firstname", "Rob")
        controller.update_field("lastname", "Ot")

        assert controller.generate_image() is False
        assert alerts == [GENERATE_PROMPT]
        assert controller.state.form.image_url == ""

    @pytest.mark.asyncio
    async def test_check_phone_transport_error_aborts(self):
        api = mocked_api()
        api.check_phone = AsyncMock(
            return_value=TransportFailure(message="Expected JSON, got text/html. Response body: oops")
        )
        alerts = []
        controller = DirectoryController(api, alert=alerts.append)
        fill_rob_ot(controller)
        controller.generate_image()

        assert await controller.submit() is False

        assert alerts == ["An error occurred: Expected JSON, got text/html. Response body: oops"]
        api.create_robot.assert_not_awaited()
        assert controller.state.submitting is False
        assert controller.state.form.image_url != ""

    @pytest.mark.asyncio
    async def test_create_failure_keeps_form_for_retry(self):
        api = mocked_api()
        api.create_robot = AsyncMock(
            side_effect=[ConflictFailure(message=DUPLICATE_ROBOT_MESSAGE), Ok(value=rob_ot_record())]
        )
        alerts = []
        controller = DirectoryController(api, alert=alerts.append)
        fill_rob_ot(controller)
        controller.generate_image()

        assert await controller.submit() is False
        assert controller.state.show_form is True
        assert controller.state.submitting is False

        assert await controller.submit() is True
        assert len(controller.state.robots) == 1
        assert len(alerts) == 1

    @pytest.mark.asyncio
    async def test_check_then_create_in_order(self):
        api = mocked_api()
        calls = []
        api.check_phone = AsyncMock(side_effect=lambda phone: calls.append(("check", phone)) or Ok(value=False))
        api.create_robot = AsyncMock(
            side_effect=lambda draft: calls.append(("create", draft.phone)) or Ok(value=rob_ot_record())
        )
        controller = DirectoryController(api, alert=lambda message: None)
        fill_rob_ot(controller)
        controller.generate_image()

        await controller.submit()

        assert calls == [("check", "555-0100"), ("create", "555-0100")]

    @pytest.mark.asyncio
    async def test_double_submit_is_ignored(self):
        api = mocked_api()
        release = asyncio.Event()

        async def slow_check(phone):
            await release.wait()
            return Ok(value=False)

        api.check_phone = slow_check
        controller = DirectoryController(api, alert=lambda message: None)
        fill_rob_ot(controller)
        controller.generate_image()

        first = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)
        assert controller.state.submitting is True

        assert await controller.submit() is False

        release.set()
        assert await first is True
        api.create_robot.assert_awaited_once()
        assert len(controller.state.robots) == 1

    @pytest.mark.asyncio
    async def test_close_form_resets(self):
        controller = DirectoryController(mocked_api(), alert=lambda message: None)
        fill_rob_ot(controller)
        controller.generate_image()

        controller.close_form()

        assert controller.state.show_form is False
        assert controller.state.form == RobotForm()
