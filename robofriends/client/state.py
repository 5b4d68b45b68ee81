"""
RoboFriends Client — View State and Transitions
=================================================

What:  The whole client-side state as one immutable, serializable value,
       plus pure functions that compute the next state.
Why:   Transitions can be unit-tested without any UI or network; the
       controller is the only place that performs I/O.
How:   Frozen pydantic models; each transition returns a new ViewState via
       model_copy(update=...). Transitions that may need to tell the user
       something return (state, prompt) where prompt is None on success.

State shape:
    ViewState
    ├── robots      tuple of records last received from the service
    ├── loading     True while the initial list request is in flight
    ├── search      current search text
    ├── show_form   whether the add-robot form is open
    ├── form        RobotForm (fields, style selection, generated image URL)
    └── submitting  gate against a second submit while one is in flight
"""

from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from robofriends.schemas.robot import RobotCreate, RobotResponse

AVATAR_BASE_URL = "https://robohash.org/"

# Display order is the order offered in the style picker
STYLE_SUFFIXES: Dict[str, str] = {
    "Robots": ".png?set=set1",
    "Monsters": ".png?set=set2",
    "Aliens": ".png?set=set3",
    "Cats": ".png?set=set4",
}

GENERATE_PROMPT = (
    "Please fill out first name, last name, and select a style to generate an image."
)
INCOMPLETE_PROMPT = "Please fill out all fields and generate an image."
PHONE_TAKEN_PROMPT = (
    "A robot with this phone number already exists. Please use a different number."
)

# Fields a user can type into; image_url is only set by generate_image()
EDITABLE_FIELDS = ("firstname", "lastname", "username", "email", "phone_number")


class RobotForm(BaseModel):
    firstname: str = ""
    lastname: str = ""
    username: str = ""
    email: str = ""
    phone_number: str = ""
    style: str = ""
    image_url: str = ""

    model_config = ConfigDict(frozen=True)


class ViewState(BaseModel):
    robots: Tuple[RobotResponse, ...] = ()
    loading: bool = False
    search: str = ""
    show_form: bool = False
    form: RobotForm = RobotForm()
    submitting: bool = False

    model_config = ConfigDict(frozen=True)


# ══════════════════════════════════════════════════════════════════════════
# Avatars
# ══════════════════════════════════════════════════════════════════════════

def avatar_url(firstname: str, lastname: str, style: str) -> str:
    """
    Deterministic avatar URL for a name and style.

    >>> avatar_url("Rob", "Ot", "Robots")
    'https://robohash.org/RobOt.png?set=set1'
    """
    return f"{AVATAR_BASE_URL}{firstname}{lastname}{STYLE_SUFFIXES[style]}"


# ══════════════════════════════════════════════════════════════════════════
# List & search
# ══════════════════════════════════════════════════════════════════════════

def loading_started(state: ViewState) -> ViewState:
    return state.model_copy(update={"loading": True})


def robots_loaded(state: ViewState, robots: Sequence[RobotResponse]) -> ViewState:
    return state.model_copy(update={"robots": tuple(robots), "loading": False})


def robots_load_failed(state: ViewState) -> ViewState:
    """The list stays empty; the failure has already been logged."""
    return state.model_copy(update={"robots": (), "loading": False})


def search_changed(state: ViewState, text: str) -> ViewState:
    return state.model_copy(update={"search": text})


def filtered_robots(state: ViewState) -> List[RobotResponse]:
    """Robots whose name contains the search text, ignoring case."""
    needle = state.search.lower()
    return [robot for robot in state.robots if needle in robot.name.lower()]


# ══════════════════════════════════════════════════════════════════════════
# Add-robot form
# ══════════════════════════════════════════════════════════════════════════

def open_form(state: ViewState) -> ViewState:
    return state.model_copy(update={"show_form": True})


def close_form(state: ViewState) -> ViewState:
    """Closing discards everything typed, the style and the image."""
    return state.model_copy(update={"show_form": False, "form": RobotForm()})


def field_changed(state: ViewState, field: str, value: str) -> ViewState:
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Unknown form field '{field}'. Expected one of: {EDITABLE_FIELDS}")
    form = state.form.model_copy(update={field: value})
    return state.model_copy(update={"form": form})


def style_selected(state: ViewState, style: str) -> ViewState:
    if style not in STYLE_SUFFIXES:
        raise ValueError(f"Unknown style '{style}'. Expected one of: {list(STYLE_SUFFIXES)}")
    form = state.form.model_copy(update={"style": style})
    return state.model_copy(update={"form": form})


def generate_image(state: ViewState) -> Tuple[ViewState, Optional[str]]:
    """
    Build the avatar URL from the current first name, last name and style.

    Returns the state unchanged plus GENERATE_PROMPT when any of the three
    is missing.
    """
    form = state.form
    if not (form.firstname and form.lastname and form.style):
        return state, GENERATE_PROMPT
    url = avatar_url(form.firstname, form.lastname, form.style)
    return state.model_copy(update={"form": form.model_copy(update={"image_url": url})}), None


def build_draft(form: RobotForm) -> RobotCreate:
    """The create-request body for the current form."""
    return RobotCreate(
        name=f"{form.firstname} {form.lastname}".strip(),
        username=form.username,
        email=form.email,
        phone=form.phone_number,
        image=form.image_url,
        style_type=form.style,
    )


def draft_is_complete(draft: RobotCreate) -> bool:
    """Name, username, email, phone and image must all be non-empty."""
    return all((draft.name, draft.username, draft.email, draft.phone, draft.image))


def submission_started(state: ViewState) -> ViewState:
    return state.model_copy(update={"submitting": True})


def submission_finished(state: ViewState) -> ViewState:
    return state.model_copy(update={"submitting": False})


def robot_added(state: ViewState, robot: RobotResponse) -> ViewState:
    """
    Append the service's echo of a new robot, then close and reset the form.

    Exactly one record is appended; the list is not re-fetched, so it can
    drift from the store if other clients are adding robots too.
    """
    return state.model_copy(
        update={
            "robots": state.robots + (robot,),
            "show_form": False,
            "form": RobotForm(),
        }
    )
