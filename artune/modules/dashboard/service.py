from typing import List

from artune.core.enums import Role
from artune.modules.auth.schemas import CurrentUser
from artune.modules.dashboard.schemas import DashboardAction, DashboardResponse

ROLE_ACTIONS = {
    Role.ARTIST: [
        DashboardAction(title="Artist Profile", description="Manage your artist profile", label="Edit Profile"),
        DashboardAction(title="Services", description="Manage your services", label="Manage Services"),
    ],
    Role.CLIENT: [
        DashboardAction(
            title="Browse Artists", description="Find the perfect artist",
            label="Explore Artists", href="/artists"
        ),
        DashboardAction(title="My Bookings", description="View your bookings", label="View Bookings"),
    ],
}


def actions_for(role) -> List[DashboardAction]:
    return [a.model_copy() for a in ROLE_ACTIONS.get(role, [])]


def build_dashboard(user: CurrentUser) -> DashboardResponse:
    return DashboardResponse(
        welcome=f"Welcome, {user.display_name}",
        role=user.role,
        actions=actions_for(user.role),
    )
