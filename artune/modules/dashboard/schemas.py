from pydantic import BaseModel
from typing import Optional, List

from artune.core.enums import Role


class DashboardAction(BaseModel):
    title: str
    description: str
    label: str
    href: Optional[str] = None


class DashboardResponse(BaseModel):
    welcome: str
    role: Optional[Role] = None
    message: str = "Your ArtUne dashboard is ready. Start exploring the platform!"
    actions: List[DashboardAction] = []
