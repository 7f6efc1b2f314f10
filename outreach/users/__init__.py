from outreach.users.api import router
from outreach.users.models import User
from outreach.users.schemas import UserRead
from outreach.users.service import UserService, user_service

__all__ = ["router", "User", "UserRead", "UserService", "user_service"]
