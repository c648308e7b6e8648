from .enums import UserType, RegistrationState, ProjectAvailability
from .user import User
from .project import Project
from .registration import Registration

__all__ = [
    "UserType", "RegistrationState", "ProjectAvailability",
    "User", "Project", "Registration",
]
