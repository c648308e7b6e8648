from .user import IUserRepository
from .project import IProjectRepository
from .registration import IRegistrationRepository

__all__ = ["IUserRepository", "IProjectRepository", "IRegistrationRepository"]
