from .sqlalchemy_user_repository import SqlalchemyUserRepository
from .sqlalchemy_project_repository import SqlalchemyProjectRepository
from .sqlalchemy_registration_repository import SqlalchemyRegistrationRepository

__all__ = [
    "SqlalchemyUserRepository",
    "SqlalchemyProjectRepository",
    "SqlalchemyRegistrationRepository",
]
