from allocation.database.models import UserType
from allocation.repositories.interfaces import IUserRepository
from allocation.services.exceptions import UserNotFoundError


def role_of(user_repo: IUserRepository, user_id: int) -> int:
    """
    사용자의 역할 코드(type_id)를 조회합니다. 캐시 없이 매번 사용자 행을 다시 읽습니다.

    알 수 없는 코드도 그대로 반환하므로, 그런 사용자는 학생도 교직원도 아닌 것으로 판정됩니다.

    Raises:
        UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
    """
    user = user_repo.find_by_id(user_id)
    if not user:
        raise UserNotFoundError(f"User with id '{user_id}' not found.")
    return user.type_id


def is_student(user_repo: IUserRepository, user_id: int) -> bool:
    return role_of(user_repo, user_id) == UserType.STUDENT


def is_staff(user_repo: IUserRepository, user_id: int) -> bool:
    return role_of(user_repo, user_id) == UserType.STAFF
