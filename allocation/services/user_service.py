import logging
from typing import Dict, Any, List

from allocation.database import models
from allocation.repositories.interfaces import IUserRepository
from allocation.services.exceptions import (
    UserCreationError, UserNotFoundError, AuthenticationError
)

logger = logging.getLogger(__name__)

# update_user 로 변경할 수 있는 필드
UPDATABLE_USER_FIELDS = ("name", "username", "password", "type_id")


def _to_dict(user: models.User) -> Dict[str, Any]:
    return {"id": user.id, "name": user.name, "username": user.username, "typeId": user.type_id}


class UserService:
    """사용자 디렉터리: 가입, 조회, 수정, 삭제, 로그인을 제공합니다."""

    def __init__(self, user_repo: IUserRepository):
        """
        UserService를 초기화합니다.

        Args:
            user_repo: 사용자 데이터에 접근하기 위한 리포지토리.
        """
        self.user_repo = user_repo

    def _get_or_raise(self, user_id: int) -> models.User:
        user = self.user_repo.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User with id '{user_id}' not found.")
        return user

    def create_user(self, name: str, username: str, password: str, type_id: int) -> Dict[str, Any]:
        """
        새로운 사용자를 생성합니다. 비밀번호는 평문 그대로 저장됩니다.

        Raises:
            UserCreationError: 동일한 로그인 이름의 사용자가 이미 존재할 때.
        """
        if self.user_repo.find_by_username(username):
            raise UserCreationError(f"User with username '{username}' already exists.")
        new_user = models.User(name=name, username=username, password=password, type_id=type_id)
        created_user = self.user_repo.create(new_user)
        logger.info("User %s created (type_id=%s).", created_user.id, type_id)
        return _to_dict(created_user)

    def get_user(self, user_id: int) -> Dict[str, Any]:
        """
        ID로 특정 사용자를 조회합니다. (비밀번호 제외)

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
        """
        return _to_dict(self._get_or_raise(user_id))

    def get_user_by_username(self, username: str) -> Dict[str, Any]:
        user = self.user_repo.find_by_username(username)
        if not user:
            raise UserNotFoundError(f"User with username '{username}' not found.")
        return _to_dict(user)

    def get_user_id_by_username(self, username: str) -> int:
        return self.get_user_by_username(username)["id"]

    def list_users(self) -> List[Dict[str, Any]]:
        """모든 사용자의 목록을 조회합니다. (비밀번호 제외)"""
        return [_to_dict(u) for u in self.user_repo.list_all()]

    def update_user(self, user_id: int, **fields) -> Dict[str, Any]:
        """
        사용자 정보를 수정합니다. 로그인 이름 중복은 다시 검사하지 않습니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            ValueError: 수정할 수 없는 필드가 포함되었을 때.
        """
        unknown = set(fields) - set(UPDATABLE_USER_FIELDS)
        if unknown:
            raise ValueError(f"Unknown user fields: {', '.join(sorted(unknown))}.")

        user = self._get_or_raise(user_id)
        for field, value in fields.items():
            setattr(user, field, value)
        return _to_dict(self.user_repo.update(user))

    def update_password(self, user_id: int, password: str) -> bool:
        user = self._get_or_raise(user_id)
        user.password = password
        self.user_repo.update(user)
        return True

    def delete_user(self, user_id: int) -> bool:
        """
        사용자를 삭제합니다. 참조 중인 프로젝트나 등록이 있으면 외래 키 위반으로
        StorageError 가 발생할 수 있습니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
        """
        user = self._get_or_raise(user_id)
        self.user_repo.delete(user)
        logger.info("User %s deleted.", user_id)
        return True

    def login(self, username: str, password: str, type_id: int) -> Dict[str, Any]:
        """
        로그인 이름, 비밀번호, 사용자 유형이 모두 일치하는지 확인합니다.

        Raises:
            AuthenticationError: 사용자, 비밀번호, 유형 중 하나라도 일치하지 않을 때.
        """
        user = self.user_repo.find_by_username(username)
        if not user or user.password != password or user.type_id != type_id:
            logger.warning("Login failed for username '%s'.", username)
            raise AuthenticationError("Login failed")
        return _to_dict(user)

    def verify_password(self, user_id: int, password: str) -> bool:
        user = self.user_repo.find_by_id(user_id)
        return bool(user) and user.password == password
