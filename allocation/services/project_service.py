import logging
from typing import Dict, Any, List, Optional

from allocation.database import models
from allocation.repositories.interfaces import IProjectRepository, IUserRepository
from allocation.services import roles
from allocation.services.exceptions import ProjectNotFoundError, NotAStaffError

logger = logging.getLogger(__name__)

UPDATABLE_PROJECT_FIELDS = ("title", "description", "staff_id", "available")


def _to_dict(project: models.Project) -> Dict[str, Any]:
    return {
        "id": project.id,
        "title": project.title,
        "description": project.description,
        "staffId": project.staff_id,
        "staffName": project.staff_name,
        "available": project.available,
    }


class ProjectService:
    """프로젝트 카탈로그: 프로젝트의 생성, 조회, 수정, 삭제 및 모집 종료를 제공합니다."""

    def __init__(self, project_repo: IProjectRepository, user_repo: IUserRepository):
        """
        ProjectService를 초기화합니다.

        Args:
            project_repo: 프로젝트 데이터에 접근하기 위한 리포지토리.
            user_repo: 교직원 여부 확인에 사용할 사용자 리포지토리.
        """
        self.project_repo = project_repo
        self.user_repo = user_repo

    def _get_or_raise(self, project_id: int) -> models.Project:
        project = self.project_repo.find_by_id(project_id)
        if not project:
            raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")
        return project

    def create_project(self, title: str, description: Optional[str], staff_id: int,
                       available: int = models.ProjectAvailability.AVAILABLE) -> Dict[str, Any]:
        """
        새로운 프로젝트를 생성합니다.

        staff_id 가 실제 교직원인지는 검사하지 않습니다. (교직원별 목록 조회에서만 검사)
        """
        new_project = models.Project(
            title=title, description=description, staff_id=staff_id, available=int(available)
        )
        created_project = self.project_repo.create(new_project)
        logger.info("Project %s created by staff %s.", created_project.id, staff_id)
        return _to_dict(created_project)

    def get_project(self, project_id: int) -> Dict[str, Any]:
        """
        ID로 특정 프로젝트를 조회합니다.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
        """
        return _to_dict(self._get_or_raise(project_id))

    def list_projects(self) -> List[Dict[str, Any]]:
        """모든 프로젝트의 목록을 조회합니다."""
        return [_to_dict(p) for p in self.project_repo.list_all()]

    def list_projects_for_staff(self, staff_id: int) -> List[Dict[str, Any]]:
        """
        특정 교직원이 소유한 프로젝트 목록을 조회합니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            NotAStaffError: 사용자가 교직원이 아닐 때.
        """
        if not roles.is_staff(self.user_repo, staff_id):
            raise NotAStaffError("The user is not a staff")
        return [_to_dict(p) for p in self.project_repo.list_by_staff_id(staff_id)]

    def update_project(self, project_id: int, **fields) -> Dict[str, Any]:
        """
        프로젝트 정보를 수정합니다.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
            ValueError: 수정할 수 없는 필드가 포함되었을 때.
        """
        unknown = set(fields) - set(UPDATABLE_PROJECT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown project fields: {', '.join(sorted(unknown))}.")

        project = self._get_or_raise(project_id)
        for field, value in fields.items():
            setattr(project, field, value)
        return _to_dict(self.project_repo.update(project))

    def delete_project(self, project_id: int) -> bool:
        """
        프로젝트를 삭제합니다. 등록이 남아 있으면 외래 키 위반으로 StorageError 가 발생할 수 있습니다.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
        """
        project = self._get_or_raise(project_id)
        self.project_repo.delete(project)
        logger.info("Project %s deleted.", project_id)
        return True

    def make_unavailable(self, project_id: int) -> bool:
        """
        프로젝트를 모집 종료 상태로 표시합니다. 되돌리는 작업은 없으며,
        이미 존재하는 등록은 그대로 유지됩니다.
        """
        self.project_repo.make_unavailable(project_id)
        logger.info("Project %s marked unavailable.", project_id)
        return True
