from abc import ABC, abstractmethod
from typing import List, Optional
from allocation.database import models

class IProjectRepository(ABC):
    @abstractmethod
    def create(self, project_model: models.Project) -> models.Project:
        """새로운 프로젝트를 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, project_id: int) -> Optional[models.Project]:
        """고유 ID로 특정 프로젝트를 조회합니다. (담당 교직원 정보 포함)"""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Project]:
        """모든 프로젝트의 목록을 조회합니다."""
        pass

    @abstractmethod
    def list_by_staff_id(self, staff_id: int) -> List[models.Project]:
        """특정 교직원이 소유한 프로젝트의 목록을 조회합니다."""
        pass

    @abstractmethod
    def update(self, project: models.Project) -> models.Project:
        """변경된 프로젝트 정보를 저장합니다."""
        pass

    @abstractmethod
    def delete(self, project: models.Project) -> bool:
        """특정 프로젝트를 데이터베이스에서 삭제합니다."""
        pass

    @abstractmethod
    def make_unavailable(self, project_id: int) -> None:
        """프로젝트를 '모집 종료' 상태로 표시합니다. 기존 등록은 그대로 둡니다."""
        pass
