from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from allocation.database import models
from allocation.repositories.interfaces import IProjectRepository
from .errors import translate_storage_errors

class SqlalchemyProjectRepository(IProjectRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def _query(self):
        # staff_name 계산을 위해 담당 교직원을 함께 로드합니다.
        return self.db.query(models.Project).options(joinedload(models.Project.staff))

    @translate_storage_errors
    def create(self, project_model: models.Project) -> models.Project:
        self.db.add(project_model)
        self.db.commit()
        self.db.refresh(project_model)
        return project_model

    @translate_storage_errors
    def find_by_id(self, project_id: int) -> Optional[models.Project]:
        return self._query().filter(models.Project.id == project_id).first()

    @translate_storage_errors
    def list_all(self) -> List[models.Project]:
        return self._query().order_by(models.Project.id.asc()).all()

    @translate_storage_errors
    def list_by_staff_id(self, staff_id: int) -> List[models.Project]:
        return self._query().filter(models.Project.staff_id == staff_id).order_by(models.Project.id.asc()).all()

    @translate_storage_errors
    def update(self, project: models.Project) -> models.Project:
        self.db.commit()
        self.db.refresh(project)
        return project

    @translate_storage_errors
    def delete(self, project: models.Project) -> bool:
        if project:
            self.db.delete(project)
            self.db.commit()
            return True
        return False

    @translate_storage_errors
    def make_unavailable(self, project_id: int) -> None:
        self.db.query(models.Project).filter(models.Project.id == project_id).update(
            {models.Project.available: models.ProjectAvailability.UNAVAILABLE.value},
            synchronize_session=False,
        )
        self.db.commit()
