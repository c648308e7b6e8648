from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session, aliased
from allocation.database import models
from allocation.database.models import RegistrationState
from allocation.repositories.interfaces import IRegistrationRepository
from .errors import translate_storage_errors

Registration = models.Registration


class SqlalchemyRegistrationRepository(IRegistrationRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def _view_query(self):
        """등록 행에 학생 이름, 프로젝트 제목, 담당 교직원 이름을 조인한 쿼리."""
        student = aliased(models.User)
        staff = aliased(models.User)
        return (
            self.db.query(
                Registration.id,
                Registration.project_id,
                Registration.student_id,
                Registration.registration_state,
                student.name.label("student_name"),
                models.Project.title.label("project_title"),
                staff.name.label("staff_name"),
            )
            .select_from(Registration)
            .join(student, Registration.student_id == student.id)
            .join(models.Project, Registration.project_id == models.Project.id)
            .join(staff, models.Project.staff_id == staff.id)
        )

    @staticmethod
    def _to_view(row) -> Dict[str, Any]:
        return {
            "registrationId": row.id,
            "projectId": row.project_id,
            "studentId": row.student_id,
            "registrationState": row.registration_state,
            "studentName": row.student_name,
            "projectTitle": row.project_title,
            "staffName": row.staff_name,
        }

    @translate_storage_errors
    def insert(self, project_id: int, student_id: int) -> int:
        registration = Registration(
            project_id=project_id,
            student_id=student_id,
            registration_state=RegistrationState.INTERESTED.value,
        )
        self.db.add(registration)
        self.db.commit()
        self.db.refresh(registration)
        return registration.id

    @translate_storage_errors
    def find_by_student_id(self, student_id: int) -> List[Dict[str, Any]]:
        rows = self._view_query().filter(Registration.student_id == student_id).all()
        return [self._to_view(row) for row in rows]

    @translate_storage_errors
    def find_by_staff_id(self, staff_id: int) -> List[Dict[str, Any]]:
        rows = self._view_query().filter(models.Project.staff_id == staff_id).all()
        return [self._to_view(row) for row in rows]

    @translate_storage_errors
    def exists_interested(self, project_id: int, student_id: int) -> bool:
        # 상태 조건 없이 (프로젝트, 학생) 쌍의 존재만 확인합니다.
        return self.db.query(Registration).filter(
            Registration.project_id == project_id,
            Registration.student_id == student_id,
        ).count() > 0

    @translate_storage_errors
    def exists_assigned_for_student(self, student_id: int) -> bool:
        return self.db.query(Registration).filter(
            Registration.student_id == student_id,
            Registration.registration_state == RegistrationState.ASSIGNED.value,
        ).count() > 0

    @translate_storage_errors
    def delete_other_interested(self, student_id: int, keep_registration_id: int) -> int:
        deleted = self.db.query(Registration).filter(
            Registration.student_id == student_id,
            Registration.registration_state == RegistrationState.INTERESTED.value,
            Registration.id != keep_registration_id,
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted

    @translate_storage_errors
    def set_state(self, registration_id: int, state: int) -> None:
        self.db.query(Registration).filter(Registration.id == registration_id).update(
            {Registration.registration_state: int(state)},
            synchronize_session=False,
        )
        self.db.commit()

    @translate_storage_errors
    def find_by_id(self, registration_id: int) -> Optional[Dict[str, Any]]:
        registration = self.db.query(Registration).filter(Registration.id == registration_id).first()
        if not registration:
            return None
        return {
            "registrationId": registration.id,
            "projectId": registration.project_id,
            "studentId": registration.student_id,
            "registrationState": registration.registration_state,
        }
