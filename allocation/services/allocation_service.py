import logging
from typing import Dict, Any, List

from allocation.database.models import RegistrationState
from allocation.repositories.interfaces import IRegistrationRepository, IUserRepository
from allocation.services import roles
from allocation.services.exceptions import (
    AlreadyAssignedError, AlreadyInterestedError, NotAStudentError, NotAStaffError
)

logger = logging.getLogger(__name__)


class AllocationService:
    """
    학생의 관심 등록이 하나의 확정 배정으로 이어지는 과정을 관리합니다.

    등록 행을 변경하는 유일한 주체이며, 다음 규칙을 보장합니다.
      - 같은 (프로젝트, 학생) 쌍에 대한 중복 등록 금지
      - 이미 배정된 학생의 새 관심 등록 금지
      - 배정 시 해당 학생의 다른 관심 등록 삭제

    검사와 쓰기는 별도의 저장소 호출이므로, 같은 학생에 대한 동시 요청 사이의
    경쟁 상태는 막지 않습니다.
    """

    def __init__(self, registration_repo: IRegistrationRepository, user_repo: IUserRepository):
        """
        AllocationService를 초기화합니다.

        Args:
            registration_repo: 등록 데이터에 접근하기 위한 리포지토리.
            user_repo: 역할 확인에 사용할 사용자 리포지토리.
        """
        self.registration_repo = registration_repo
        self.user_repo = user_repo

    def express_interest(self, project_id: int, student_id: int) -> int:
        """
        학생의 프로젝트 관심 등록을 생성합니다.

        배정 여부를 관심 여부보다 먼저 검사하므로, 두 조건이 모두 해당하면
        AlreadyAssignedError 가 발생합니다.

        Returns:
            생성된 등록의 ID.

        Raises:
            AlreadyAssignedError: 학생이 이미 어떤 프로젝트에 배정되어 있을 때.
            AlreadyInterestedError: 같은 프로젝트에 대한 등록이 이미 있을 때.
            StorageError: 저장소 오류 (존재하지 않는 프로젝트/학생 ID 포함).
        """
        if self.registration_repo.exists_assigned_for_student(student_id):
            logger.warning("Student %s is already assigned; interest in project %s rejected.",
                           student_id, project_id)
            raise AlreadyAssignedError("Student is already assigned to a project")

        if self.registration_repo.exists_interested(project_id, student_id):
            logger.warning("Student %s is already registered for project %s.", student_id, project_id)
            raise AlreadyInterestedError("Student is already interested in this project")

        registration_id = self.registration_repo.insert(project_id, student_id)
        logger.info("Registration %s created: student %s interested in project %s.",
                    registration_id, student_id, project_id)
        return registration_id

    def list_for_student(self, student_id: int) -> List[Dict[str, Any]]:
        """
        학생의 등록 목록을 조회합니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            NotAStudentError: 사용자가 학생이 아닐 때.
        """
        if not self.is_student(student_id):
            raise NotAStudentError("The user is not a student")
        return self.registration_repo.find_by_student_id(student_id)

    def list_for_staff(self, staff_id: int) -> List[Dict[str, Any]]:
        """
        교직원이 소유한 프로젝트들의 등록 목록을 조회합니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            NotAStaffError: 사용자가 교직원이 아닐 때.
        """
        if not self.is_staff(staff_id):
            raise NotAStaffError("The user is not a staff")
        return self.registration_repo.find_by_staff_id(staff_id)

    def approve(self, registration_id: int) -> bool:
        """
        등록을 배정(ASSIGNED) 상태로 승인하고, 해당 학생의 다른 관심 등록을 삭제합니다.

        삭제와 상태 변경은 각각 커밋되는 독립된 저장소 호출입니다. 삭제가 실패하면
        상태 변경은 실행되지 않고, 상태 변경만 실패하면 이미 삭제된 관심 등록은
        복구되지 않습니다. 이미 배정된 등록을 다시 승인해도 True 를 반환합니다.

        Returns:
            승인했으면 True, 등록을 찾지 못했으면 False.

        Raises:
            StorageError: 저장소 오류.
        """
        registration = self.registration_repo.find_by_id(registration_id)
        if registration is None:
            logger.warning("Registration %s not found; nothing to approve.", registration_id)
            return False

        student_id = registration["studentId"]

        deleted = self.registration_repo.delete_other_interested(student_id, registration_id)
        self.registration_repo.set_state(registration_id, RegistrationState.ASSIGNED)

        logger.info("Registration %s approved for student %s; %s other interest(s) removed.",
                    registration_id, student_id, deleted)
        return True

    def is_assigned(self, student_id: int) -> bool:
        """학생이 어떤 프로젝트에든 배정되어 있는지 확인합니다."""
        return self.registration_repo.exists_assigned_for_student(student_id)

    def is_student(self, user_id: int) -> bool:
        return roles.is_student(self.user_repo, user_id)

    def is_staff(self, user_id: int) -> bool:
        return roles.is_staff(self.user_repo, user_id)
