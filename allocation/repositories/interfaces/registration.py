from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any


class IRegistrationRepository(ABC):
    """
    프로젝트 등록(관심/배정) 행에 대한 저장소.

    업무 규칙 검증은 하지 않습니다. 중복 관심 등록, 이중 배정 방지 등의 불변식은
    호출자(AllocationService)가 각 호출 전후로 보장해야 합니다.
    모든 저장소 오류는 StorageError 하나로 전파됩니다.
    """

    @abstractmethod
    def insert(self, project_id: int, student_id: int) -> int:
        """
        INTERESTED 상태의 등록 행을 생성하고 새 등록 ID를 반환합니다.
        중복 검사는 하지 않으며, 존재하지 않는 프로젝트/학생 ID는 외래 키 위반으로 실패합니다.
        """
        pass

    @abstractmethod
    def find_by_student_id(self, student_id: int) -> List[Dict[str, Any]]:
        """
        학생의 모든 등록을 학생 이름, 프로젝트 제목, 담당 교직원 이름과 함께 조회합니다.

        Returns:
            registrationId, projectId, studentId, registrationState,
            studentName, projectTitle, staffName 키를 가진 딕셔너리의 리스트.
            순서는 보장하지 않으며, 결과가 없으면 빈 리스트.
        """
        pass

    @abstractmethod
    def find_by_staff_id(self, staff_id: int) -> List[Dict[str, Any]]:
        """교직원이 소유한 프로젝트에 대한 모든 등록을 find_by_student_id 와 같은 형태로 조회합니다."""
        pass

    @abstractmethod
    def exists_interested(self, project_id: int, student_id: int) -> bool:
        """
        (프로젝트, 학생) 쌍의 등록 행이 존재하는지 확인합니다.
        이름과 달리 상태와 무관하게 검사합니다. ASSIGNED 행도 True 입니다.
        """
        pass

    @abstractmethod
    def exists_assigned_for_student(self, student_id: int) -> bool:
        """학생이 어느 프로젝트에든 ASSIGNED 상태의 등록을 가지고 있는지 확인합니다."""
        pass

    @abstractmethod
    def delete_other_interested(self, student_id: int, keep_registration_id: int) -> int:
        """
        keep_registration_id 를 제외한 학생의 INTERESTED 등록을 모두 삭제하고 삭제된 행 수를 반환합니다.
        다시 호출해도 추가 변화가 없습니다.
        """
        pass

    @abstractmethod
    def set_state(self, registration_id: int, state: int) -> None:
        """등록 상태를 무조건 덮어씁니다. 상태 전이의 방향은 검사하지 않습니다."""
        pass

    @abstractmethod
    def find_by_id(self, registration_id: int) -> Optional[Dict[str, Any]]:
        """조인 없이 등록 행의 원본 필드(registrationId, projectId, studentId, registrationState)를 조회합니다."""
        pass
