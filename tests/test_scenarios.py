# tests/test_scenarios.py
"""관심 등록부터 배정까지의 전체 흐름을 실제 SQLAlchemy 리포지토리로 검증합니다."""
import pytest

from allocation.repositories.sqlalchemy import SqlalchemyRegistrationRepository, SqlalchemyUserRepository
from allocation.services.allocation_service import AllocationService
from allocation.services.exceptions import *
from allocation.database.models import RegistrationState

INTERESTED = RegistrationState.INTERESTED.value
ASSIGNED = RegistrationState.ASSIGNED.value

@pytest.fixture
def service(seeded) -> AllocationService:
    return AllocationService(SqlalchemyRegistrationRepository(seeded), SqlalchemyUserRepository(seeded))

def test_interest_then_approval_clears_other_interests(service, registration_rows):
    """학생 1이 프로젝트 2, 3에 관심 등록 후 프로젝트 2에 배정되는 흐름."""
    # === Arrange ===
    first = service.express_interest(2, 1)
    assert registration_rows(1) == [(2, INTERESTED)]
    service.express_interest(3, 1)
    assert registration_rows(1) == [(2, INTERESTED), (3, INTERESTED)]

    # === Act ===
    approved = service.approve(first)

    # === Assert ===
    assert approved is True
    assert registration_rows(1) == [(2, ASSIGNED)]
    assert service.is_assigned(1) is True
    with pytest.raises(AlreadyAssignedError):
        service.express_interest(4, 1)

def test_approve_missing_registration_leaves_ledger_untouched(service, registration_rows):
    service.express_interest(2, 1)

    assert service.approve(999) is False
    assert registration_rows(1) == [(2, INTERESTED)]

def test_repeated_interest_is_rejected(service, registration_rows):
    service.express_interest(2, 1)

    with pytest.raises(AlreadyInterestedError):
        service.express_interest(2, 1)
    assert registration_rows(1) == [(2, INTERESTED)]

@pytest.mark.parametrize("other_interests", [0, 1, 3])
def test_approval_leaves_exactly_one_assigned_row(service, registration_rows, other_interests):
    target = service.express_interest(1, 1)
    for project_id in [2, 3, 4][:other_interests]:
        service.express_interest(project_id, 1)

    service.approve(target)

    assert registration_rows(1) == [(1, ASSIGNED)]

def test_approval_does_not_touch_other_students(service, registration_rows):
    target = service.express_interest(2, 1)
    service.express_interest(2, 3)
    service.express_interest(3, 3)

    service.approve(target)

    assert registration_rows(3) == [(2, INTERESTED), (3, INTERESTED)]

def test_reapproval_is_a_no_op_that_returns_true(service, registration_rows):
    target = service.express_interest(2, 1)
    service.approve(target)

    assert service.approve(target) is True
    assert registration_rows(1) == [(2, ASSIGNED)]

@pytest.mark.parametrize("project_id", [1, 2, 3, 4])
def test_assigned_student_is_rejected_for_every_project(service, project_id):
    service.approve(service.express_interest(2, 1))

    with pytest.raises(AlreadyAssignedError):
        service.express_interest(project_id, 1)

def test_assigned_takes_precedence_over_interested_for_same_project(service):
    service.approve(service.express_interest(2, 1))

    with pytest.raises(AlreadyAssignedError):
        service.express_interest(2, 1)

def test_interest_in_unknown_project_is_a_storage_failure(service, registration_rows):
    with pytest.raises(StorageError):
        service.express_interest(99, 1)
    assert registration_rows(1) == []

def test_unavailable_project_still_accepts_interest(seeded, service):
    """모집 종료 표시는 관심 등록 자체를 막지 않습니다. (클라이언트 측 검사에 맡김)"""
    from allocation.repositories.sqlalchemy import SqlalchemyProjectRepository
    SqlalchemyProjectRepository(seeded).make_unavailable(2)

    assert isinstance(service.express_interest(2, 1), int)

class TestRoleGatedListing:
    def test_list_for_student(self, service):
        service.express_interest(2, 1)
        service.express_interest(3, 1)

        titles = sorted(v["projectTitle"] for v in service.list_for_student(1))

        assert titles == ["IoT Home Automation System", "Machine Learning for Predictive Analysis"]

    def test_list_for_staff(self, service):
        service.express_interest(2, 1)
        service.express_interest(3, 3)

        views = service.list_for_staff(4)

        assert [(v["studentName"], v["projectTitle"]) for v in views] == [
            ("Student Jill Hill", "IoT Home Automation System")
        ]

    @pytest.mark.parametrize("method, user_id, error", [
        ("list_for_student", 42, UserNotFoundError),
        ("list_for_student", 2, NotAStudentError),
        ("list_for_student", 5, NotAStudentError),
        ("list_for_staff", 42, UserNotFoundError),
        ("list_for_staff", 1, NotAStaffError),
        ("list_for_staff", 5, NotAStaffError),
    ])
    def test_role_errors(self, service, method, user_id, error):
        with pytest.raises(error):
            getattr(service, method)(user_id)
