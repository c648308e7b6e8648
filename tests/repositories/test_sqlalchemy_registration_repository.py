# tests/repositories/test_sqlalchemy_registration_repository.py
import pytest

from allocation.repositories.sqlalchemy import SqlalchemyRegistrationRepository
from allocation.database.models import RegistrationState
from allocation.services.exceptions import StorageError

INTERESTED = RegistrationState.INTERESTED.value
ASSIGNED = RegistrationState.ASSIGNED.value

@pytest.fixture
def registration_repo(seeded) -> SqlalchemyRegistrationRepository:
    return SqlalchemyRegistrationRepository(seeded)

class TestInsertAndFind:
    def test_insert_creates_interested_row(self, registration_repo, registration_rows):
        registration_id = registration_repo.insert(2, 1)

        assert isinstance(registration_id, int)
        assert registration_rows(1) == [(2, INTERESTED)]

    def test_insert_does_not_check_duplicates(self, registration_repo, registration_rows):
        """리포지토리는 중복 검사를 하지 않으므로 같은 쌍을 두 번 삽입할 수 있습니다."""
        first = registration_repo.insert(2, 1)
        second = registration_repo.insert(2, 1)

        assert first != second
        assert registration_rows(1) == [(2, INTERESTED), (2, INTERESTED)]

    @pytest.mark.parametrize("project_id, student_id", [(99, 1), (2, 99)])
    def test_insert_with_unknown_reference_raises_storage_error(self, registration_repo, project_id, student_id):
        """외래 키 위반은 StorageError 로 전파되고, 세션은 계속 사용할 수 있어야 합니다."""
        with pytest.raises(StorageError):
            registration_repo.insert(project_id, student_id)

        assert registration_repo.find_by_student_id(1) == []

    def test_find_by_id_returns_raw_fields(self, registration_repo):
        registration_id = registration_repo.insert(3, 1)

        assert registration_repo.find_by_id(registration_id) == {
            "registrationId": registration_id,
            "projectId": 3,
            "studentId": 1,
            "registrationState": INTERESTED,
        }

    def test_find_by_id_missing(self, registration_repo):
        assert registration_repo.find_by_id(999) is None

    def test_find_by_student_id_joins_names(self, registration_repo):
        registration_id = registration_repo.insert(3, 1)

        views = registration_repo.find_by_student_id(1)

        assert views == [{
            "registrationId": registration_id,
            "projectId": 3,
            "studentId": 1,
            "registrationState": INTERESTED,
            "studentName": "Student John Doe",
            "projectTitle": "IoT Home Automation System",
            "staffName": "Staff Jack Black",
        }]

    def test_find_by_student_id_empty(self, registration_repo):
        assert registration_repo.find_by_student_id(3) == []

    def test_find_by_staff_id_is_scoped_to_owned_projects(self, registration_repo):
        registration_repo.insert(1, 1)   # Jim(2) 소유
        registration_repo.insert(2, 3)   # Jim(2) 소유
        registration_repo.insert(3, 1)   # Jack(4) 소유

        jim_views = registration_repo.find_by_staff_id(2)
        jack_views = registration_repo.find_by_staff_id(4)

        assert sorted((v["projectId"], v["studentId"]) for v in jim_views) == [(1, 1), (2, 3)]
        assert {v["staffName"] for v in jim_views} == {"Staff Jim Beam"}
        assert [(v["projectId"], v["studentId"]) for v in jack_views] == [(3, 1)]

class TestExistenceChecks:
    def test_exists_interested_ignores_state(self, registration_repo):
        """이름과 달리 ASSIGNED 행도 존재로 판정합니다."""
        registration_id = registration_repo.insert(2, 1)
        registration_repo.set_state(registration_id, ASSIGNED)

        assert registration_repo.exists_interested(2, 1) is True
        assert registration_repo.exists_interested(3, 1) is False

    def test_exists_assigned_for_student(self, registration_repo):
        registration_id = registration_repo.insert(2, 1)
        assert registration_repo.exists_assigned_for_student(1) is False

        registration_repo.set_state(registration_id, ASSIGNED)

        assert registration_repo.exists_assigned_for_student(1) is True
        assert registration_repo.exists_assigned_for_student(3) is False

class TestMutations:
    def test_delete_other_interested_keeps_target_and_other_students(self, registration_repo, registration_rows):
        keep = registration_repo.insert(2, 1)
        registration_repo.insert(3, 1)
        registration_repo.insert(4, 1)
        registration_repo.insert(3, 3)

        deleted = registration_repo.delete_other_interested(1, keep)

        assert deleted == 2
        assert registration_rows(1) == [(2, INTERESTED)]
        assert registration_rows(3) == [(3, INTERESTED)]

    def test_delete_other_interested_is_idempotent(self, registration_repo, registration_rows):
        keep = registration_repo.insert(2, 1)
        registration_repo.insert(3, 1)

        registration_repo.delete_other_interested(1, keep)
        assert registration_repo.delete_other_interested(1, keep) == 0
        assert registration_rows(1) == [(2, INTERESTED)]

    def test_delete_other_interested_leaves_assigned_rows(self, registration_repo, registration_rows):
        assigned = registration_repo.insert(2, 1)
        registration_repo.set_state(assigned, ASSIGNED)
        keep = registration_repo.insert(3, 1)

        registration_repo.delete_other_interested(1, keep)

        assert registration_rows(1) == [(2, ASSIGNED), (3, INTERESTED)]

    def test_set_state_is_unconditional(self, registration_repo):
        """상태 전이 방향을 검사하지 않습니다."""
        registration_id = registration_repo.insert(2, 1)

        registration_repo.set_state(registration_id, ASSIGNED)
        registration_repo.set_state(registration_id, INTERESTED)

        assert registration_repo.find_by_id(registration_id)["registrationState"] == INTERESTED
