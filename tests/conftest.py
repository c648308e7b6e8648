# tests/conftest.py
import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from allocation.database.database import Base, build_engine
from allocation.database import models
from allocation.database.models import UserType

# ===================================================================
#  인메모리 SQLite 기반 Fixture (리포지토리 / 시나리오 / WSGI 테스트용)
# ===================================================================

@pytest.fixture
def engine():
    """테스트마다 새로 만드는 인메모리 SQLite 엔진. 외래 키 검사가 켜져 있습니다."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()

@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()

@pytest.fixture
def seeded(db_session):
    """
    사용자 5명과 프로젝트 4개를 삽입합니다. 등록은 없습니다.

    id 1: 학생 John, id 2: 교직원 Jim, id 3: 학생 Jill, id 4: 교직원 Jack,
    id 5: 알 수 없는 유형(type_id=9)의 사용자.
    프로젝트 1, 2는 Jim(2), 3, 4는 Jack(4) 소유입니다.
    """
    users = [
        models.User(id=1, name="Student John Doe", username="20240001", password="password", type_id=UserType.STUDENT.value),
        models.User(id=2, name="Staff Jim Beam", username="20240002", password="password", type_id=UserType.STAFF.value),
        models.User(id=3, name="Student Jill Hill", username="20240003", password="password", type_id=UserType.STUDENT.value),
        models.User(id=4, name="Staff Jack Black", username="20240004", password="password", type_id=UserType.STAFF.value),
        models.User(id=5, name="Visitor", username="visitor", password="password", type_id=9),
    ]
    db_session.add_all(users)
    db_session.flush()
    db_session.add_all([
        models.Project(id=1, title="Responsive Website Development", description="Charity website", staff_id=2, available=1),
        models.Project(id=2, title="Machine Learning for Predictive Analysis", description="Churn model", staff_id=2, available=1),
        models.Project(id=3, title="IoT Home Automation System", description="Remote appliances", staff_id=4, available=1),
        models.Project(id=4, title="Health Monitoring Mobile App", description="Health metrics", staff_id=4, available=1),
    ])
    db_session.commit()
    return db_session

@pytest.fixture
def registration_rows(db_session):
    """학생의 등록 행을 (project_id, registration_state) 튜플 목록으로 반환합니다."""
    def _rows(student_id):
        db_session.expire_all()
        rows = db_session.query(models.Registration).filter(models.Registration.student_id == student_id).all()
        return sorted((r.project_id, r.registration_state) for r in rows)
    return _rows
