import logging

from .database import engine as default_engine, SessionLocal, Base
from .models import *

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    ("Student John Doe", "20240001", "password", UserType.STUDENT),
    ("Staff Jim Beam", "20240002", "password", UserType.STAFF),
    ("Student Jill Hill", "20240003", "password", UserType.STUDENT),
    ("Staff Jack Black", "20240004", "password", UserType.STAFF),
]

# (title, description, 소유 교직원의 SAMPLE_USERS 인덱스)
SAMPLE_PROJECTS = [
    ("Responsive Website Development",
     "Develop a responsive website for a local charity, focusing on mobile and desktop compatibility.", 1),
    ("Machine Learning for Predictive Analysis",
     "Create a machine learning model to predict customer churn based on historical data.", 1),
    ("IoT Home Automation System",
     "Develop an IoT system that allows users to control home appliances remotely via a web interface.", 3),
    ("Health Monitoring Mobile App",
     "Develop a mobile application that tracks and provides insights on users' health metrics.", 3),
]

# (SAMPLE_PROJECTS 인덱스, SAMPLE_USERS 인덱스)
SAMPLE_REGISTRATIONS = [(0, 0), (1, 0), (1, 2)]


def initialize_db(engine=None, session_factory=None, seed_sample_data=True):
    """
    DB와 테이블을 생성하고, 비어 있으면 샘플 데이터를 삽입합니다.

    Args:
        engine: 테이블을 생성할 엔진. 생략하면 설정의 기본 엔진을 사용합니다.
        session_factory: 샘플 데이터 삽입에 사용할 세션 팩토리.
        seed_sample_data: False 이면 테이블만 생성합니다.
    """
    engine = engine or default_engine
    session_factory = session_factory or SessionLocal

    # 모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created.")

    if not seed_sample_data:
        return

    db = session_factory()
    try:
        if db.query(User).first():
            logger.info("Sample data already present; skipping seed.")
            return

        users = [
            User(name=name, username=username, password=password, type_id=type_id.value)
            for name, username, password, type_id in SAMPLE_USERS
        ]
        db.add_all(users)
        # 각 객체의 id를 할당받기 위해 flush 합니다.
        db.flush()

        projects = [
            Project(title=title, description=description,
                    staff_id=users[staff_index].id,
                    available=ProjectAvailability.AVAILABLE.value)
            for title, description, staff_index in SAMPLE_PROJECTS
        ]
        db.add_all(projects)
        db.flush()

        db.add_all([
            Registration(project_id=projects[project_index].id,
                         student_id=users[student_index].id,
                         registration_state=RegistrationState.INTERESTED.value)
            for project_index, student_index in SAMPLE_REGISTRATIONS
        ])

        db.commit()
        logger.info("Sample data inserted: %d users, %d projects, %d registrations.",
                    len(SAMPLE_USERS), len(SAMPLE_PROJECTS), len(SAMPLE_REGISTRATIONS))
    except Exception:
        logger.exception("Database initialisation failed.")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == '__main__':
    from allocation.config import get_settings

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    initialize_db(seed_sample_data=settings.seed_sample_data)
