from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from allocation.config import get_settings


def build_engine(database_url: str, **kwargs):
    """
    SQLAlchemy 엔진을 생성합니다.
    SQLite인 경우 스레드 설정, busy timeout, 외래 키 제약을 함께 적용합니다.
    """
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        connect_args = dict(kwargs.pop("connect_args", {}))
        connect_args.setdefault("check_same_thread", False)
        connect_args.setdefault("timeout", get_settings().db_timeout)
        kwargs["connect_args"] = connect_args

    new_engine = create_engine(database_url, **kwargs)

    if is_sqlite:
        # SQLite는 연결마다 외래 키 검사를 켜야 합니다.
        @event.listens_for(new_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


engine = build_engine(get_settings().database_url)

# autocommit=False, autoflush=False: 리포지토리가 명시적으로 commit을 호출해야 DB에 반영됩니다.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 모든 모델 클래스가 상속받을 Base 클래스
Base = declarative_base()
