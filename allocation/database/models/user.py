from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base

class User(Base):
    """
    시스템에 로그인하는 사용자(학생 또는 교직원)를 나타냅니다.
    type_id 가 역할을 결정하며(1=Student, 2=Staff), 알 수 없는 코드도 저장될 수 있습니다.
    username 의 중복은 서비스 계층에서만 검사합니다. 비밀번호는 평문으로 저장됩니다.
    """
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String)
    username = Column(String, nullable=False, index=True)
    password = Column(String, nullable=False)
    type_id = Column(Integer)

    # 삭제 시 참조 행을 NULL로 바꾸지 않고 DB의 외래 키 검사에 맡깁니다.
    projects = relationship("Project", back_populates="staff", passive_deletes="all")
