from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class Registration(Base):
    """
    학생과 프로젝트 사이의 관계(관심 등록 또는 배정)를 나타냅니다.
    registration_state: 1=Interested, 2=Assigned.
    """
    __tablename__ = "project_registrations"
    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"))
    student_id = Column(Integer, ForeignKey("users.id"))
    registration_state = Column(Integer, nullable=False)

    project = relationship("Project", back_populates="registrations")
    student = relationship("User")
