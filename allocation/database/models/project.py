from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base
from .enums import ProjectAvailability

class Project(Base):
    """
    교직원이 제안한 프로젝트를 나타냅니다.
    available 이 UNAVAILABLE(2)이면 새 관심 등록을 받지 않는다는 표시일 뿐,
    기존 등록에는 영향을 주지 않습니다.
    """
    __tablename__ = "projects"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    staff_id = Column(Integer, ForeignKey("users.id"))
    available = Column(Integer, default=ProjectAvailability.AVAILABLE.value)

    staff = relationship("User", back_populates="projects")
    registrations = relationship("Registration", back_populates="project", passive_deletes="all")

    @property
    def staff_name(self):
        # 저장하지 않고 조회 시 users 와의 조인으로 계산합니다.
        return self.staff.name if self.staff else None
