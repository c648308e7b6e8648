from typing import List, Optional
from sqlalchemy.orm import Session
from allocation.database import models
from allocation.repositories.interfaces import IUserRepository
from .errors import translate_storage_errors

class SqlalchemyUserRepository(IUserRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    @translate_storage_errors
    def create(self, user_model: models.User) -> models.User:
        self.db.add(user_model)
        self.db.commit()
        self.db.refresh(user_model)
        return user_model

    @translate_storage_errors
    def find_by_id(self, user_id: int) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.id == user_id).first()

    @translate_storage_errors
    def find_by_username(self, username: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.username == username).order_by(models.User.id.asc()).first()

    @translate_storage_errors
    def list_all(self) -> List[models.User]:
        return self.db.query(models.User).order_by(models.User.id.asc()).all()

    @translate_storage_errors
    def update(self, user: models.User) -> models.User:
        self.db.commit()
        self.db.refresh(user)
        return user

    @translate_storage_errors
    def delete(self, user: models.User) -> bool:
        if user:
            self.db.delete(user)
            self.db.commit()
            return True
        return False
