# novacart/repos/user_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from novacart.data.models import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def rollback(self):
        self.db.rollback()
