# novacart/data/models/user.py
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Enum

from novacart.data.database import Base


class Role(str, enum.Enum):
    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(Role, name="user_role"), nullable=False, default=Role.CUSTOMER)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
