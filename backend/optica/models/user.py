from sqlalchemy import Column, String

from .base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    name     = Column(String, nullable=False)
    email    = Column(String, unique=True, index=True, nullable=False)
    # bcrypt hash, see utils.auth.get_password_hash
    password = Column(String, nullable=False)
