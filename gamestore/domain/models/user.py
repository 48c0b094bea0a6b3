"""User domain model — maps to the 'users' table."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from gamestore.infrastructure.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    # Legacy column name; holds the bcrypt hash, never the raw password
    password_hash = Column("password", String(255), nullable=False)
    name = Column(String(200), nullable=True)
    last_post = Column(String(500), nullable=True)
    avatar_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<User {self.id}>"
