from sqlalchemy import Column, Integer, String

from users_service.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # Stored as received, no hashing
    password = Column(String(255), nullable=False)
