from sqlmodel import SQLModel, Field
from typing import Optional

class User(SQLModel, table=True):
    __tablename__ = "users"
    # Ids are never reused after a delete
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    email: Optional[str] = Field(default=None, unique=True, index=True, max_length=320)
    phone: Optional[str] = Field(default=None, max_length=50)
