from sqlalchemy import Column, Integer, Text
from .db import Base


class Recipe(Base):
    __tablename__ = "recipes"
    # ids of deleted rows are never handed out again, like a serial sequence
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    photo = Column(Text, nullable=False)  # opaque, e.g. base64 or a URI
