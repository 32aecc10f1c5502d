from sqlalchemy import Column, Integer, Text
from ..core.database import Base


class Task(Base):
    """Task model for database"""
    __tablename__ = "tasks"
    # AUTOINCREMENT keeps SQLite from handing out ids of deleted rows again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True, default="")
    status = Column(Text, nullable=False)

    def to_dict(self) -> dict:
        """Convert task to its JSON representation"""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description or "",
            "status": self.status,
        }

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', status='{self.status}')>"
