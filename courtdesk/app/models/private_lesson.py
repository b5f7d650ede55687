"""Private lesson model."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, Time
from sqlalchemy.orm import relationship

from courtdesk.app.core.time import utc_now
from courtdesk.app.db.base_class import Base


class PrivateLesson(Base):
    __tablename__ = "private_lessons"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=True, index=True)
    student_name = Column(String, nullable=False)
    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=False)
    type = Column(String(10), nullable=False, default="regular")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    owner = relationship("User", back_populates="private_lessons")
    student = relationship("Student", back_populates="private_lessons")
