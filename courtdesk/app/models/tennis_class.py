"""Group class and roster models."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from courtdesk.app.core.time import utc_now
from courtdesk.app.db.base_class import Base


class TennisClass(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    schedule = Column(String(20), nullable=False)
    days = Column(JSON, nullable=False, default=list)
    level = Column(String(50), nullable=False)
    observations = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    owner = relationship("User", back_populates="classes")
    roster = relationship("ClassStudent", back_populates="tennis_class", cascade="all, delete-orphan")


class ClassStudent(Base):
    __tablename__ = "class_students"
    __table_args__ = (UniqueConstraint("class_id", "student_id", name="uq_class_student"),)

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)

    tennis_class = relationship("TennisClass", back_populates="roster")
    student = relationship("Student", back_populates="class_links")
