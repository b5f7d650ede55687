from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from courtdesk.app.db.base_class import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=True)
    hashed_password = Column(String, nullable=True)
    phone = Column(String(50), nullable=True)
    avatar_url = Column(String(512), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    preferences = relationship("UserPreferences", back_populates="user", cascade="all, delete-orphan", uselist=False)
    students = relationship("Student", back_populates="owner", cascade="all, delete-orphan", foreign_keys="Student.owner_id")
    invoices = relationship("Invoice", back_populates="owner", cascade="all, delete-orphan", foreign_keys="Invoice.owner_id")
    classes = relationship("TennisClass", back_populates="owner", cascade="all, delete-orphan", foreign_keys="TennisClass.owner_id")
    private_lessons = relationship("PrivateLesson", back_populates="owner", cascade="all, delete-orphan", foreign_keys="PrivateLesson.owner_id")
    materials = relationship("Material", back_populates="owner", cascade="all, delete-orphan", foreign_keys="Material.owner_id")
    notes = relationship("Note", back_populates="owner", cascade="all, delete-orphan", foreign_keys="Note.owner_id")
