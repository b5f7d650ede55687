from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from courtdesk.app.core.time import utc_now
from courtdesk.app.db.base_class import Base


class Material(Base):
    __tablename__ = "materials"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    purchase_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    owner = relationship("User", back_populates="materials")
