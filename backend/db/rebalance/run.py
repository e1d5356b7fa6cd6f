import uuid

from sqlalchemy import Column, Date, DateTime, Integer, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class RebalanceRun(Base):
    __tablename__ = "inv_rebalance_runs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Text, nullable=False, index=True)
    run_type = Column(Text, nullable=False, index=True)  # rebalance|allocate|recall
    run_date = Column(Date, nullable=False, index=True)
    status = Column(Text, nullable=False, default="running", index=True)  # running|completed|failed

    started_at = Column(DateTime, nullable=False, server_default=func.now())
    completed_at = Column(DateTime, nullable=True)

    # total_suggestions doubles as the recommendation count for allocate runs
    total_suggestions = Column(Integer, nullable=False, default=0)
    total_units = Column(Integer, nullable=False, default=0)
    push_units = Column(Integer, nullable=False, default=0)
    lateral_units = Column(Integer, nullable=False, default=0)

    error_message = Column(Text, nullable=True)
    created_by = Column(Text, nullable=True)

    suggestions = relationship("RebalanceSuggestion", back_populates="run", cascade="all, delete-orphan")
    recommendations = relationship("AllocationRecommendation", back_populates="run", cascade="all, delete-orphan")
