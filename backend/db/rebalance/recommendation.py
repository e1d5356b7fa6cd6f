import uuid

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class AllocationRecommendation(Base):
    __tablename__ = "inv_allocation_recommendations"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    run_id = Column(UUID(as_uuid=True), ForeignKey("inv_rebalance_runs.id", ondelete="CASCADE"), nullable=False, index=True)
    tenant_id = Column(Text, nullable=False, index=True)

    fc_id = Column(Text, nullable=False, index=True)
    store_id = Column(Text, nullable=False, index=True)
    store_name = Column(String, nullable=True)

    recommended_qty = Column(Integer, nullable=False)
    current_on_hand = Column(Float, nullable=False, default=0)
    current_weeks_cover = Column(Float, nullable=True)
    projected_weeks_cover = Column(Float, nullable=True)
    sales_velocity = Column(Float, nullable=False, default=0)

    priority = Column(Text, nullable=False, index=True)
    reason = Column(Text, nullable=True)
    potential_revenue = Column(Float, nullable=False, default=0)

    status = Column(Text, nullable=False, default="pending", index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    run = relationship("RebalanceRun", back_populates="recommendations")
