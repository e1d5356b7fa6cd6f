import uuid

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class RebalanceSuggestion(Base):
    __tablename__ = "inv_rebalance_suggestions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    run_id = Column(UUID(as_uuid=True), ForeignKey("inv_rebalance_runs.id", ondelete="CASCADE"), nullable=False, index=True)
    tenant_id = Column(Text, nullable=False, index=True)

    transfer_type = Column(Text, nullable=False, index=True)  # push|lateral|recall
    fc_id = Column(Text, nullable=False, index=True)

    from_location = Column(Text, nullable=False)
    from_location_name = Column(String, nullable=True)
    to_location = Column(Text, nullable=False)
    to_location_name = Column(String, nullable=True)
    qty = Column(Integer, nullable=False)
    reason = Column(Text, nullable=True)

    from_weeks_cover = Column(Float, nullable=True)
    to_weeks_cover = Column(Float, nullable=True)
    from_weeks_cover_after = Column(Float, nullable=True)
    to_weeks_cover_after = Column(Float, nullable=True)

    priority = Column(Text, nullable=False, index=True)  # P1|P2|P3
    potential_revenue_gain = Column(Float, nullable=False, default=0)
    logistics_cost_estimate = Column(Float, nullable=False, default=0)
    net_benefit = Column(Float, nullable=False, default=0)

    # Advanced by the approval workflow, never by the engine.
    status = Column(Text, nullable=False, default="pending", index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    run = relationship("RebalanceRun", back_populates="suggestions")
