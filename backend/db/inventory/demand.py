import uuid

from sqlalchemy import Column, Float, ForeignKey, Integer, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database import Base


class DemandState(Base):
    __tablename__ = "inv_state_demand"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Text, nullable=False, index=True)

    store_id = Column(
        UUID(as_uuid=True),
        ForeignKey("inv_stores.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    fc_id = Column(Text, nullable=False, index=True)

    avg_daily_sales = Column(Float, nullable=False, default=0)
    total_sold = Column(Integer, nullable=True)  # trailing 30 days, informational

    store = relationship("Store", back_populates="demand")
