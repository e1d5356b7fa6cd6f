import uuid

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database import Base


class InventoryPosition(Base):
    __tablename__ = "inv_state_positions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Text, nullable=False, index=True)

    store_id = Column(
        UUID(as_uuid=True),
        ForeignKey("inv_stores.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    fc_id = Column(Text, nullable=False, index=True)  # item id
    sku = Column(Text, nullable=True)

    on_hand = Column(Integer, nullable=False, default=0)
    reserved = Column(Integer, nullable=False, default=0)
    safety_stock = Column(Integer, nullable=False, default=0)
    # Filled by some feeds; otherwise on_hand - reserved
    available = Column(Integer, nullable=True)

    store = relationship("Store", back_populates="positions")
