import uuid

from sqlalchemy import Boolean, Column, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database import Base


class Store(Base):
    __tablename__ = "inv_stores"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Text, nullable=False, index=True)

    store_name = Column(String, nullable=False)
    store_code = Column(String, nullable=True)
    # 'central_warehouse' | 'store'
    location_type = Column(Text, nullable=False, default="store", index=True)
    region = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    positions = relationship("InventoryPosition", back_populates="store", cascade="all, delete-orphan")
    demand = relationship("DemandState", back_populates="store", cascade="all, delete-orphan")
