import uuid

from sqlalchemy import JSON, Boolean, Column, Text
from sqlalchemy.dialects.postgresql import UUID

from ..database import Base


class ConstraintRegistry(Base):
    __tablename__ = "inv_constraint_registry"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Text, nullable=False, index=True)

    # e.g. 'min_cover_weeks', 'lateral_enabled'
    constraint_key = Column(Text, nullable=False, index=True)
    constraint_value = Column(JSON, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    description = Column(Text, nullable=True)
