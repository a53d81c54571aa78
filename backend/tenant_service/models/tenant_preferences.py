from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import relationship

from tenant_service.models.tenant import Base, new_id, utcnow


DEFAULT_VOLUME = 50


class TenantPreferences(Base):
    __tablename__ = "tenant_preferences"

    id = Column(String(36), primary_key=True, default=new_id)
    tenant_id = Column(
        String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
    )
    playback_settings = Column(JSON, nullable=False, default=dict)
    genre_preferences = Column(JSON, nullable=False, default=list)
    ad_rules = Column(JSON, nullable=False, default=dict)
    volume_default = Column(Integer, nullable=False, default=DEFAULT_VOLUME)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    tenant = relationship("Tenant", back_populates="preferences")
