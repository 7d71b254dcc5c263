# /app/db/models/audit_models.py

from sqlalchemy import Column, Integer, String, JSON, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class AuditLog(Base):
    """
    One row per audited mutating request. Rows are written once by the audit
    recorder and never updated afterwards.
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    method = Column(String, nullable=False, index=True)
    path = Column(String, nullable=False)
    status_code = Column(Integer, nullable=False)
    ip = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)
    request_body = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    user = relationship("User")
