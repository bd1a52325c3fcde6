"""
Named high-water-mark counters.

A counter only moves forward, so a number handed out once is never handed
out again, even after the row that used it is deleted.
"""

from sqlalchemy import Column, String, Integer

from ..base import Base


TENANT_SN = "tenant_sn"


class SequenceCounter(Base):
    """Last value issued for one named sequence."""

    __tablename__ = 'sequence_counters'

    name = Column(String(50), primary_key=True)
    value = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<SequenceCounter(name={self.name}, value={self.value})>"
