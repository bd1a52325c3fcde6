"""
Property (estate / block) model.
"""

from sqlalchemy import Column, String, Integer, Text

from ..base import BaseModel, CreatedAtMixin


class Property(BaseModel, CreatedAtMixin):
    """Property record. Tenants may reference one through property_id."""

    __tablename__ = 'properties'

    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    total_units = Column(Integer, default=0, nullable=False)
    created_by = Column(String(36), nullable=True)
