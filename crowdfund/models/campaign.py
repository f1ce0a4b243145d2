from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Float, DateTime

from crowdfund.core.config import DEFAULT_FUNDING_GOAL
from crowdfund.core.database import Base

class Campaign(Base):
    """Fundraising campaign, exposed as a "project" over HTTP"""
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    campaign_id = Column(String(4), unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    image = Column(String, nullable=False)
    contact_email = Column(String, nullable=False)
    contact_phone = Column(String, nullable=False)
    payout_id = Column(String, nullable=False)
    funding_goal = Column(Float, nullable=False, default=DEFAULT_FUNDING_GOAL)
    amount_raised = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Campaign(id={self.id}, campaign_id='{self.campaign_id}')>"
