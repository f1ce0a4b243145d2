from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from crowdfund.core.errors import ConflictError
from crowdfund.models.campaign import Campaign
from crowdfund.schemas.campaign import CampaignCreate

DUPLICATE_PROJECT_MESSAGE = "Project ID already exists. Please use a different ID."

def campaign_exists(db: Session, campaign_id: str) -> bool:
    return db.query(Campaign.id).filter(Campaign.campaign_id == campaign_id).first() is not None

def create_campaign(db: Session, campaign: CampaignCreate, image: str) -> Campaign:
    """
    Insert a campaign. The unique index on campaign_id is the final arbiter
    between concurrent submissions; a violation becomes a ConflictError.
    """
    db_campaign = Campaign(
        campaign_id=campaign.campaign_id,
        name=campaign.name,
        description=campaign.description,
        image=image,
        contact_email=campaign.contact_email,
        contact_phone=campaign.contact_phone,
        payout_id=campaign.payout_id,
        funding_goal=campaign.funding_goal,
        amount_raised=0,
    )
    db.add(db_campaign)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_PROJECT_MESSAGE, existingProjectId=campaign.campaign_id)
    return db_campaign

def refresh_campaign(db: Session, campaign: Campaign) -> Campaign:
    db.refresh(campaign)
    return campaign

def list_campaigns(db: Session) -> List[Campaign]:
    # No ORDER BY: storage order is all that is promised
    return db.query(Campaign).all()
