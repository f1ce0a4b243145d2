from typing import Optional

import structlog
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from crowdfund.core.config import UPLOADS_URL_PREFIX, Settings, get_app_settings
from crowdfund.core.database import get_db
from crowdfund.core.errors import AppError, ConflictError, InternalError, ValidationError
from crowdfund.crud import campaign as crud_campaign
from crowdfund.models.campaign import Campaign
from crowdfund.schemas.campaign import CampaignForm, ProjectListResponse, ProjectUploadResponse
from crowdfund.utils.storage import delete_image, store_image
from crowdfund.utils.validators import validate_campaign_form

router = APIRouter()
logger = structlog.get_logger(__name__)


def campaign_form(
    project_id: Optional[str] = Form(None, alias="projectId"),
    name: Optional[str] = Form(None),
    details: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    upi_id: Optional[str] = Form(None, alias="upiId"),
    funding_goal: Optional[str] = Form(None, alias="fundingGoal"),
) -> CampaignForm:
    return CampaignForm(
        project_id=project_id,
        name=name,
        details=details,
        email=email,
        phone=phone,
        upi_id=upi_id,
        funding_goal=funding_goal,
    )


def serialize_campaign(campaign: Campaign) -> dict:
    return {
        "id": campaign.id,
        "projectId": campaign.campaign_id,
        "name": campaign.name,
        "details": campaign.description,
        "image": campaign.image,
        "imageUrl": f"{UPLOADS_URL_PREFIX}/{campaign.image}",
        "contact": {
            "email": campaign.contact_email,
            "phone": campaign.contact_phone,
            "upiId": campaign.payout_id,
        },
        "fundingGoal": campaign.funding_goal,
        "amountRaised": campaign.amount_raised,
        "createdAt": campaign.created_at,
        "updatedAt": campaign.updated_at,
    }


@router.post("/projects/upload", response_model=ProjectUploadResponse, status_code=201)
def upload_project(
    form: CampaignForm = Depends(campaign_form),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    logger.info("Received project upload request", project_id=form.project_id)

    try:
        campaign = validate_campaign_form(form)
    except ValidationError as e:
        logger.info("Project validation failed", reason=e.message)
        raise

    try:
        exists = crud_campaign.campaign_exists(db, campaign.campaign_id)
    except SQLAlchemyError as e:
        logger.error("Project lookup failed", error=str(e))
        raise InternalError("Error uploading project")
    if exists:
        logger.info("Project ID already exists", project_id=campaign.campaign_id)
        raise ConflictError(crud_campaign.DUPLICATE_PROJECT_MESSAGE, existingProjectId=campaign.campaign_id)

    if image is None or not image.filename:
        logger.info("Project validation failed", reason="no image file received")
        raise ValidationError("Project image is required")

    try:
        filename = store_image(settings.upload_dir, image.filename, image.file)
    except OSError as e:
        logger.error("Failed to store project image", error=str(e))
        raise InternalError("Error uploading project")

    try:
        db_campaign = crud_campaign.create_campaign(db, campaign=campaign, image=filename)
    except (AppError, SQLAlchemyError) as e:
        # Never leave an image behind without its record
        delete_image(settings.upload_dir, filename)
        if isinstance(e, AppError):
            logger.info("Project rejected at insert", project_id=campaign.campaign_id, reason=e.message)
            raise
        logger.error("Failed to save project", error=str(e), project_id=campaign.campaign_id)
        raise InternalError("Error uploading project")

    # The row is committed from here on, so the image stays with it
    try:
        db_campaign = crud_campaign.refresh_campaign(db, db_campaign)
    except SQLAlchemyError as e:
        logger.error("Failed to reload saved project", error=str(e), project_id=campaign.campaign_id)
        raise InternalError("Error uploading project")

    logger.info("Project saved", project_id=db_campaign.campaign_id, id=db_campaign.id)
    return {"message": "Project uploaded successfully", "project": serialize_campaign(db_campaign)}


@router.get("/projects", response_model=ProjectListResponse)
def list_projects(db: Session = Depends(get_db)):
    try:
        campaigns = crud_campaign.list_campaigns(db)
    except SQLAlchemyError as e:
        logger.error("Error fetching projects", error=str(e))
        raise InternalError("Error fetching projects")
    return {"projects": [serialize_campaign(campaign) for campaign in campaigns]}
