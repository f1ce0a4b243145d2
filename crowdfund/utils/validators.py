import math
import re
from typing import Optional

from crowdfund.core.config import DEFAULT_FUNDING_GOAL
from crowdfund.core.errors import ValidationError
from crowdfund.schemas.campaign import CampaignCreate, CampaignForm

PROJECT_ID_RE = re.compile(r"[A-Z]{2}[0-9]{2}")
EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_RE = re.compile(r"[0-9+\-\s()]{10,}")
UPI_ID_RE = re.compile(r"[a-zA-Z0-9._-]+@[a-zA-Z]{3,}")

def is_valid_project_id(value: str) -> bool:
    """Two uppercase letters followed by two digits, e.g. AB12"""
    return PROJECT_ID_RE.fullmatch(value) is not None

def is_valid_email(value: str) -> bool:
    return EMAIL_RE.fullmatch(value) is not None

def is_valid_phone(value: str) -> bool:
    """Digits, +, -, spaces and parentheses, at least 10 characters"""
    return PHONE_RE.fullmatch(value) is not None

def is_valid_upi_id(value: str) -> bool:
    """handle@bank, where the bank part is at least three letters"""
    return UPI_ID_RE.fullmatch(value) is not None

def coerce_funding_goal(raw: Optional[str]) -> float:
    """
    Parse a funding goal from form input.
    Anything that is not a finite positive number falls back to the default.
    """
    if raw is None:
        return float(DEFAULT_FUNDING_GOAL)
    try:
        value = float(str(raw).strip())
    except ValueError:
        return float(DEFAULT_FUNDING_GOAL)
    if not math.isfinite(value) or value <= 0:
        return float(DEFAULT_FUNDING_GOAL)
    return value

def validate_campaign_form(form: CampaignForm) -> CampaignCreate:
    """
    Run the field checks of a project upload in order and stop at the first failure.
    None of these checks touch storage; the duplicate id and image checks follow them.
    """
    if not all([form.project_id, form.name, form.details, form.email, form.phone, form.upi_id, form.funding_goal]):
        raise ValidationError("All fields are required", receivedFields=form.received_fields())

    if not is_valid_project_id(form.project_id):
        raise ValidationError(
            "Invalid project ID format. It should be two uppercase letters followed by two digits.",
            receivedId=form.project_id,
        )

    if not is_valid_email(form.email):
        raise ValidationError("Invalid email format", receivedEmail=form.email)

    if not is_valid_phone(form.phone):
        raise ValidationError("Invalid phone number format", receivedPhone=form.phone)

    if not is_valid_upi_id(form.upi_id):
        raise ValidationError("Invalid UPI ID format", receivedUpiId=form.upi_id)

    return CampaignCreate(
        campaign_id=form.project_id,
        name=form.name,
        description=form.details,
        contact_email=form.email,
        contact_phone=form.phone,
        payout_id=form.upi_id,
        funding_goal=coerce_funding_goal(form.funding_goal),
    )
