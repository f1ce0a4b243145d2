from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict

class CampaignForm(BaseModel):
    """Multipart fields of a project upload, as received."""
    project_id: Optional[str] = None
    name: Optional[str] = None
    details: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    upi_id: Optional[str] = None
    funding_goal: Optional[str] = None

    def received_fields(self) -> Dict[str, bool]:
        return {
            "projectId": bool(self.project_id),
            "name": bool(self.name),
            "details": bool(self.details),
            "email": bool(self.email),
            "phone": bool(self.phone),
            "upiId": bool(self.upi_id),
            "fundingGoal": bool(self.funding_goal),
        }

class CampaignCreate(BaseModel):
    """A validated submission, ready to be stored."""
    campaign_id: str
    name: str
    description: str
    contact_email: str
    contact_phone: str
    payout_id: str
    funding_goal: float

class ContactResponse(BaseModel):
    email: str
    phone: str
    upiId: str

class ProjectResponse(BaseModel):
    id: int
    projectId: str
    name: str
    details: str
    image: str
    imageUrl: str
    contact: ContactResponse
    fundingGoal: float
    amountRaised: float
    createdAt: datetime
    updatedAt: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "projectId": "AB12",
                "name": "Clean Water",
                "details": "Wells for the village school",
                "image": "1718000000000-3f2a9c4be1d84f6e.png",
                "imageUrl": "/uploads/1718000000000-3f2a9c4be1d84f6e.png",
                "contact": {"email": "owner@example.com", "phone": "9999999999", "upiId": "owner@hdfc"},
                "fundingGoal": 5000,
                "amountRaised": 0,
                "createdAt": "2024-06-10T10:00:00",
                "updatedAt": "2024-06-10T10:00:00"
            }
        }
    )

class ProjectUploadResponse(BaseModel):
    message: str
    project: ProjectResponse

class ProjectListResponse(BaseModel):
    projects: List[ProjectResponse]
