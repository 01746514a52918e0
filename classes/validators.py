import json
from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from utils.errors import ValidationError

PaymentMethod = Literal["CARD", "BANK_TRANSFER", "PAYPAL", "STRIPE", "CASH", "UPI", "NET_BANKING", "WALLET"]
PaymentStatus = Literal["PENDING", "PAID", "FAILED", "REFUNDED", "PARTIAL"]
EnrollmentStatus = Literal["PENDING", "ACTIVE", "COMPLETED", "CANCELLED"]


class Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class LoginPayload(Payload):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class ConfirmationPayload(Payload):
    """Body of a syllabus confirmation. ``completedAt`` is accepted as an alias."""
    completed_at: Optional[datetime] = Field(None, alias="completedAt")


class PhaseCreate(Payload):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    order: Optional[int] = Field(None, ge=0)


class ItemCreate(Payload):
    model_config = ConfigDict(str_strip_whitespace=True)

    phase_id: str = Field(min_length=1, alias="phaseId")
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    order: Optional[int] = Field(None, ge=0)


class TutorAssignment(Payload):
    tutor_ids: List[int] = Field(alias="tutorIds")
    primary_tutor_id: Optional[int] = Field(None, alias="primaryTutorId")


class EnrollmentCreate(Payload):
    student_id: int
    course_id: int
    final_price: Decimal = Field(Decimal("0"), ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    status: EnrollmentStatus = "ACTIVE"


class PaymentCreate(Payload):
    amount: Decimal = Field(gt=0)
    method: PaymentMethod
    status: PaymentStatus = "PENDING"
    due_date: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    transaction_id: Optional[str] = None
    description: Optional[str] = None


class PaymentUpdate(Payload):
    amount: Optional[Decimal] = Field(None, gt=0)
    status: Optional[PaymentStatus] = None
    paid_at: Optional[datetime] = None
    transaction_id: Optional[str] = None
    description: Optional[str] = None


def parse_body(model, data):
    """Validate a request body against ``model``, raising the API ValidationError on mismatch."""
    try:
        return model.model_validate(data if data is not None else {})
    except PydanticValidationError as e:
        raise ValidationError("Validation failed", details=json.loads(e.json(include_url=False)))
