# app/feedback/routes.py
from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.orm import Session

from app.core.data_accessor import DataAccessor
from app.core.database import get_db
from app.core.errors import FormError
from app.core.security import get_current_user, get_optional_user
from app.feedback.models import Feedback
from app.feedback.schemas import FeedbackCreate, FeedbackOut
from app.user.models import User

router = APIRouter(prefix="/Feedback", tags=["Feedback"])


def get_feedback_accessor(db: Session = Depends(get_db)) -> DataAccessor:
    return DataAccessor(db, allowed_entities=[Feedback])


@router.post("", response_model=FeedbackOut, status_code=201)
def submit(
    payload: FeedbackCreate,
    accessor: DataAccessor = Depends(get_feedback_accessor),
    user: User | None = Depends(get_optional_user),
):
    feedback = Feedback(message=payload.message, submitted_by=user.username if user else "Anonymous")
    result = accessor.create(feedback)
    if not result:
        raise FormError.single("", result.message, payload.model_dump())
    logger.info("Feedback received from {who}", who=feedback.submitted_by)
    return result.value


@router.get("", response_model=list[FeedbackOut])
def list_feedback(accessor: DataAccessor = Depends(get_feedback_accessor), user: User = Depends(get_current_user)):
    return accessor.query(Feedback).order_by(Feedback.id.desc()).all()
