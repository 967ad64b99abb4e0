from typing import Optional
from sqlalchemy.orm import Session
from app.models.notification import Notification

class NotificationService:
    @staticmethod
    def create_notification(
        db: Session,
        personnel_id: int,
        title: str,
        message: str,
        type: str = "info",
        related_entity: Optional[str] = None,
        related_entity_id: Optional[int] = None
    ) -> Notification:
        """
        Internal utility for creating in-app notifications.
        """
        notification = Notification(
            personnel_id=personnel_id,
            title=title,
            message=message,
            type=type,
            related_entity=related_entity,
            related_entity_id=related_entity_id
        )
        db.add(notification)
        db.commit()
        db.refresh(notification)
        return notification

    @staticmethod
    def notify_leave_decision(db: Session, leave) -> Notification:
        """
        Standardized notification for an approved or rejected leave request.
        """
        leave_name = leave.leave_type.name if leave.leave_type else "leave"
        span = f"{leave.start_date.isoformat()} - {leave.end_date.isoformat()}"
        if leave.status == "approved":
            title = "Leave Approved"
            message = f"Your {leave_name} request for {span} ({leave.days:g} days) has been APPROVED."
            type = "success"
        else:
            title = "Leave Rejected"
            message = f"Your {leave_name} request for {span} has been REJECTED."
            if leave.rejection_reason:
                message += f" Reason: {leave.rejection_reason}"
            type = "error"
        return NotificationService.create_notification(
            db,
            personnel_id=leave.personnel_id,
            title=title,
            message=message,
            type=type,
            related_entity="leave_request",
            related_entity_id=leave.id
        )
