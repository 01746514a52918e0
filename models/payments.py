from models import db
from utils.helpers import format_datetime
from sqlalchemy.orm import relationship

PAYMENT_METHODS = ("CARD", "BANK_TRANSFER", "PAYPAL", "STRIPE", "CASH", "UPI", "NET_BANKING", "WALLET")


class Payment(db.Model):
    __tablename__ = "payments"

    id = db.Column(db.Integer, primary_key=True)
    enrollment_id = db.Column(db.Integer, db.ForeignKey("enrollments.id"), nullable=False)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    currency = db.Column(db.String(3), default="USD", nullable=False)
    method = db.Column(db.String(20), nullable=False)
    status = db.Column(db.String(20), default="PENDING", nullable=False)
    due_date = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    paid_at = db.Column(db.DateTime, nullable=True)
    transaction_id = db.Column(db.String(255), nullable=True)
    description = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    enrollment = relationship("Enrollment", back_populates="payments")

    def __repr__(self):
        return f"<Payment {self.amount} {self.status} (Enrollment ID {self.enrollment_id})>"

    def to_dict(self):
        return {
            "id": self.id,
            "enrollment_id": self.enrollment_id,
            "amount": float(self.amount),
            "currency": self.currency,
            "method": self.method,
            "status": self.status,
            "due_date": format_datetime(self.due_date),
            "paid_at": format_datetime(self.paid_at),
            "transaction_id": self.transaction_id,
            "description": self.description,
        }
