import logging
from decimal import Decimal

from models.enrollments import Enrollment
from models.payments import Payment
from utils.errors import NotFound
from utils.helpers import to_naive_utc, utcnow

logger = logging.getLogger(__name__)


def aggregate_payment_status(payments, final_price):
    """Enrollment payment status from its payment records.

    PAID once the PAID payments cover ``final_price`` (so a free enrollment
    is PAID), PARTIAL when some but not all of it is paid, PENDING otherwise.
    """
    total_paid = sum(
        (Decimal(str(p.amount)) for p in payments if p.status == "PAID"),
        Decimal("0")
    )
    if total_paid >= Decimal(str(final_price or 0)):
        return "PAID"
    if total_paid > 0:
        return "PARTIAL"
    return "PENDING"


class PaymentManager:
    def __init__(self, session):
        self.session = session

    def get_enrollment(self, enrollment_id):
        enrollment = self.session.get(Enrollment, enrollment_id)
        if enrollment is None:
            raise NotFound("Enrollment not found")
        return enrollment

    def refresh_payment_status(self, enrollment):
        enrollment.payment_status = aggregate_payment_status(enrollment.payments, enrollment.final_price)
        return enrollment.payment_status

    def add_payment(self, enrollment_id, data):
        enrollment = self.get_enrollment(enrollment_id)
        payment = Payment(
            amount=data.amount,
            currency=enrollment.currency,
            method=data.method,
            status=data.status,
            due_date=to_naive_utc(data.due_date) or utcnow(),
            paid_at=to_naive_utc(data.paid_at),
            transaction_id=data.transaction_id,
            description=data.description or "Manual payment entry",
        )
        if payment.status == "PAID" and payment.paid_at is None:
            payment.paid_at = utcnow()
        enrollment.payments.append(payment)

        status = self.refresh_payment_status(enrollment)
        self.session.commit()
        logger.info("Payment added to enrollment %s, payment status now %s", enrollment_id, status)
        return payment

    def update_payment(self, payment_id, data):
        payment = self.session.get(Payment, payment_id)
        if payment is None:
            raise NotFound("Payment not found")

        changes = data.model_dump(exclude_unset=True)
        for field in ("amount", "status", "transaction_id", "description"):
            if field in changes and changes[field] is not None:
                setattr(payment, field, changes[field])

        if changes.get("paid_at") is not None:
            payment.paid_at = to_naive_utc(changes["paid_at"])
        elif changes.get("status") == "PAID" and payment.paid_at is None:
            payment.paid_at = utcnow()

        status = self.refresh_payment_status(payment.enrollment)
        self.session.commit()
        logger.info("Payment %s updated, enrollment %s payment status now %s",
                    payment_id, payment.enrollment_id, status)
        return payment
