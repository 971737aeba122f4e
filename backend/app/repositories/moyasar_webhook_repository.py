from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.moyasar_payment_webhook import MoyasarPaymentWebhook
from app.models.shared import utc_now


class MoyasarWebhookRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_payment_id(self, payment_id: str) -> MoyasarPaymentWebhook | None:
        return (
            self.db.query(MoyasarPaymentWebhook)
            .filter(MoyasarPaymentWebhook.payment_id == payment_id)
            .first()
        )

    def upsert(self, payment_id: str, fields: dict[str, Any]) -> tuple[MoyasarPaymentWebhook, bool]:
        """Update the row for *payment_id* or insert a new unprocessed one.

        Returns ``(record, created)``.
        """
        record = self.get_by_payment_id(payment_id)
        if record is None:
            record = MoyasarPaymentWebhook(payment_id=payment_id, is_processed=False, **fields)
            self.db.add(record)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                existing = self.get_by_payment_id(payment_id)
                if existing is None:
                    raise
                return self._update(existing, fields), False
            self.db.refresh(record)
            return record, True
        return self._update(record, fields), False

    def _update(
        self, record: MoyasarPaymentWebhook, fields: dict[str, Any]
    ) -> MoyasarPaymentWebhook:
        for key, value in fields.items():
            setattr(record, key, value)
        record.updated_at = utc_now()  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(record)
        return record
