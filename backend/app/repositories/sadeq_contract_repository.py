from typing import Any

from sqlalchemy.orm import Session

from app.models.sadeq_contract import SadeqContract


class SadeqContractRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> list[SadeqContract]:
        return (
            self.db.query(SadeqContract)
            .order_by(SadeqContract.created_at.desc(), SadeqContract.id.desc())
            .all()
        )

    def create(self, **fields: Any) -> SadeqContract:
        contract = SadeqContract(**fields)
        self.db.add(contract)
        self.db.commit()
        self.db.refresh(contract)
        return contract
