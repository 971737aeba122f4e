from sqlalchemy.orm import Session

from app.models.shared import ACTIVE_STATUS
from app.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_active_by_api_key(self, api_key: str) -> User | None:
        return (
            self.db.query(User)
            .filter(User.password == api_key, User.status_id == ACTIVE_STATUS)
            .first()
        )

    def get_active_by_company_code(self, company_code: str) -> User | None:
        return (
            self.db.query(User)
            .filter(User.company_code == company_code, User.status_id == ACTIVE_STATUS)
            .first()
        )
