from sqlalchemy import Column, DateTime, Integer, String, func

from app.core.database import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_name = Column(String(255), nullable=True)
    full_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    dob = Column(String(20), nullable=True)
    sex = Column(String(20), nullable=True)
    mobile = Column(String(30), nullable=False, index=True)
    status_id = Column(Integer, nullable=True)
    user_id = Column(Integer, nullable=True)
    location_id = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def first_name(self) -> str | None:
        if self.full_name:
            return str(self.full_name).split(" ")[0]
        return self.user_name  # type: ignore[return-value]

    @property
    def last_name(self) -> str:
        if self.full_name:
            parts = str(self.full_name).split(" ")
            if len(parts) > 1:
                return parts[1]
        return ""
