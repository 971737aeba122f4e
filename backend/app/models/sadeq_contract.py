from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func

from app.core.database import Base


class SadeqContract(Base):
    """Merchant contract sent for e-signature through Sadeq."""

    __tablename__ = "sadeq_contracts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_code = Column(String(50), nullable=False, index=True)
    company_name = Column(String(255), nullable=False)
    phone_number = Column(String(30), nullable=False)
    terminals = Column(String(255), nullable=True)
    national_id = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False)
    template_id = Column(String(100), nullable=True)
    document_id = Column(String(100), nullable=True)
    envelope_id = Column(String(100), nullable=True)
    pdf_file_name = Column(String(255), nullable=True)
    sadeq_sent = Column(Boolean, nullable=False, default=False)
    signed = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    error_message = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())
