"""SQLAlchemy model for pending OTP codes."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


class OTPCode(Base):
    """One pending verification code per mobile number.

    A new request for the same destination replaces the row, so the
    destination itself is the primary key.
    """

    __tablename__ = "otp_codes"

    destination: Mapped[str] = mapped_column(
        String(32), primary_key=True, doc="Mobile number the code was sent to"
    )
    code: Mapped[str] = mapped_column(String(16), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC)
    )

    def __repr__(self) -> str:
        return f"<OTPCode destination={self.destination!r} expires_at={self.expires_at!r}>"
