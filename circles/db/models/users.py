import enum
import uuid
from sqlalchemy import Column, Integer, String, DateTime, Date, Boolean, Enum
from .base import Base, now_utc


class UserType(str, enum.Enum):
    """How the account authenticates."""
    LOCAL = 'local'
    GOOGLE = 'google'


def _new_ext_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, autoincrement=True)
    # Opaque identifier carried in bearer tokens; never the numeric id
    ext_id = Column(String(32), nullable=False, unique=True, default=_new_ext_id)
    email = Column(String(254), nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=True)  # null for federated accounts
    first_name = Column(String(128), nullable=True)
    last_name = Column(String(128), nullable=True)
    photo_url = Column(String, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    type = Column(Enum(UserType, name='user_type', values_callable=lambda e: [m.value for m in e]),
                  nullable=False, default=UserType.LOCAL)
    federated_subject = Column(String, nullable=True)
    is_blocked = Column(Boolean, nullable=False, default=False)

    email_validation_hash = Column(String(128), nullable=True, unique=True)
    email_validation_expires_on = Column(DateTime(timezone=True), nullable=True)
    email_validated_on = Column(DateTime(timezone=True), nullable=True)

    forgot_password_hash = Column(String(128), nullable=True, unique=True)
    forgot_password_expires_on = Column(DateTime(timezone=True), nullable=True)

    created_on = Column(DateTime(timezone=True), default=now_utc)
    updated_on = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p).strip()
