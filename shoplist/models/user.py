"""User model."""

from sqlalchemy import Column, Enum, String

from shoplist.database import Base, generate_id
from shoplist.models.enums import Role
from shoplist.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and list ownership."""

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    pseudo = Column(String(50), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="userrole", values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=Role.USER,
    )

    @property
    def is_superuser(self) -> bool:
        return self.role == Role.SUPERUSER
