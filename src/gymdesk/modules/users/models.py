"""Profile database model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from gymdesk.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH, MAX_ROLE_NAME_LENGTH
from gymdesk.core.database.base import Base, TimestampMixin, UUIDMixin
from gymdesk.core.permissions.roles import RoleName


class Profile(Base, UUIDMixin, TimestampMixin):
    """A console user's profile row.

    The id matches the identity service's user id. ``role`` is stored as a
    plain string so a bad value surfaces as a configuration error at
    lookup instead of a load failure.

    Attributes:
        email: Contact email address
        first_name: Given name
        last_name: Family name
        role: One of ``admin``, ``trainer``, ``member``
    """

    __tablename__ = "profiles"

    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        index=True,
    )
    first_name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
        default="",
    )
    last_name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
        default="",
    )
    role: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=False,
        default=RoleName.MEMBER.value,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, email={self.email}, role={self.role})>"
