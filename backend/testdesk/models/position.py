from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from testdesk.db.base_class import Base
from testdesk.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Position(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'positions'

    name: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
