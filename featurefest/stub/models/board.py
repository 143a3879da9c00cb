from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from featurefest.stub.db import Base


class Board(Base):
    __tablename__ = "boards"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True, default=None)
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    # Timestamps are ISO 8601 strings, which is also what the REST layer emits.
    created_at: Mapped[str] = mapped_column(String, nullable=False)
    updated_at: Mapped[str | None] = mapped_column(String, nullable=True, default=None)
