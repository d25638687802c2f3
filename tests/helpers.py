"""Database model shared by the transaction tests."""

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)


def count_users(engine: Engine) -> int:
    """Count committed users through a fresh connection."""
    with Session(engine) as session:
        return session.scalar(select(func.count()).select_from(User)) or 0
