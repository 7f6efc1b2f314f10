from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from outreach.users.models import User
from outreach.users.schemas import UserRead


@dataclass(slots=True)
class UserService:
    def list_users(self, session: Session) -> list[UserRead]:
        rows = session.scalars(select(User).order_by(User.name.asc(), User.id.asc())).all()
        return [UserRead.model_validate(row) for row in rows]

    def ensure_users(self, session: Session, users: list[UserRead]) -> None:
        existing = set(session.scalars(select(User.id).where(User.id.in_([user.id for user in users]))).all())
        session.add_all(
            [User(id=user.id, name=user.name, role=user.role) for user in users if user.id not in existing]
        )


user_service = UserService()
