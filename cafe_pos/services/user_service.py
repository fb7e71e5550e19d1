"""Staff accounts (owner / cashier)."""

import logging
from typing import List

from sqlalchemy.orm import Session

from cafe_pos.core import ids
from cafe_pos.core.exceptions import ConflictError, NotFoundError
from cafe_pos.models.user import User
from cafe_pos.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: Session):
        self.db = db

    def list_users(self, active_only: bool = False) -> List[User]:
        query = self.db.query(User)
        if active_only:
            query = query.filter(User.is_active.is_(True))
        return query.order_by(User.full_name, User.id).all()

    def get_user(self, user_id: str) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def create_user(self, data: UserCreate, commit: bool = True) -> User:
        user_id = data.id or ids.new_id(ids.USER)
        if self.db.get(User, user_id) is not None:
            raise ConflictError(f"User '{user_id}' already exists")
        if self.db.query(User).filter(User.username == data.username).first():
            raise ConflictError(f"Username '{data.username}' is already taken")

        user = User(id=user_id, **data.model_dump(exclude={"id"}))
        self.db.add(user)
        if commit:
            self.db.commit()
            self.db.refresh(user)
        else:
            self.db.flush()
        logger.info(f"Created {user.role} account {user.username}")
        return user

    def update_user(self, user_id: str, updates: UserUpdate) -> User:
        user = self.get_user(user_id)
        for field, value in updates.model_dump(exclude_unset=True).items():
            if value is None and field not in ("phone", "salary"):
                continue
            setattr(user, field, value)
        self.db.commit()
        self.db.refresh(user)
        return user
