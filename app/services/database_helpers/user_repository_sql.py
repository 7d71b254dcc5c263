# /app/services/database_helpers/user_repository_sql.py

from typing import List, Dict, Optional

from sqlalchemy import or_

from app.db.models.user_models import User
from .base_repository_sql import BaseRepositorySQL


class UserRepositorySQL(BaseRepositorySQL):

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def find_user_by_username_or_email(self, username: str, email: str) -> Optional[User]:
        return self.db.query(User).filter(or_(User.username == username, User.email == email)).first()

    def add_user(self, record: Dict) -> User:
        return self._add(User(**record))

    def get_users(self, role: Optional[str] = None) -> List[User]:
        query = self.db.query(User)
        if role:
            query = query.filter(User.role == role)
        return query.order_by(User.username.asc()).all()
