from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session
from strawberry.dataloader import DataLoader
from strawberry.fastapi import BaseContext

from staffhub.core.security import get_optional_user
from staffhub.db.session import get_db
from staffhub.models.employee import Employee
from staffhub.models.user import User
from staffhub.services.employee_query import batch_load_employees


class GraphQLContext(BaseContext):
    """
    Per-request state: the db session, the caller (None when anonymous) and
    loaders whose cache lives only as long as this request.
    """

    def __init__(self, db: Session, user: Optional[User]):
        super().__init__()
        self.db = db
        self.user = user
        self.employee_loader: DataLoader[str, Optional[Employee]] = DataLoader(
            load_fn=self._load_employees, max_batch_size=100
        )

    async def _load_employees(self, keys: list[str]) -> list[Optional[Employee]]:
        return batch_load_employees(self.db, keys)


async def get_context(
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
) -> GraphQLContext:
    return GraphQLContext(db=db, user=user)
