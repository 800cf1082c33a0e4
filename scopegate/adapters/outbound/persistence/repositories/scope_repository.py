# scopegate/adapters/outbound/persistence/repositories/scope_repository.py

from typing import Optional
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from scopegate.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from scopegate.adapters.outbound.persistence.models import Scope
from scopegate.domain.exceptions import ResourceNotFoundException, DatabaseOperationException


class AsyncScopeCRUD(AsyncCRUDBase[Scope]):
    """Async repository for the Scope entity."""

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[Scope]:
        return await self.get_by_field(db, "name", name)

    async def create(self, db: AsyncSession, name: str, description: Optional[str] = None) -> Scope:
        """
        Create a scope.

        Raises:
            ResourceAlreadyExistsException: If the name is already used
        """
        return await self.add(db, Scope(name=name, description=description))

    async def remove(self, db: AsyncSession, id) -> None:
        """
        Hard-delete a scope.

        The database removes its client associations (ON DELETE CASCADE);
        clients keep existing.

        Raises:
            ResourceNotFoundException: If the scope does not exist
        """
        try:
            result = await db.execute(delete(Scope).where(Scope.id == id))
            if result.rowcount == 0:
                await db.rollback()
                raise ResourceNotFoundException(detail="Scope not found", resource_id=id)
            await db.commit()
            self.logger.info(f"Scope deleted: {id}")

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error deleting scope {id}: {str(e)}")
            raise DatabaseOperationException(original_error=e)


scope_repository = AsyncScopeCRUD(Scope)
