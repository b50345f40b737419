"""SQLAlchemy implementation of Image repository."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.image import Image
from domain.entities.pagination import PageRequest
from infrastructure.database.models import ImageModel


class SQLAlchemyImageRepository:
    """SQLAlchemy implementation of IImageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, image: Image) -> Image:
        """Store an image."""
        model = ImageModel(
            name=image.name,
            mime=image.mime,
            data=image.data,
            created_at=image.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def get(self, id: int) -> Image | None:
        """Get an image including its bytes."""
        model = await self._session.get(ImageModel, id)
        return self._to_entity(model) if model else None

    async def list_metadata(self, page: PageRequest) -> tuple[list[Image], int]:
        """Get one page of images (newest first, without bytes) and the total."""
        total = (
            await self._session.execute(select(func.count()).select_from(ImageModel))
        ).scalar_one()

        stmt = (
            select(
                ImageModel.id,
                ImageModel.name,
                ImageModel.mime,
                ImageModel.created_at,
                func.length(ImageModel.data).label("size"),
            )
            .order_by(ImageModel.created_at.desc(), ImageModel.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        result = await self._session.execute(stmt)
        items = [
            Image(
                id=row.id,
                name=row.name,
                mime=row.mime,
                size=row.size or 0,
                created_at=row.created_at,
            )
            for row in result
        ]
        return items, total

    def _to_entity(self, model: ImageModel) -> Image:
        """Convert ORM model to domain entity."""
        return Image(
            id=model.id,
            name=model.name,
            mime=model.mime,
            data=model.data,
            size=len(model.data),
            created_at=model.created_at,
        )
