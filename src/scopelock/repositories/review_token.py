"""Repository for ReviewToken entity."""

from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.scopelock.models import ReviewToken
from src.scopelock.models.base import utc_now
from src.scopelock.repositories.base import BaseRepository


class ReviewTokenRepository(BaseRepository[ReviewToken]):
    """Repository for ReviewToken entity."""

    model = ReviewToken

    async def get_by_token(self, token: str) -> ReviewToken | None:
        """Get a token by its value, active or not."""
        result = await self.session.execute(
            select(ReviewToken)
            .where(ReviewToken.token == token)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_latest_active(self, project_id: UUID) -> ReviewToken | None:
        """Newest active token of a project, used for notification links."""
        result = await self.session.execute(
            select(ReviewToken)
            .where(
                ReviewToken.project_id == project_id,
                ReviewToken.is_active == True,  # noqa: E712
            )
            .order_by(ReviewToken.created_at.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_by_project(self, project_id: UUID) -> list[ReviewToken]:
        result = await self.session.execute(
            select(ReviewToken)
            .where(ReviewToken.project_id == project_id)
            .order_by(ReviewToken.created_at)
        )
        return list(result.scalars().all())

    async def revoke_all_for_project(self, project_id: UUID) -> int:
        """Deactivate every active token of a project.

        Returns the number of tokens revoked.
        """
        stmt = (
            update(ReviewToken)
            .where(ReviewToken.project_id == project_id)  # type: ignore[arg-type]
            .where(ReviewToken.is_active == True)  # type: ignore[arg-type]  # noqa: E712
            .values(is_active=False, revoked_at=utc_now())
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]

    def mark_revoked(self, review_token: ReviewToken) -> ReviewToken:
        review_token.is_active = False
        review_token.revoked_at = utc_now()
        self.session.add(review_token)
        return review_token

    def touch(self, review_token: ReviewToken) -> ReviewToken:
        """Stamp the token's last successful use."""
        review_token.last_used_at = utc_now()
        self.session.add(review_token)
        return review_token
