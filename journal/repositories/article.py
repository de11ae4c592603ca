"""Article repository: CRUD plus the filtered, paginated listing query."""

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from json import dumps
from uuid import UUID

from sqlalchemy import ColumnElement, Text, and_, cast, func, or_, select
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import OperationalError, ProgrammingError

from journal.errors.database import ConflictError, DuplicateEntryError
from journal.errors.validation import ValidationError
from journal.models.article import ArticleDB
from journal.monitoring import get_logger
from journal.repositories.base import BaseRepository, Page, PageParams
from journal.schemas.article import ArticleCreate, ArticleUpdate
from journal.utils.helpers import calculate_read_time, format_article_date, generate_slug

logger = get_logger(__name__)

DEFAULT_AUTHOR_NAME = "Journal"


@dataclass(frozen=True)
class ArticleFilter:
    """
    Filter criteria for article listings.

    All set filters are combined with AND. ``search`` is a case-insensitive
    substring match on title, subtitle or content (OR across the three).

    Attributes:
        search: Free-text search term.
        category: Exact category name.
        tag: Tag the article must carry.
        author_id: Owning user.
        published_only: Hide drafts.
    """

    search: str | None = None
    category: str | None = None
    tag: str | None = None
    author_id: UUID | None = None
    published_only: bool = False

    @property
    def has_taxonomy(self) -> bool:
        return bool(self.category or self.tag)

    def without_taxonomy(self) -> "ArticleFilter":
        return replace(self, category=None, tag=None)


def _as_utc(moment: datetime) -> datetime:
    # SQLite hands back naive datetimes for timezone-aware columns.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class ArticleRepository(BaseRepository[ArticleDB]):
    """
    Repository for Article database operations.

    Listings are ordered newest first with ``id`` as tie-breaker so that
    pages stay stable while paging through them.
    """

    model = ArticleDB

    @property
    def dialect(self) -> str:
        return self.session.get_bind().dialect.name

    def _tag_condition(self, tag: str) -> ColumnElement[bool]:
        if self.dialect == "postgresql":
            return cast(ArticleDB.tags, JSONB).contains([tag])
        # Match the JSON-encoded element inside the serialized list.
        return cast(ArticleDB.tags, Text).contains(dumps(tag), autoescape=True)

    def build_conditions(self, filters: ArticleFilter) -> list[ColumnElement[bool]]:
        """
        Translate ``filters`` into WHERE clauses.

        Args:
            filters: Filter criteria

        Returns:
            list: Clauses to be combined with AND
        """
        conditions: list[ColumnElement[bool]] = []
        if filters.published_only:
            conditions.append(ArticleDB.published.is_(True))
        if filters.author_id is not None:
            conditions.append(ArticleDB.author_id == filters.author_id)
        if search := (filters.search or "").strip():
            conditions.append(
                or_(
                    ArticleDB.title.icontains(search, autoescape=True),
                    ArticleDB.subtitle.icontains(search, autoescape=True),
                    ArticleDB.content.icontains(search, autoescape=True),
                ),
            )
        if filters.category:
            conditions.append(ArticleDB.category == filters.category)
        if filters.tag:
            conditions.append(self._tag_condition(filters.tag))
        return conditions

    async def list_page(
        self,
        filters: ArticleFilter,
        params: PageParams,
    ) -> Page[ArticleDB]:
        """
        List articles matching ``filters`` for one page.

        When the category or tag filter cannot be evaluated by the database
        (for example while a migration adding the column is in flight) the
        query is retried without those two filters instead of failing.

        Args:
            filters: Filter criteria
            params: Page number and size

        Returns:
            Page[ArticleDB]: Items plus total count
        """
        try:
            items, total = await self._query_page(filters, params)
        except (ProgrammingError, OperationalError) as e:
            if not filters.has_taxonomy:
                raise
            logger.warning(
                "Category/tag filter unavailable, listing without it",
                category=filters.category,
                tag=filters.tag,
                error=str(e.orig or e),
            )
            # The failed statement aborted the transaction.
            await self.session.rollback()
            items, total = await self._query_page(filters.without_taxonomy(), params)
        return Page(items=items, total=total, page=params.page, limit=params.limit)

    async def _query_page(
        self,
        filters: ArticleFilter,
        params: PageParams,
    ) -> tuple[list[ArticleDB], int]:
        statement = (
            select(ArticleDB)
            .where(*self.build_conditions(filters))
            .order_by(ArticleDB.created_at.desc(), ArticleDB.id.desc())
        )
        return await self._paginate(statement, params)

    async def get_by_slug(self, slug: str) -> ArticleDB | None:
        """
        Get article by slug.

        Args:
            slug: Article slug

        Returns:
            ArticleDB | None: Article if found, None otherwise
        """
        result = await self.session.execute(select(ArticleDB).where(ArticleDB.slug == slug))
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        return await self._check_exists_by_field("slug", slug, exclude_id)

    async def _unique_slug_for(self, title: str, exclude_id: UUID | None = None) -> str:
        slug = generate_slug(title)
        if not slug:
            mssg = "Title must contain at least one letter or number"
            raise ValidationError(mssg)
        if await self.slug_exists(slug, exclude_id):
            mssg = f"An article with the slug '{slug}' already exists"
            raise DuplicateEntryError(mssg)
        return slug

    async def create(self, data: ArticleCreate, author_id: UUID | None) -> ArticleDB:
        """
        Create a new article.

        Slug, display date and read time are derived from the title,
        today's date and the content.

        Args:
            data: Article creation schema
            author_id: Owning user

        Returns:
            ArticleDB: Created article

        Raises:
            ValidationError: If the title yields an empty slug
            DuplicateEntryError: If the slug already exists
        """
        slug = await self._unique_slug_for(data.title)
        fields = data.model_dump(exclude_unset=True, exclude={"title", "content", "published"})
        article = ArticleDB(
            **fields,
            title=data.title,
            content=data.content,
            published=data.published,
            slug=slug,
            date=format_article_date(),
            read_time=calculate_read_time(data.content),
            author_id=author_id,
        )
        if not article.author:
            article.author = DEFAULT_AUTHOR_NAME
        if article.tags is None:
            article.tags = []
        article = await self._add_and_refresh(article)
        logger.info("Article created", article_id=str(article.id), slug=slug)
        return article

    async def update(self, article: ArticleDB, data: ArticleUpdate) -> ArticleDB:
        """
        Apply a partial update to ``article``.

        Args:
            article: Article to update
            data: Fields to change, plus the optional concurrency token

        Returns:
            ArticleDB: Updated article

        Raises:
            ConflictError: If ``expected_updated_at`` is stale
            DuplicateEntryError: If the new title collides with another slug
        """
        if data.expected_updated_at is not None and _as_utc(
            data.expected_updated_at,
        ) != _as_utc(article.updated_at):
            raise ConflictError

        changes = data.model_dump(exclude_unset=True, exclude={"expected_updated_at"})
        if changes.get("title") is not None:
            changes["slug"] = await self._unique_slug_for(changes["title"], exclude_id=article.id)
        if changes.get("content") is not None:
            changes["read_time"] = calculate_read_time(changes["content"])
        if "tags" in changes and changes["tags"] is None:
            changes["tags"] = []
        if "author" in changes and not changes["author"]:
            changes["author"] = DEFAULT_AUTHOR_NAME
        # Non-nullable columns ignore explicit nulls.
        for key in ("title", "content", "published"):
            if key in changes and changes[key] is None:
                del changes[key]

        for key, value in changes.items():
            setattr(article, key, value)
        article.updated_at = datetime.now(tz=UTC)

        article = await self._add_and_refresh(article)
        logger.info("Article updated", article_id=str(article.id), fields=sorted(changes))
        return article

    async def remove(self, article: ArticleDB) -> None:
        """Delete ``article``."""
        await self.session.delete(article)
        await self.session.flush()
        logger.info("Article deleted", article_id=str(article.id), slug=article.slug)

    async def list_categories(self) -> list[str]:
        """Distinct categories of published articles, sorted."""
        result = await self.session.execute(
            select(ArticleDB.category)
            .where(ArticleDB.published.is_(True), ArticleDB.category.is_not(None))
            .distinct()
            .order_by(ArticleDB.category),
        )
        return [category for category in result.scalars().all() if category]

    async def list_tags(self) -> list[str]:
        """Distinct tags across published articles, sorted case-insensitively."""
        result = await self.session.execute(
            select(ArticleDB.tags).where(ArticleDB.published.is_(True)),
        )
        tags = {tag for tag_list in result.scalars().all() for tag in tag_list or []}
        return sorted(tags, key=str.lower)

    async def get_related(self, article: ArticleDB, limit: int = 3) -> list[ArticleDB]:
        """Other published articles, newest first."""
        result = await self.session.execute(
            select(ArticleDB)
            .where(ArticleDB.published.is_(True), ArticleDB.id != article.id)
            .order_by(ArticleDB.created_at.desc(), ArticleDB.id.desc())
            .limit(limit),
        )
        return list(result.scalars().all())

    async def get_adjacent(
        self,
        article: ArticleDB,
    ) -> tuple[ArticleDB | None, ArticleDB | None]:
        """
        Published neighbours of ``article`` in creation order.

        Returns:
            tuple: ``(previous, next)`` where previous is the next-older
            article and next is the next-newer one
        """
        older = or_(
            ArticleDB.created_at < article.created_at,
            and_(ArticleDB.created_at == article.created_at, ArticleDB.id < article.id),
        )
        newer = or_(
            ArticleDB.created_at > article.created_at,
            and_(ArticleDB.created_at == article.created_at, ArticleDB.id > article.id),
        )
        published = ArticleDB.published.is_(True)

        previous = await self.session.execute(
            select(ArticleDB)
            .where(published, older)
            .order_by(ArticleDB.created_at.desc(), ArticleDB.id.desc())
            .limit(1),
        )
        following = await self.session.execute(
            select(ArticleDB)
            .where(published, newer)
            .order_by(ArticleDB.created_at.asc(), ArticleDB.id.asc())
            .limit(1),
        )
        return previous.scalar_one_or_none(), following.scalar_one_or_none()

    async def latest_published(self, limit: int = 5) -> list[ArticleDB]:
        """The ``limit`` most recently created published articles."""
        page = await self.list_page(
            ArticleFilter(published_only=True),
            PageParams(page=1, limit=limit),
        )
        return page.items

    async def count_published(self) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(ArticleDB).where(ArticleDB.published.is_(True)),
        )
        return result.scalar() or 0
