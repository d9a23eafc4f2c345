"""Repository for Editor entity."""

from src.scopelock.models import Editor
from src.scopelock.repositories.base import BaseRepository


class EditorRepository(BaseRepository[Editor]):
    """Repository for Editor entity."""

    model = Editor
