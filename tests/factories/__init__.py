"""Test factories for generating test data.

    from tests.factories import EditorFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.project import EditorFactory, ProjectFactory, ReviewTokenFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Models
    "EditorFactory",
    "ProjectFactory",
    "ReviewTokenFactory",
]
