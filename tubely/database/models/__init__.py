# tubely/database/models/__init__.py

from tubely.database.core.main import Base
from tubely.database.models.video import Video

__all__ = [
    "Base",
    "Video",
]
