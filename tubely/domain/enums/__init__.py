from tubely.domain.enums.aspect_class import AspectClass
from tubely.domain.enums.upload_kind import UploadKind

__all__ = [
    "AspectClass",
    "UploadKind",
]
