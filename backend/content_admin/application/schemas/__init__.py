from .common import ApiResponse, IdListRequest

__all__ = [
    "ApiResponse",
    "IdListRequest",
]
