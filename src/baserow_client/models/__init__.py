from baserow_client.models.auth import LoginRequest, TokenResponse, User
from baserow_client.models.enums import Filter, OrderDirection
from baserow_client.models.field import TableField
from baserow_client.models.file import File, Thumbnail, Thumbnails, UploadFileViaUrlRequest
from baserow_client.models.request import FilterTriple, RowRequest
from baserow_client.models.rows import RowsResponse, TypedRowsResponse

__all__ = [
    "File",
    "Filter",
    "FilterTriple",
    "LoginRequest",
    "OrderDirection",
    "RowRequest",
    "RowsResponse",
    "TableField",
    "Thumbnail",
    "Thumbnails",
    "TokenResponse",
    "TypedRowsResponse",
    "UploadFileViaUrlRequest",
    "User",
]
