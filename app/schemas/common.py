from pydantic import BaseModel


# Pagination block shared by paginated statistics responses
class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next: bool
    has_prev: bool


# Error responses
class ErrorResponse(BaseModel):
    detail: str
