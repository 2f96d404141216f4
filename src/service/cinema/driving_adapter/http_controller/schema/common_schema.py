from pydantic import BaseModel


class PaginationResponse(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    has_next_page: bool
    has_prev_page: bool


class MessageResponse(BaseModel):
    message: str
