import math
from typing import Any, Dict

import attrs


@attrs.define(frozen=True)
class Pagination:
    current_page: int
    total_pages: int
    total_items: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> 'Pagination':
        return cls(
            current_page=page,
            total_pages=math.ceil(total / limit) if limit else 0,
            total_items=total,
            has_next_page=page * limit < total,
            has_prev_page=page > 1,
        )

    def to_dict(self) -> Dict[str, Any]:
        return attrs.asdict(self)
