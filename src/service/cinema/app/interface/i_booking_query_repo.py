from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID


class IBookingQueryRepo(ABC):
    """Read side of bookings; results are booking views with movie (and user) details."""

    @abstractmethod
    async def get_by_id_with_details(self, *, booking_id: UUID) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def get_by_code_with_details(self, *, code: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def list_bookings_with_details(
        self,
        *,
        page: int,
        limit: int,
        user_id: Optional[int] = None,
        status: Optional[str] = None,
        movie_id: Optional[int] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """Newest first. Returns (page items, total count)"""
        pass
