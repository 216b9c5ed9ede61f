"""
Authenticated Identity
Explicit caller identity passed into every service call
"""

from pydantic import BaseModel
from typing import Optional
from uuid import UUID


class Identity(BaseModel):
    """Caller verified from a bearer token"""
    user_id: UUID
    email: Optional[str] = None
    full_name: Optional[str] = None

    @property
    def id(self) -> str:
        return str(self.user_id)
