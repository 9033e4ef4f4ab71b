"""
GreenPlan Server - Identity Model

Pydantic model for the verified identity carried in session tokens and
attached to each authenticated request.
"""

from pydantic import BaseModel


class Identity(BaseModel):
    """Identity claims stored in the session token"""
    id: int
    username: str
    role: str  # 'user' or 'admin'

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
