"""
Database Models
Import all models here for Alembic migrations
"""

from clubaccess.models.profile import Profile
from clubaccess.models.club import Club
from clubaccess.models.membership import ClubMembership
from clubaccess.models.player_record import PlayerMedicalInfo, PlayerFinancialInfo, PlayerTechnicalReport

__all__ = [
    "Profile",
    "Club",
    "ClubMembership",
    "PlayerMedicalInfo",
    "PlayerFinancialInfo",
    "PlayerTechnicalReport",
]
