"""
Club Membership Model
Accepted memberships and unredeemed invitations share this table
"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index, CheckConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
from clubaccess.database import Base


class ClubMembership(Base):
    __tablename__ = "club_members"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # NULL only for club-registration invites not yet tied to a club
    club_id = Column(UUID(as_uuid=True), ForeignKey("clubs.id", ondelete="CASCADE"), nullable=True)

    # NULL until the invite is claimed
    user_id = Column(UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True)

    department = Column(String(20), nullable=False)
    permission_level = Column(String(10), nullable=False, default="read")
    status = Column(String(10), nullable=False, default="pending")

    invite_code = Column(String(64), nullable=True, unique=True)
    invited_by = Column(UUID(as_uuid=True), nullable=True)
    invited_at = Column(DateTime(timezone=True), server_default=func.now())
    accepted_at = Column(DateTime(timezone=True), nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    used = Column(Boolean, nullable=False, default=False)

    club = relationship("Club", backref="memberships")

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'accepted', 'rejected')", name="ck_club_members_status"),
        CheckConstraint("NOT used OR status <> 'pending'", name="ck_club_members_used_terminal"),
        CheckConstraint(
            "user_id IS NOT NULL OR (status = 'pending' AND NOT used)",
            name="ck_club_members_unassigned_pending",
        ),
        Index("ix_club_members_user_status", "user_id", "status"),
        Index("ix_club_members_club_status", "club_id", "status"),
    )
