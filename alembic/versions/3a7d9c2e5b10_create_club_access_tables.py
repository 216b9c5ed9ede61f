"""Create profiles, clubs, memberships and player record tables

Revision ID: 3a7d9c2e5b10
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "3a7d9c2e5b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Create profiles table
    op.create_table(
        "profiles",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("full_name", sa.String(100), nullable=True),
        sa.Column("user_type", sa.String(30), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("specialization", sa.String(200), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )

    # Create clubs table
    op.create_table(
        "clubs",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("founded_year", sa.Integer(), nullable=False),
        sa.Column("league", sa.String(100), nullable=True),
        sa.Column("stadium", sa.String(100), nullable=True),
        sa.Column("logo_url", sa.String(), nullable=True),
        sa.Column("manager_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["manager_id"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_clubs_manager_id", "clubs", ["manager_id"])

    # Create club_members table (memberships and unredeemed invites)
    op.create_table(
        "club_members",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("club_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("department", sa.String(20), nullable=False),
        sa.Column("permission_level", sa.String(10), nullable=False, server_default="read"),
        sa.Column("status", sa.String(10), nullable=False, server_default="pending"),
        sa.Column("invite_code", sa.String(64), nullable=True),
        sa.Column("invited_by", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("invited_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("used", sa.Boolean(), nullable=False, server_default="false"),
        sa.ForeignKeyConstraint(["club_id"], ["clubs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("invite_code"),
        sa.CheckConstraint("status IN ('pending', 'accepted', 'rejected')", name="ck_club_members_status"),
        sa.CheckConstraint("NOT used OR status <> 'pending'", name="ck_club_members_used_terminal"),
        sa.CheckConstraint(
            "user_id IS NOT NULL OR (status = 'pending' AND NOT used)",
            name="ck_club_members_unassigned_pending",
        ),
    )
    op.create_index("ix_club_members_user_status", "club_members", ["user_id", "status"])
    op.create_index("ix_club_members_club_status", "club_members", ["club_id", "status"])

    # Create player_medical_info table
    op.create_table(
        "player_medical_info",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("player_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("club_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("blood_type", sa.String(5), nullable=True),
        sa.Column("allergies", postgresql.JSONB(), nullable=True),
        sa.Column("medical_history", sa.Text(), nullable=True),
        sa.Column("last_medical_exam", sa.Date(), nullable=True),
        sa.Column("fitness_level", sa.Integer(), nullable=True),
        sa.Column("created_by", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("player_id", "club_id", name="uq_player_medical_info_player_club"),
    )

    # Create player_financial_info table
    op.create_table(
        "player_financial_info",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("player_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("club_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("salary", sa.Integer(), nullable=True),
        sa.Column("contract_value", sa.Integer(), nullable=True),
        sa.Column("agent_commission", sa.Float(), nullable=True),
        sa.Column("bonuses", postgresql.JSONB(), nullable=True),
        sa.Column("created_by", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("player_id", "club_id", name="uq_player_financial_info_player_club"),
    )

    # Create player_technical_reports table (append-only)
    op.create_table(
        "player_technical_reports",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("player_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("club_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("scout_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("overall_rating", sa.Integer(), nullable=True),
        sa.Column("technical_skills", postgresql.JSONB(), nullable=True),
        sa.Column("strengths", postgresql.JSONB(), nullable=True),
        sa.Column("weaknesses", postgresql.JSONB(), nullable=True),
        sa.Column("detailed_notes", sa.Text(), nullable=True),
        sa.Column("recommendation", sa.String(10), nullable=False, server_default="monitor"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_player_technical_reports_player_club",
        "player_technical_reports",
        ["player_id", "club_id"],
    )


def downgrade():
    op.drop_index("ix_player_technical_reports_player_club", table_name="player_technical_reports")
    op.drop_table("player_technical_reports")
    op.drop_table("player_financial_info")
    op.drop_table("player_medical_info")
    op.drop_index("ix_club_members_club_status", table_name="club_members")
    op.drop_index("ix_club_members_user_status", table_name="club_members")
    op.drop_table("club_members")
    op.drop_index("ix_clubs_manager_id", table_name="clubs")
    op.drop_table("clubs")
    op.drop_table("profiles")
