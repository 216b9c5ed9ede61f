"""
Pytest configuration and fixtures for ClubAccess tests
"""

import os
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from uuid import uuid4

# Settings are read at import time, so point them at a throwaway database first
_TMP_DIR = tempfile.mkdtemp(prefix="clubaccess-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR}/clubaccess.db"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["SUPABASE_URL"] = "https://storage.example.test"
os.environ["SUPABASE_KEY"] = "service-role-key"

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from jose import jwt

from clubaccess import models  # noqa: F401  registers tables on Base.metadata
from clubaccess.config import settings
from clubaccess.database import Base, database, engine
from clubaccess.identity import Identity
from clubaccess.permissions import Department, PermissionLevel
from clubaccess.schemas.club import CreateClubRequest
from clubaccess.schemas.membership import MembershipStatus
from clubaccess.schemas.profile import UserType
from clubaccess.services.club_service import club_service
from clubaccess.services.membership_service import membership_service
from clubaccess.services.profile_service import profile_service

# Fixed clock for expiry scenarios
T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    """Create the schema once per test session"""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture(autouse=True)
def clean_tables():
    """Every test starts from empty tables"""
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
    yield


@pytest.fixture
async def db():
    """Connected async database for service-level tests"""
    await database.connect()
    yield database
    await database.disconnect()


def new_identity(full_name: str = "Test User") -> Identity:
    return Identity(user_id=uuid4(), email=f"{uuid4().hex[:8]}@example.com", full_name=full_name)


async def make_user(user_type: UserType = None, full_name: str = "Test User") -> Identity:
    """Identity with a stored profile, optionally past onboarding step 1"""
    identity = new_identity(full_name)
    await profile_service.ensure_profile(identity, now=T0)
    if user_type is UserType.ADMIN:
        await profile_service.grant_platform_admin(identity.id, now=T0)
    elif user_type is not None:
        await profile_service.set_user_type(identity, user_type, now=T0)
    return identity


async def make_club(owner: Identity = None, name: str = "Atlético Ribeira FC"):
    """Club with its owner holding management/admin; returns (owner, club)"""
    owner = owner or await make_user(UserType.CLUB, "Club Owner")
    club = await club_service.create_club(
        owner,
        CreateClubRequest(name=name, country="Brasil", founded_year=1921),
        now=T0,
    )
    return owner, club


async def grant(identity: Identity, club_id, department: Department, level: PermissionLevel):
    """Insert an accepted membership directly into the ledger"""
    return await membership_service.create(
        club_id=club_id,
        user_id=identity.id,
        department=department,
        permission_level=level,
        status=MembershipStatus.ACCEPTED,
        invited_by=identity.id,
        accepted_at=T0,
        now=T0,
    )


def token_for(identity: Identity, expires_in: timedelta = timedelta(hours=1)) -> str:
    """Bearer token shaped like the hosted auth provider's"""
    claims = {
        "sub": identity.id,
        "email": identity.email,
        "aud": settings.JWT_AUDIENCE,
        "exp": datetime.now(timezone.utc) + expires_in,
        "user_metadata": {"full_name": identity.full_name},
    }
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def auth_header(identity: Identity) -> dict:
    return {"Authorization": f"Bearer {token_for(identity)}"}
