"""
Storage Service
Supabase Storage integration for club logos
"""

import logging
from uuid import uuid4
import httpx
from clubaccess.identity import Identity
from clubaccess.config import settings
from clubaccess.errors import DependencyUnavailable, ValidationError

logger = logging.getLogger(__name__)

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/svg+xml": "svg",
    "image/webp": "webp",
}


class StorageService:
    """Supabase Storage helper"""

    @staticmethod
    def _ensure_config():
        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            logger.error("Supabase Storage is not configured")
            raise DependencyUnavailable("File storage is not configured")

    @staticmethod
    def allowed_types() -> set:
        return {item.strip() for item in settings.ALLOWED_LOGO_TYPES.split(",") if item.strip()}

    @staticmethod
    def logo_path(user_id: str, content_type: str) -> str:
        """Object key club_logos/<user_id>/<random>.<ext>"""
        ext = EXTENSIONS.get(content_type, "bin")
        return f"club_logos/{user_id}/{uuid4()}.{ext}"

    @staticmethod
    async def upload_bytes(path: str, content: bytes, content_type: str) -> str:
        StorageService._ensure_config()

        base = settings.SUPABASE_URL.rstrip("/")
        bucket = settings.STORAGE_BUCKET
        url = f"{base}/storage/v1/object/{bucket}/{path}"

        headers = {
            "Authorization": f"Bearer {settings.SUPABASE_KEY}",
            "apikey": settings.SUPABASE_KEY,
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "true"
        }

        try:
            async with httpx.AsyncClient(timeout=30) as client:
                resp = await client.post(url, headers=headers, content=content)
        except httpx.HTTPError as exc:
            logger.error("Storage upload of %s failed: %s", path, exc)
            raise DependencyUnavailable() from exc

        if resp.status_code not in (200, 201):
            logger.error("Storage upload of %s rejected (%s): %s", path, resp.status_code, resp.text)
            raise DependencyUnavailable("File upload failed, please try again")

        return f"{base}/storage/v1/object/public/{bucket}/{path}"

    @staticmethod
    async def upload_club_logo(identity: Identity, filename: str, content: bytes, content_type: str) -> str:
        """
        Upload a club logo and return its public URL

        Raises:
            ValidationError: unsupported image type, empty or oversized file
            DependencyUnavailable: storage not configured or unreachable
        """
        if content_type not in StorageService.allowed_types():
            raise ValidationError("Unsupported logo type. Use JPEG, PNG, GIF, SVG or WEBP")

        if not content:
            raise ValidationError("Logo file is empty")

        if len(content) > settings.MAX_UPLOAD_SIZE:
            raise ValidationError(
                f"Logo exceeds the maximum size of {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB"
            )

        path = StorageService.logo_path(identity.id, content_type)
        public_url = await StorageService.upload_bytes(path, content, content_type)

        logger.info("User %s uploaded club logo %s as %s (%d bytes)", identity.id, filename, path, len(content))
        return public_url


# Create singleton instance
storage_service = StorageService()
