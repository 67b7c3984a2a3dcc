"""
Session management service.
"""

import logging
import secrets
from datetime import timedelta
from typing import Any, Dict, Optional

from itsdangerous import BadSignature, URLSafeTimedSerializer
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from casefolio.models.common import utcnow
from casefolio.models.session import WebSession
from casefolio.models.user import User
from casefolio.services.config_service import AppConfig

logger = logging.getLogger("casefolio.session")


class SessionService:
    """Login sessions kept in the ``session`` table, addressed by a signed cookie."""

    def __init__(self, config: AppConfig):
        self.serializer = URLSafeTimedSerializer(config.session_secret, salt="casefolio.session")
        self.ttl = timedelta(hours=config.session_ttl_hours)
        self.cookie_name = config.session_cookie_name
        self.logger = logger

    @property
    def max_age(self) -> int:
        return int(self.ttl.total_seconds())

    def sign(self, sid: str) -> str:
        return self.serializer.dumps(sid)

    def unsign(self, cookie_value: str) -> Optional[str]:
        """
        Recover the session id from a cookie value.

        Returns:
            Session id, or None when the signature is invalid or too old
        """
        try:
            return self.serializer.loads(cookie_value, max_age=self.max_age)
        except BadSignature:
            self.logger.info("Rejected session cookie with bad or expired signature")
            return None

    async def create_session(self, db: AsyncSession, user: User) -> str:
        """
        Create a new session for user.

        Args:
            db: Database session
            user: Authenticated user

        Returns:
            Signed cookie value
        """
        sid = secrets.token_urlsafe(32)
        now = utcnow()
        record = WebSession(
            sid=sid,
            sess={"user_id": user.id, "username": user.username, "created_at": now.isoformat()},
            expire=now + self.ttl,
        )
        db.add(record)
        await db.commit()

        self.logger.info(f"Created session for user {user.username}")
        return self.sign(sid)

    async def get_session(self, db: AsyncSession, cookie_value: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        Get session data for a cookie value.

        Returns:
            Session data or None if missing, tampered or expired
        """
        if not cookie_value:
            return None

        sid = self.unsign(cookie_value)
        if not sid:
            return None

        record = await db.scalar(select(WebSession).where(WebSession.sid == sid))
        if record is None:
            return None

        if record.expire <= utcnow():
            self.logger.info(f"Session expired for user {record.sess.get('username')}")
            await db.execute(delete(WebSession).where(WebSession.sid == sid))
            await db.commit()
            return None

        return record.sess

    async def destroy_session(self, db: AsyncSession, cookie_value: Optional[str]) -> bool:
        """
        Destroy session.

        Returns:
            True if a session row was removed
        """
        sid = self.unsign(cookie_value) if cookie_value else None
        if not sid:
            return False

        result = await db.execute(delete(WebSession).where(WebSession.sid == sid))
        await db.commit()
        if result.rowcount:
            self.logger.info("Destroyed session")
        return result.rowcount > 0

    async def cleanup_expired_sessions(self, db: AsyncSession) -> int:
        """
        Clean up expired sessions.

        Returns:
            Number of sessions cleaned up
        """
        result = await db.execute(delete(WebSession).where(WebSession.expire <= utcnow()))
        await db.commit()

        if result.rowcount:
            self.logger.info(f"Cleaned up {result.rowcount} expired sessions")
        return result.rowcount
