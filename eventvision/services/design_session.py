"""
Design session state: uploads, location, website, blueprint and renders for one planner
"""
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from eventvision.core.config import settings
from eventvision.services.design_models import Blueprint, Location, MediaAsset, RenderedView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaCollection:
    """Ordered uploads. Adding appends, removing deletes one position, nothing reorders."""

    items: Tuple[MediaAsset, ...] = ()

    def add(self, assets: Iterable[MediaAsset]) -> "MediaCollection":
        return MediaCollection(self.items + tuple(assets))

    def remove(self, index: int) -> "MediaCollection":
        if index < 0 or index >= len(self.items):
            raise IndexError(f"No media at position {index}")
        return MediaCollection(self.items[:index] + self.items[index + 1 :])

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[MediaAsset]:
        return iter(self.items)

    def __getitem__(self, index: int) -> MediaAsset:
        return self.items[index]


@dataclass
class DesignSession:
    """Represents one planner's working state"""

    session_id: str
    media: MediaCollection = field(default_factory=MediaCollection)
    location: Optional[Location] = None
    website: str = ""
    prompt: str = ""
    blueprint: Optional[Blueprint] = None
    views: Optional[List[RenderedView]] = None
    progress_message: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    last_updated: datetime = field(default_factory=datetime.now)

    def touch(self) -> None:
        self.last_updated = datetime.now()


class DesignSessionManager:
    """Manages design sessions in memory"""

    def __init__(self, session_ttl_hours: Optional[int] = None):
        ttl_hours = settings.session_ttl_hours if session_ttl_hours is None else session_ttl_hours
        self.session_ttl = timedelta(hours=ttl_hours)
        self.sessions: Dict[str, DesignSession] = {}

        logger.info(f"Design session manager initialized - TTL: {ttl_hours}h")

    def create_session(self) -> DesignSession:
        session = DesignSession(session_id=str(uuid.uuid4()))
        self.sessions[session.session_id] = session
        logger.info(f"Created design session {session.session_id}")
        return session

    def get_session(self, session_id: str) -> DesignSession:
        """
        Raises:
            KeyError: unknown or expired session
        """
        session = self.sessions.get(session_id)
        if session is None:
            raise KeyError(session_id)

        if datetime.now() - session.last_updated > self.session_ttl:
            logger.info(f"Design session {session_id} expired")
            del self.sessions[session_id]
            raise KeyError(session_id)

        return session

    def add_media(self, session_id: str, assets: Iterable[MediaAsset]) -> DesignSession:
        session = self.get_session(session_id)
        session.media = session.media.add(assets)
        session.touch()
        return session

    def remove_media(self, session_id: str, index: int) -> DesignSession:
        """
        Raises:
            IndexError: no upload at that position
        """
        session = self.get_session(session_id)
        session.media = session.media.remove(index)
        session.touch()
        return session

    def set_location(self, session_id: str, location: Location) -> DesignSession:
        session = self.get_session(session_id)
        session.location = location
        session.touch()
        return session

    def clear_location(self, session_id: str) -> DesignSession:
        session = self.get_session(session_id)
        session.location = None
        session.touch()
        return session

    def set_website(self, session_id: str, website: str) -> DesignSession:
        session = self.get_session(session_id)
        session.website = website.strip()
        session.touch()
        return session

    def store_blueprint(self, session_id: str, blueprint: Blueprint, prompt: str) -> DesignSession:
        """Keep a fresh blueprint; renders from an older blueprint are dropped"""
        session = self.get_session(session_id)
        session.blueprint = blueprint
        session.prompt = prompt
        session.views = None
        session.touch()
        return session

    def update_blueprint_text(self, session_id: str, text: str) -> DesignSession:
        """
        Apply the planner's review edits.

        Raises:
            LookupError: no blueprint to edit yet
        """
        session = self.get_session(session_id)
        if session.blueprint is None:
            raise LookupError("No blueprint to edit")
        session.blueprint = session.blueprint.with_text(text)
        session.views = None
        session.touch()
        return session

    def store_views(self, session_id: str, views: List[RenderedView]) -> DesignSession:
        session = self.get_session(session_id)
        session.views = list(views)
        session.touch()
        return session

    def record_progress(self, session_id: str, message: str) -> None:
        session = self.sessions.get(session_id)
        if session is not None:
            session.progress_message = message

    def reset_session(self, session_id: str) -> DesignSession:
        """Start over, keeping the session id"""
        self.get_session(session_id)
        session = DesignSession(session_id=session_id)
        self.sessions[session_id] = session
        logger.info(f"Reset design session {session_id}")
        return session

    def clear_session(self, session_id: str) -> bool:
        if session_id in self.sessions:
            del self.sessions[session_id]
            logger.info(f"Cleared design session {session_id}")
            return True
        return False

    def cleanup_expired_sessions(self) -> int:
        """Remove expired sessions"""
        now = datetime.now()
        expired_sessions = [sid for sid, session in self.sessions.items() if now - session.last_updated > self.session_ttl]

        for session_id in expired_sessions:
            del self.sessions[session_id]

        if expired_sessions:
            logger.info(f"Cleaned up {len(expired_sessions)} expired design sessions")

        return len(expired_sessions)


# Global session manager instance
design_session_manager = DesignSessionManager()
