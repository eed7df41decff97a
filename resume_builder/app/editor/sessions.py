import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from resume_builder.app.editor.notifications import Notifier
from resume_builder.app.editor.persistence import PersistenceBridge, SaveFunction
from resume_builder.app.editor.synchronizer import ResumeSynchronizer
from resume_builder.app.export.pipeline import ExportPipeline

log = logging.getLogger(__name__)


@dataclass
class EditorSession:
    """Everything one user's open resume editor holds."""

    user_id: int
    synchronizer: ResumeSynchronizer
    notifier: Notifier
    persistence: PersistenceBridge
    export_pipeline: ExportPipeline


SessionFactory = Callable[[], EditorSession]


class EditorSessionStore:
    """
    In-process registry of open editor sessions, one per user.

    Sessions live in the memory of a single worker process and are lost on
    restart; the saved markdown in the database is the durable state.

    Args:
        max_idle_seconds (float | None): Sessions unused for longer than this are
            dropped on the next lookup. `None` keeps them until discarded.
        clock (Callable[[], float]): Monotonic time source.

    """

    def __init__(
        self,
        max_idle_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._sessions: dict[int, EditorSession] = {}
        self._last_used: dict[int, float] = {}
        self._max_idle_seconds = max_idle_seconds
        self._clock = clock

    def _evict_idle(self, now: float) -> None:
        if self._max_idle_seconds is None:
            return
        expired = [
            user_id
            for user_id, last_used in self._last_used.items()
            if now - last_used > self._max_idle_seconds
        ]
        for user_id in expired:
            _msg = f"Editor session for user {user_id} expired"
            log.debug(_msg)
            self.discard(user_id)

    def get(self, user_id: int) -> EditorSession | None:
        self._evict_idle(self._clock())
        return self._sessions.get(user_id)

    def get_or_create(self, user_id: int, factory: SessionFactory) -> EditorSession:
        """
        Return the user's session, creating it with `factory` on first use.

        Args:
            user_id (int): The owner of the session.
            factory (SessionFactory): Builds a new session; only called when none exists.

        Returns:
            EditorSession: The user's session.

        Notes:
            1. Idle sessions of any user are dropped first.
            2. A lookup counts as use and restarts the idle clock.

        """
        now = self._clock()
        self._evict_idle(now)
        session = self._sessions.get(user_id)
        if session is None:
            _msg = f"Opening editor session for user {user_id}"
            log.debug(_msg)
            session = factory()
            self._sessions[user_id] = session
        self._last_used[user_id] = now
        return session

    def discard(self, user_id: int) -> None:
        """Forget the user's session, if any."""
        self._last_used.pop(user_id, None)
        if self._sessions.pop(user_id, None) is not None:
            _msg = f"Closed editor session for user {user_id}"
            log.debug(_msg)


def build_editor_session(
    user_id: int,
    initial_content: str,
    display_name: str | None,
    save: SaveFunction,
    export_pipeline_factory: Callable[[Notifier], ExportPipeline],
    overwrite_manual_edits: bool = True,
) -> EditorSession:
    """
    Assemble a new editor session.

    Args:
        user_id (int): The owner of the session.
        initial_content (str): The previously saved markdown, or an empty string.
        display_name (str | None): The user's display name.
        save (SaveFunction): The save collaborator.
        export_pipeline_factory (Callable[[Notifier], ExportPipeline]): Builds the export pipeline.
        overwrite_manual_edits (bool): The regeneration policy for manual edits.

    Returns:
        EditorSession: The new session sharing one notifier across its parts.

    """
    notifier = Notifier()
    return EditorSession(
        user_id=user_id,
        synchronizer=ResumeSynchronizer(
            initial_content=initial_content,
            display_name=display_name,
            overwrite_manual_edits=overwrite_manual_edits,
        ),
        notifier=notifier,
        persistence=PersistenceBridge(save=save, notifier=notifier),
        export_pipeline=export_pipeline_factory(notifier),
    )
