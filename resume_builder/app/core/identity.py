"""Identity lookups for the current user.

The resume composer only needs a display name. Users without one still get a
resume; the contact heading is simply left out.
"""

import logging

from resume_builder.app.models.user import User

log = logging.getLogger(__name__)


def get_display_name(user: User | None) -> str | None:
    """Return the user's full display name, or None when it is not known.

    Args:
        user (User | None): The current user, if any.

    Returns:
        str | None: The stripped full name, or None for a missing user or a blank name.

    """
    if user is None:
        return None
    full_name = getattr(user, "full_name", None)
    if not isinstance(full_name, str) or not full_name.strip():
        _msg = f"No display name set for user {getattr(user, 'username', None)}"
        log.debug(_msg)
        return None
    return full_name.strip()
