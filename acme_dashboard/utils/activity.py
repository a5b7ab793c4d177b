"""Audit trail helpers."""

from __future__ import annotations

from typing import Optional

from flask_login import current_user

from acme_dashboard.models import ActivityLog, db


def log_activity(activity: str, user_id: Optional[int] = None) -> None:
    """Record an activity performed by a user.

    Defaults to the logged-in user when ``user_id`` is not given.
    """
    if user_id is None:
        if current_user and not current_user.is_anonymous:
            user_id = current_user.id
    db.session.add(ActivityLog(user_id=user_id, activity=activity[:255]))
    db.session.commit()
