"""Preference repository: per-identity interaction history."""
from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, selectinload

from snacksmart.core.identity import AuthenticatedIdentity, Identity
from snacksmart.models import UserPreference

# Newest first; id breaks ties between rows written within the same clock tick
NEWEST_FIRST = (UserPreference.created_at.desc(), UserPreference.id.desc())


def identity_clause(identity: Identity):
    if isinstance(identity, AuthenticatedIdentity):
        return UserPreference.user_id == identity.user_id
    return UserPreference.session_id == identity.session_id


def insert_preference(
    db: Session,
    identity: Identity,
    product_id: int,
    action_type: str,
    category: str | None,
) -> UserPreference:
    """Insert one interaction row for exactly one identity form."""
    pref = UserPreference(
        user_id=identity.user_id if isinstance(identity, AuthenticatedIdentity) else None,
        session_id=None if isinstance(identity, AuthenticatedIdentity) else identity.session_id,
        product_id=product_id,
        action_type=action_type,
        category=category,
    )
    db.add(pref)
    db.flush()
    # created_at is a server default; load it while the session is open
    db.refresh(pref)
    return pref


def trim_history(db: Session, identity: Identity, keep: int) -> int:
    """
    Delete every row for the identity beyond the newest `keep`.
    Returns the number of rows deleted.
    """
    stale_ids = db.execute(
        select(UserPreference.id)
        .where(identity_clause(identity))
        .order_by(*NEWEST_FIRST)
        .offset(keep)
    ).scalars().all()
    if not stale_ids:
        return 0
    db.execute(
        delete(UserPreference)
        .where(UserPreference.id.in_(stale_ids))
        .execution_options(synchronize_session=False)
    )
    return len(stale_ids)


def recent_preferences(
    db: Session,
    identity: Identity,
    limit: int,
    with_product: bool = False,
) -> list[UserPreference]:
    """Most recent `limit` rows for the identity, newest first."""
    stmt = select(UserPreference).where(identity_clause(identity)).order_by(*NEWEST_FIRST).limit(limit)
    if with_product:
        stmt = stmt.options(selectinload(UserPreference.product))
    return list(db.execute(stmt).scalars().all())


def count_preferences(db: Session, identity: Identity) -> int:
    return db.execute(
        select(func.count()).select_from(UserPreference).where(identity_clause(identity))
    ).scalar_one()


def delete_preferences(db: Session, identity: Identity) -> int:
    """Bulk-delete every row for the identity; other identities untouched."""
    result = db.execute(
        delete(UserPreference)
        .where(identity_clause(identity))
        .execution_options(synchronize_session=False)
    )
    return result.rowcount or 0
