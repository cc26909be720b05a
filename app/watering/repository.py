from datetime import datetime
from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1.base_query import FieldFilter


CROPS = "crops"
USER_CROPS = "user_crops"
FARMERS = "farmers"

NEXT_WATERING_FIELD = "nextWateringTimestamp"


def get_crop_definition(db, crop_id: str) -> Optional[Dict[str, Any]]:
    snap = db.collection(CROPS).document(crop_id).get()
    if not snap.exists:
        return None
    return snap.to_dict() or {}


def set_next_watering(db, user_crop_id: str, when: datetime) -> None:
    """Partial update of an existing user_crops doc. Raises NotFound if it is missing."""
    db.collection(USER_CROPS).document(user_crop_id).update({NEXT_WATERING_FIELD: when})


def get_due_user_crops(db, now: datetime, limit: Optional[int] = None) -> List[Any]:
    """Snapshots of user_crops whose next watering is at or before ``now``.

    Order is whatever Firestore returns for the range filter.
    """
    query = db.collection(USER_CROPS).where(filter=FieldFilter(NEXT_WATERING_FIELD, "<=", now))
    if limit:
        query = query.limit(limit)
    return list(query.stream())


def get_farmer_token(db, user_id: Optional[str]) -> Optional[str]:
    if not user_id:
        return None
    snap = db.collection(FARMERS).document(user_id).get()
    if not snap.exists:
        return None
    return (snap.to_dict() or {}).get("fcmToken") or None
