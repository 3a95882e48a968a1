import logging
from pathlib import Path
from .storage.csv_store import CsvStore

logger = logging.getLogger(__name__)

def is_known_user(uid: str, user_db: str | Path) -> bool:
    """Case-insensitive lookup of ``uid`` in the ``uid`` column of the user table.

    Without a user table any non-empty id is let in: the id only labels
    who answered, it is not a credential.
    """
    uid = (uid or "").strip()
    if not uid:
        return False
    store = CsvStore(user_db)
    if not store.exists():
        return True
    wanted = uid.lower()
    for user in store.read_all():
        if user.get("uid", "").strip().lower() == wanted:
            return True
    logger.info("Unknown user id %r", uid)
    return False
