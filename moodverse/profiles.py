"""
User-record store: one-shot profile write keyed by identity handle.
"""
from __future__ import annotations
import asyncio
import logging
import sqlite3

from moodverse.config import Settings
from moodverse.models import RegistrationProfile

logger = logging.getLogger(__name__)


class ProfileWriteError(Exception):
    """The user-record store rejected or failed the write."""


class ProfileStore:
    async def write(self, uid: str, profile: RegistrationProfile) -> None:
        raise NotImplementedError


class SqliteProfileStore(ProfileStore):
    def __init__(self, db_path: str):
        self.db_path = db_path
        self.init_db()

    def init_db(self) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS profiles (
                    uid TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    gender TEXT NOT NULL,
                    contact_number TEXT NOT NULL,
                    email TEXT NOT NULL
                )
                """
            )
            conn.commit()

    async def write(self, uid: str, profile: RegistrationProfile) -> None:
        await asyncio.to_thread(self._upsert, uid, profile.record())

    def _upsert(self, uid: str, rec: dict) -> None:
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO profiles (uid, name, gender, contact_number, email)
                    VALUES (?, ?, ?, ?, ?)
                    ON CONFLICT(uid) DO UPDATE SET
                        name=excluded.name, gender=excluded.gender,
                        contact_number=excluded.contact_number, email=excluded.email
                    """,
                    (uid, rec["name"], rec["gender"], rec["contactNumber"], rec["email"]),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise ProfileWriteError(str(e)) from e


class FirestoreProfileStore(ProfileStore):
    """Writes `{collection}/{uid}` documents through firebase_admin."""

    def __init__(self, credentials_path: str | None, collection: str = "users"):
        # Lazy import: firebase_admin is an optional extra
        import firebase_admin
        from firebase_admin import credentials, firestore

        if not firebase_admin._apps:
            cred = credentials.Certificate(credentials_path) if credentials_path else None
            firebase_admin.initialize_app(cred)
        self._db = firestore.client()
        self.collection = collection

    async def write(self, uid: str, profile: RegistrationProfile) -> None:
        try:
            doc = self._db.collection(self.collection).document(uid)
            # set() blocks on the network
            await asyncio.to_thread(doc.set, profile.record())
        except Exception as e:
            raise ProfileWriteError(str(e)) from e


def make_profile_store(settings: Settings) -> ProfileStore:
    if settings.PROFILE_BACKEND == "firestore":
        logger.info(f"[profiles] using firestore collection={settings.PROFILE_COLLECTION}")
        return FirestoreProfileStore(settings.FIREBASE_CREDENTIALS, settings.PROFILE_COLLECTION)
    logger.info(f"[profiles] using sqlite db={settings.USER_DB_PATH}")
    return SqliteProfileStore(settings.USER_DB_PATH)
