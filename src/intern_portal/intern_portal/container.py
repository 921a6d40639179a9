from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .announcements.service import AnnouncementService
from .applications.repository import ApplicationRepository
from .applications.service import ApplicationService
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_APPLICATION_ID_PREFIX, DEFAULT_MAX_RESUME_BYTES, DEFAULT_SIGNED_URL_MAX_AGE
from .database.connection import DBConfig, DatabaseConnection
from .resumes.storage import ResumeStorage
from .scanning.service import ScanService
from .store.mysql_kv_store import MySQLKeyValueStore
from .store.repository import KeyValueStore
from .users.model import AdminIdentity
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    store: KeyValueStore

    applications_repo: ApplicationRepository

    auth_service: AuthService
    application_service: ApplicationService
    attendance_service: AttendanceService
    scan_service: ScanService
    announcement_service: AnnouncementService
    resume_storage: ResumeStorage


def build_container(*, settings: Mapping[str, Any], store: Optional[KeyValueStore] = None) -> Container:
    """Wire repositories and services from flat settings (Flask ``app.config`` works).

    ``store`` replaces the MySQL-backed store, e.g. with an in-memory fake in tests.
    """
    conn = None
    if store is None:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings["DB_CONFIG"]))
        store = MySQLKeyValueStore(conn)

    applications_repo = ApplicationRepository(store)

    auth_service = AuthService(
        AdminIdentity(
            username=str(settings["ADMIN_USERNAME"]),
            password_hash=str(settings.get("ADMIN_PASSWORD_HASH") or ""),
        ),
        api_token=str(settings.get("API_TOKEN") or ""),
    )
    application_service = ApplicationService(
        applications_repo,
        id_prefix=str(settings.get("APPLICATION_ID_PREFIX") or DEFAULT_APPLICATION_ID_PREFIX),
    )
    attendance_service = AttendanceService(applications_repo)
    scan_service = ScanService(applications_repo)
    announcement_service = AnnouncementService(store)
    resume_storage = ResumeStorage(
        settings["UPLOAD_FOLDER"],
        secret_key=str(settings["SECRET_KEY"]),
        max_bytes=int(settings.get("MAX_RESUME_BYTES") or DEFAULT_MAX_RESUME_BYTES),
        max_age=int(settings.get("SIGNED_URL_MAX_AGE") or DEFAULT_SIGNED_URL_MAX_AGE),
    )

    return Container(
        conn=conn,
        store=store,
        applications_repo=applications_repo,
        auth_service=auth_service,
        application_service=application_service,
        attendance_service=attendance_service,
        scan_service=scan_service,
        announcement_service=announcement_service,
        resume_storage=resume_storage,
    )
