from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .committees.service import AssignmentService
from .core.constants import MAX_ATTACHMENT_BYTES
from .database.connection import DatabaseConnection, DBConfig
from .dispatch import Dispatcher
from .meetings.service import MeetingService
from .reference.loader import StaticReferenceLoader
from .storage.file_store import JsonFileKeyValueStore
from .storage.memory_store import InMemoryKeyValueStore
from .storage.mysql_store import MySQLKeyValueStore
from .storage.repository import KeyValueStore
from .submissions.service import SubmissionRecorder
from .users.repository import StaticUserDirectory
from .users.service import AuthService, SessionManager


@dataclass(frozen=True)
class Container:
    store: KeyValueStore
    loader: StaticReferenceLoader

    sessions: SessionManager
    auth_service: AuthService
    assignment_service: AssignmentService
    meeting_service: MeetingService
    submission_recorder: SubmissionRecorder
    dispatcher: Dispatcher


def build_store(settings) -> KeyValueStore:
    backend = str(getattr(settings, "STORAGE_BACKEND", "file")).lower()
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        return MySQLKeyValueStore(conn, profile=str(getattr(settings, "PROFILE_NAME", "default")))
    if backend == "file":
        return JsonFileKeyValueStore(Path(getattr(settings, "PROFILE_DIR")))
    raise ValueError(f"Unsupported STORAGE_BACKEND: {backend}")


def build_container(*, data_dir: Path | str, store: KeyValueStore, max_attachment_bytes: int = MAX_ATTACHMENT_BYTES) -> Container:
    loader = StaticReferenceLoader(data_dir)

    sessions = SessionManager(store)
    auth_service = AuthService(StaticUserDirectory(loader), sessions)
    assignment_service = AssignmentService(store, loader)
    meeting_service = MeetingService(store, loader)
    submission_recorder = SubmissionRecorder(store, max_attachment_bytes=max_attachment_bytes)
    dispatcher = Dispatcher(
        auth=auth_service,
        sessions=sessions,
        assignments=assignment_service,
        meetings=meeting_service,
        submissions=submission_recorder,
    )

    return Container(
        store=store,
        loader=loader,
        sessions=sessions,
        auth_service=auth_service,
        assignment_service=assignment_service,
        meeting_service=meeting_service,
        submission_recorder=submission_recorder,
        dispatcher=dispatcher,
    )
