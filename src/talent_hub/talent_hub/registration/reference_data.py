from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Callable, Optional, Sequence

from ..core.constants import DEFAULT_REFERENCE_LOAD_WORKERS
from ..organization.model import Department, Team, Track, TrackPosition
from ..organization.repository import (
    DepartmentRepository,
    JobPositionRepository,
    TeamRepository,
    TrackPositionRepository,
    TrackRepository,
)
from ..users.model import UserSummary
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)

USERS = "users"
TEAMS = "teams"
DEPARTMENTS = "departments"
CAREER = "career"

LOAD_NAMES = (USERS, TEAMS, DEPARTMENTS, CAREER)

FAILURE_MESSAGES = {
    USERS: "Erro ao carregar usuários",
    TEAMS: "Erro ao carregar times",
    DEPARTMENTS: "Erro ao carregar departamentos",
    "tracks": "Erro ao carregar trilhas",
    "positions": "Erro ao carregar cargos",
}


class ReferenceDataStore:
    """Read-only organizational taxonomy used by one registration form.

    The store is owned by whoever builds it (the application container) and
    filled by `load()`: four independent loads (users, teams, departments,
    career tracks + positions) run concurrently, each with its own loading
    flag. A failed load is logged, leaves its list empty and is reported in
    `failures`; the other lists are not affected.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        teams: TeamRepository,
        departments: DepartmentRepository,
        tracks: TrackRepository,
        track_positions: TrackPositionRepository,
        job_positions: JobPositionRepository,
        max_workers: int = DEFAULT_REFERENCE_LOAD_WORKERS,
    ):
        self._users_repo = users
        self._teams_repo = teams
        self._departments_repo = departments
        self._tracks_repo = tracks
        self._track_positions_repo = track_positions
        self._job_positions_repo = job_positions
        self._max_workers = max(1, int(max_workers))

        self._lock = threading.Lock()
        self._loaded = False
        self._loading = {name: False for name in LOAD_NAMES}
        self._failures: dict[str, str] = {}

        self._users: tuple[UserSummary, ...] = ()
        self._teams: tuple[Team, ...] = ()
        self._departments: tuple[Department, ...] = ()
        self._tracks: tuple[Track, ...] = ()
        self._positions: tuple[TrackPosition, ...] = ()

    # -- state -------------------------------------------------------------

    @property
    def users(self) -> tuple[UserSummary, ...]:
        return self._users

    @property
    def teams(self) -> tuple[Team, ...]:
        return self._teams

    @property
    def departments(self) -> tuple[Department, ...]:
        return self._departments

    @property
    def tracks(self) -> tuple[Track, ...]:
        return self._tracks

    @property
    def positions(self) -> tuple[TrackPosition, ...]:
        return self._positions

    @property
    def failures(self) -> dict[str, str]:
        with self._lock:
            return dict(self._failures)

    @property
    def loading(self) -> dict[str, bool]:
        with self._lock:
            return dict(self._loading)

    @property
    def is_ready(self) -> bool:
        with self._lock:
            return self._loaded and not any(self._loading.values())

    # -- loading -----------------------------------------------------------

    def load(self) -> None:
        loaders: dict[str, Callable[[], None]] = {
            USERS: self._load_users,
            TEAMS: self._load_teams,
            DEPARTMENTS: self._load_departments,
            CAREER: self._load_career,
        }
        with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="reference-load") as pool:
            futures = [pool.submit(self._run, name, loader) for name, loader in loaders.items()]
            for future in futures:
                future.result()

        with self._lock:
            self._loaded = True
        logger.info(
            "Reference data loaded: users=%d teams=%d departments=%d tracks=%d positions=%d failures=%s",
            len(self._users),
            len(self._teams),
            len(self._departments),
            len(self._tracks),
            len(self._positions),
            sorted(self._failures),
        )

    def ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def reload(self) -> None:
        self.load()

    def reload_users(self) -> None:
        self._run(USERS, self._load_users)

    def _run(self, name: str, loader: Callable[[], None]) -> None:
        with self._lock:
            self._loading[name] = True
        try:
            loader()
        finally:
            with self._lock:
                self._loading[name] = False

    def _guarded(self, key: str, fetch: Callable[[], Sequence]) -> Optional[tuple]:
        """Run one backing query; on failure log it, record it and return None."""
        try:
            items = tuple(fetch())
        except Exception:
            logger.exception("Reference load failed: %s", key)
            with self._lock:
                self._failures[key] = FAILURE_MESSAGES[key]
            return None
        with self._lock:
            self._failures.pop(key, None)
        return items

    def _load_users(self) -> None:
        self._users = self._guarded(USERS, self._users_repo.list_summaries) or ()

    def _load_teams(self) -> None:
        self._teams = self._guarded(TEAMS, self._teams_repo.list_all) or ()

    def _load_departments(self) -> None:
        self._departments = self._guarded(DEPARTMENTS, self._departments_repo.list_all) or ()

    def _load_career(self) -> None:
        self._tracks = self._guarded("tracks", self._tracks_repo.list_all) or ()

        links = self._guarded("positions", self._track_positions_repo.list_all)
        if not links:
            self._positions = ()
            return
        self._positions = self._join_positions(links)

    def _join_positions(self, links: tuple[TrackPosition, ...]) -> tuple[TrackPosition, ...]:
        # The catalog join is best effort: links stay usable (labelled by id) without it.
        try:
            catalog = self._job_positions_repo.get_by_ids([link.position_id for link in links])
        except Exception:
            logger.warning("Job position lookup failed; keeping track positions without names", exc_info=True)
            return links

        by_id = {p.position_id: p for p in catalog}
        return tuple(replace(link, position=by_id.get(link.position_id)) for link in links)
