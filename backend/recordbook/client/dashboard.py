"""Dashboard controller — list state, paging, search/sort and CRUD actions.

Holds everything a record dashboard view renders and performs the API calls
behind each user action. Rendering is left to the caller: pass ``on_change``
to be notified whenever the state changes.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from recordbook.client.api_client import ApiError, LocationApi, RecordsApi

logger = logging.getLogger(__name__)

PAGE_SIZES: tuple[int, ...] = (8, 16, 24, 32)
MESSAGE_TIMEOUT = 5.0
REFRESH_DELAY = 0.1


@dataclass
class DashboardState:
    """Snapshot of what the dashboard shows."""

    records: list[dict[str, Any]] = field(default_factory=list)
    loading: bool = False
    error: str = ""
    success: str = ""
    current_page: int = 1
    total_pages: int = 1
    total_records: int = 0
    page_size: int = PAGE_SIZES[0]
    search_term: str = ""
    sort_by: str = "name"
    sort_order: str = "asc"
    states: list[str] = field(default_factory=list)


class DashboardController:
    """Drives a record dashboard against the Records and Location APIs.

    After every add or delete the current page is re-fetched after a short
    delay, so totals and page contents always come from the server. Success
    and error messages clear themselves after ``message_timeout`` seconds.
    """

    def __init__(
        self,
        records_api: RecordsApi,
        location_api: LocationApi,
        *,
        message_timeout: float = MESSAGE_TIMEOUT,
        refresh_delay: float = REFRESH_DELAY,
        on_change: Callable[[DashboardState], None] | None = None,
    ):
        self._records_api = records_api
        self._location_api = location_api
        self._message_timeout = message_timeout
        self._refresh_delay = refresh_delay
        self._on_change = on_change
        self._message_timer: asyncio.Task | None = None
        self._pending: set[asyncio.Task] = set()
        self.state = DashboardState()

    # ── Loading ─────────────────────────────────────────────────────

    async def load(self) -> None:
        """Initial load: the first page of records and the state list."""
        await asyncio.gather(self.fetch_records(), self.fetch_states())

    async def fetch_records(self) -> None:
        s = self.state
        s.loading = True
        s.error = ""
        self._notify()
        try:
            result = await self._records_api.get_all(
                page=s.current_page,
                limit=s.page_size,
                search=s.search_term,
                sortBy=s.sort_by,
                sortOrder=s.sort_order,
            )
            if isinstance(result, dict) and "records" in result:
                s.records = result.get("records") or []
                s.total_pages = result.get("totalPages") or 1
                s.total_records = result.get("totalRecords") or 0
            else:
                logger.warning("Unexpected records response: %r", result)
                self._reset_listing()
        except ApiError as exc:
            logger.error("Error fetching records: %s", exc.message)
            self._reset_listing()
            self._set_error(exc.message or "Failed to fetch records")
        finally:
            s.loading = False
            self._notify()

    async def fetch_states(self) -> None:
        try:
            result = await self._location_api.get_states()
        except ApiError as exc:
            logger.warning("Could not load states: %s", exc.message)
            result = []
        self.state.states = result if isinstance(result, list) else []
        self._notify()

    # ── Mutations ───────────────────────────────────────────────────

    async def add_record(self, data: dict[str, Any]) -> dict[str, Any] | None:
        """Create a record; returns it, or None when the API rejected it."""
        created = await self._mutate(
            lambda: self._records_api.create(data), "Failed to add record"
        )
        if created:
            self.state.records = [created, *self.state.records]
            self._set_success("Record added successfully!")
            self._schedule_refresh()
        return created

    async def update_record(self, record_id: str, data: dict[str, Any]) -> dict[str, Any] | None:
        updated = await self._mutate(
            lambda: self._records_api.update(record_id, data), "Failed to update record"
        )
        if updated:
            self.state.records = [
                updated if r.get("id") == record_id else r for r in self.state.records
            ]
            self._set_success("Record updated successfully!")
        return updated

    async def delete_record(self, record_id: str) -> bool:
        """Delete a record. Asking the user for confirmation is the caller's job."""
        result = await self._mutate(
            lambda: self._records_api.delete(record_id), "Failed to delete record"
        )
        if result is None:
            return False
        self.state.records = [r for r in self.state.records if r.get("id") != record_id]
        self._set_success("Record deleted successfully!")
        self._schedule_refresh()
        return True

    async def _mutate(self, call: Callable, failure_message: str) -> Any:
        s = self.state
        s.loading = True
        s.error = ""
        self._notify()
        try:
            return await call()
        except ApiError as exc:
            logger.error("%s: %s", failure_message, exc.message)
            self._set_error(exc.message or failure_message)
            return None
        finally:
            s.loading = False
            self._notify()

    # ── Search, sort, paging ────────────────────────────────────────

    async def search(self, term: str) -> None:
        self.state.search_term = term
        self.state.current_page = 1
        await self.fetch_records()

    async def sort(self, field_name: str) -> None:
        """Toggle direction on the active field; a new field starts ascending."""
        s = self.state
        if s.sort_by == field_name:
            s.sort_order = "desc" if s.sort_order == "asc" else "asc"
        else:
            s.sort_by = field_name
            s.sort_order = "asc"
        s.current_page = 1
        await self.fetch_records()

    async def change_page(self, page: int) -> None:
        if page < 1 or page > max(self.state.total_pages, 1):
            return
        self.state.current_page = page
        await self.fetch_records()

    async def change_page_size(self, size: int) -> None:
        if size not in PAGE_SIZES:
            raise ValueError(f"Page size must be one of {PAGE_SIZES}, got {size}")
        self.state.page_size = size
        self.state.current_page = 1
        await self.fetch_records()

    # ── Messages & background work ──────────────────────────────────

    def dismiss_messages(self) -> None:
        self.state.success = ""
        self.state.error = ""
        self._notify()

    async def wait_idle(self) -> None:
        """Wait for scheduled re-fetches to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel timers and pending re-fetches."""
        tasks = list(self._pending)
        if self._message_timer is not None:
            tasks.append(self._message_timer)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._pending.clear()
        self._message_timer = None

    def _set_success(self, message: str) -> None:
        self.state.success = message
        self._restart_message_timer()
        self._notify()

    def _set_error(self, message: str) -> None:
        self.state.error = message
        self._restart_message_timer()
        self._notify()

    def _restart_message_timer(self) -> None:
        if self._message_timer is not None:
            self._message_timer.cancel()
        self._message_timer = asyncio.get_running_loop().create_task(self._clear_messages_later())

    async def _clear_messages_later(self) -> None:
        await asyncio.sleep(self._message_timeout)
        self._message_timer = None
        self.dismiss_messages()

    def _schedule_refresh(self) -> None:
        task = asyncio.get_running_loop().create_task(self._refresh_later())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _refresh_later(self) -> None:
        await asyncio.sleep(self._refresh_delay)
        await self.fetch_records()

    def _reset_listing(self) -> None:
        self.state.records = []
        self.state.total_pages = 1
        self.state.total_records = 0

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.state)
