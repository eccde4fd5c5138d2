"""Marker icons: automatic light icons and icon path lookups.

Icon names (``mdi:lightbulb``...) are resolved to SVG path data by an icon
service. Lookups run on a small worker pool so they never block marker
updates; the picker collects finished lookups with ``IconLoader.poll()`` on
its own thread.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Optional, Protocol
from urllib.parse import quote

import requests

from huewheel import defaults
from huewheel.errors import IconFetchError

logger = logging.getLogger(__name__)

DEFAULT_ONE_ICON = "mdi:lightbulb"
DEFAULT_TWO_ICON = "mdi:lightbulb-multiple"
DEFAULT_MORE_ICON = "mdi:lightbulb-group"
HUE_ONE_ICON = "hue:bulb-classic"
HUE_TWO_ICON = "hue:bulb-group-classic"
HUE_THREE_ICON = "hue:bulb-group-classic-3"
HUE_MORE_ICON = "hue:bulb-group-classic-4"


def icon_for_light_count(count: int, hue_icons: bool = False) -> str:
    """Icon to show for a group of ``count`` lights.

    Args:
        count: Number of lights
        hue_icons: Whether the ``hue:`` icon set is available
    """
    if count <= 1:
        return HUE_ONE_ICON if hue_icons else DEFAULT_ONE_ICON
    if count <= 2:
        return HUE_TWO_ICON if hue_icons else DEFAULT_TWO_ICON
    if count <= 3:
        return HUE_THREE_ICON if hue_icons else DEFAULT_MORE_ICON
    return HUE_MORE_ICON if hue_icons else DEFAULT_MORE_ICON


class IconResolver(Protocol):
    def resolve(self, name: str) -> Optional[str]:
        """Return SVG path data for ``name``, or None if the icon is unknown."""
        ...


class HttpIconResolver:
    """Fetch icon paths from an HTTP icon service.

    ``GET {base_url}/{name}`` must answer with JSON ``{"path": "<svg path>"}``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = defaults.DEFAULT_ICON_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def resolve(self, name: str) -> Optional[str]:
        """Look up ``name``.

        Raises:
            IconFetchError: If the request fails or the response is not valid JSON
        """
        if not name:
            return None

        url = f"{self.base_url}/{quote(name, safe='')}"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise IconFetchError(f"Icon request for {name!r} failed: {e}") from e
        except ValueError as e:
            raise IconFetchError(f"Icon service sent invalid JSON for {name!r}") from e

        if not isinstance(data, dict):
            raise IconFetchError(f"Unexpected icon response for {name!r}: {data!r}")
        return data.get("path") or None


@dataclass(frozen=True)
class IconResult:
    """Finished lookup. ``path`` is None when the icon could not be resolved."""

    marker: str
    icon: str
    path: Optional[str]


class IconLoader:
    """Fire-and-forget icon lookups on a worker pool."""

    def __init__(
        self,
        resolver: IconResolver,
        max_workers: int = defaults.DEFAULT_ICON_WORKERS,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.resolver = resolver
        self._executor = executor if executor is not None else ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="huewheel-icons",
        )
        self._pending: list[tuple[str, str, Future]] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request(self, marker: str, icon: str) -> Future:
        future = self._executor.submit(self.resolver.resolve, icon)
        self._pending.append((marker, icon, future))
        return future

    def poll(self) -> list[IconResult]:
        """Collect finished lookups in request order. Failures become ``path=None``."""
        done: list[IconResult] = []
        still_pending = []
        for marker, icon, future in self._pending:
            if not future.done():
                still_pending.append((marker, icon, future))
                continue
            done.append(IconResult(marker, icon, self._result_path(icon, future)))
        self._pending = still_pending
        return done

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until all pending lookups finished (or ``timeout`` elapsed)."""
        if self._pending:
            wait([future for _, _, future in self._pending], timeout=timeout)

    def shutdown(self) -> None:
        for _, _, future in self._pending:
            future.cancel()
        self._pending.clear()
        self._executor.shutdown(wait=False)

    @staticmethod
    def _result_path(icon: str, future: Future) -> Optional[str]:
        if future.cancelled():
            return None
        error = future.exception()
        if error is not None:
            logger.warning("Could not load icon %s: %s", icon, error)
            return None
        return future.result()
