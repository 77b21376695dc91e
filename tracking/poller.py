#Purpose: The polling side of live tracking (what the operator and customer views run).
#Fetches a full snapshot every poll interval and hands it over as a replacement
#for the previous one (no diffing). Between polls a view may tick its countdown
#locally with local_remaining_seconds(); every poll resynchronizes it.
#The loop can be cancelled at any point; reads hold nothing that needs releasing.
#HttpProgressSource is the HTTP adapter: talks to the progress endpoint and parses the wire shape.

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

import requests

from .config import tracking_base_url, tracking_policy_from_env
from .models import NoProgress, ProgressResult, ProgressSnapshot, progress_result_from_dict
from .policy import TrackingPolicy

logger = logging.getLogger(__name__)


class TrackingClientError(Exception):
    """Custom exception for progress endpoint errors."""
    pass


class HttpProgressSource:
    """
    Progress endpoint adapter.

    Sole responsibility:
    - GET {base_url}/orders/{order_id}/progress
    - turn the JSON body into a ProgressSnapshot / NoProgress
    """

    def __init__(
        self,
        order_id: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        policy: Optional[TrackingPolicy] = None,
    ):
        if timeout is None:
            timeout = (policy or tracking_policy_from_env()).request_timeout_seconds

        self.order_id = order_id
        self.base_url = (base_url or tracking_base_url()).rstrip("/")
        self.timeout = timeout #the time to wait for the progress endpoint before giving up
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.base_url}/orders/{self.order_id}/progress"

    def __call__(self) -> ProgressResult:
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise TrackingClientError(f"Progress request for order {self.order_id} failed: {e}") from e
        except ValueError as e:
            raise TrackingClientError(f"Progress response for order {self.order_id} is not JSON") from e

        try:
            return progress_result_from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise TrackingClientError(f"Malformed progress payload for order {self.order_id}: {e}") from e


class ProgressPoller:
    """
    Cancellable poll loop.

    fetch is any zero-argument callable returning a ProgressResult:
    an HttpProgressSource, or lambda: session.get_progress(order_id) in-process.
    """

    def __init__(
        self,
        fetch: Callable[[], ProgressResult],
        policy: Optional[TrackingPolicy] = None,
    ):
        self.fetch = fetch
        self.policy = policy or tracking_policy_from_env()
        self._cancelled = threading.Event()
        self.last_result: Optional[ProgressResult] = None

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def poll_once(self) -> Optional[ProgressResult]:
        """
        One poll. Fetch failures are logged and yield None; the next poll retries.
        """
        try:
            result = self.fetch()
        except TrackingClientError as e:
            logger.warning(f"Progress poll failed: {e}")
            return None

        self.last_result = result
        return result

    def run(
        self,
        on_result: Callable[[ProgressResult], None],
        max_polls: Optional[int] = None,
    ) -> int:
        """
        Poll until cancelled (or max_polls reached, or the partner has arrived when
        policy.stop_when_reached). Returns the number of polls made.
        """
        polls = 0
        while not self._cancelled.is_set():
            result = self.poll_once()
            polls += 1

            if result is not None and not self._cancelled.is_set():
                on_result(result)

                if self.policy.stop_when_reached and isinstance(result, ProgressSnapshot) and result.reached:
                    break

            if max_polls is not None and polls >= max_polls:
                break

            # wakes up immediately on cancel()
            if self._cancelled.wait(self.policy.poll_interval_seconds):
                break

        return polls

    def start(self, on_result: Callable[[ProgressResult], None]) -> threading.Thread:
        thread = threading.Thread(target=self.run, args=(on_result,), daemon=True)
        thread.start()
        return thread


def local_remaining_seconds(snapshot: ProgressResult, now: datetime) -> int:
    """
    Countdown a view can tick between polls. Never negative; 0 once reached.
    """
    if isinstance(snapshot, NoProgress) or snapshot.reached:
        return 0

    return max(0, int((snapshot.eta - now).total_seconds()))
