"""Rule submission gateway backed by the ONOS REST API.

Posts assembled rules to ``{base_url}/flows?appId=<app>``. The controller
answers synchronously; device programming continues asynchronously.

API Reference:
    https://wiki.onosproject.org/display/ONOS/Flow+Rules
"""

import logging
from collections.abc import Sequence
from types import TracebackType
from typing import Any, Final

import httpx

from pirule.common.config import PiruleConfig, get_config
from pirule.common.resilience import resilient_external_call
from pirule.core.ports.rule_submission import SubmissionOutcome
from pirule.errors import GatewayUnavailableError
from pirule.gateways.codec import flows_payload
from pirule.schemas.rule import FlowRule

logger = logging.getLogger(__name__)

FLOWS_PATH: Final[str] = "/flows"


def _error_message(response: httpx.Response) -> str:
    try:
        body: Any = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return f"HTTP {response.status_code}: {body['message']}"
    text = response.text.strip()
    return f"HTTP {response.status_code}: {text}" if text else f"HTTP {response.status_code}"


class OnosRestGateway:
    """ONOS flow rule service reached over HTTP.

    Transport failures and 5xx answers raise GatewayUnavailableError and are
    retried up to ``max_attempts`` times in total; 4xx answers are returned as
    rejections and never retried.

    Example:
        >>> with OnosRestGateway.from_config() as gateway:
        ...     outcome = gateway.submit([rule])
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: float = 10.0,
        max_attempts: int = 1,
        min_wait: int = 1,
        max_wait: int = 10,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            base_url: ONOS REST root, e.g. ``http://localhost:8181/onos/v1``.
            username: REST user.
            password: REST password.
            timeout: HTTP timeout in seconds.
            max_attempts: Total attempts per request (1 disables retries).
            min_wait: Minimum backoff in seconds.
            max_wait: Maximum backoff in seconds.
            client: Preconfigured httpx client (mainly for tests).
        """
        if not base_url:
            raise ValueError("base_url cannot be empty")

        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=self.base_url,
            auth=(username, password),
            timeout=timeout,
        )
        self._post = resilient_external_call(
            max_attempts=max_attempts,
            min_wait=min_wait,
            max_wait=max_wait,
            retry_on=(GatewayUnavailableError,),
        )(self._post_once)

        logger.info(
            f"Initialized OnosRestGateway (base_url={self.base_url}, attempts={max_attempts})"
        )

    @classmethod
    def from_config(cls, config: PiruleConfig | None = None) -> "OnosRestGateway":
        config = config or get_config()
        return cls(
            base_url=config.onos_url,
            username=config.onos_user,
            password=config.onos_password.get_secret_value(),
            timeout=config.onos_timeout,
            max_attempts=config.submit_max_attempts,
            min_wait=config.submit_min_wait,
            max_wait=config.submit_max_wait,
        )

    def _post_once(self, app_id: str, payload: dict[str, Any]) -> httpx.Response:
        try:
            response = self._client.post(FLOWS_PATH, params={"appId": app_id}, json=payload)
        except httpx.TransportError as e:
            raise GatewayUnavailableError(f"ONOS unreachable at {self.base_url}: {e}") from e

        if response.status_code >= 500:
            raise GatewayUnavailableError(f"ONOS server error: {_error_message(response)}")
        return response

    def submit(self, rules: Sequence[FlowRule]) -> SubmissionOutcome:
        """Post rules grouped by owning application.

        Raises:
            GatewayUnavailableError: If ONOS stays unreachable after all attempts.
        """
        by_app: dict[str, list[FlowRule]] = {}
        for rule in rules:
            by_app.setdefault(rule.app_id, []).append(rule)

        for app_id, app_rules in by_app.items():
            response = self._post(app_id, flows_payload(app_rules))
            if response.is_success:
                logger.debug("ONOS accepted %s flow rules for %s", len(app_rules), app_id)
                continue
            reason = _error_message(response)
            logger.warning("ONOS rejected flow rules for %s: %s", app_id, reason)
            return SubmissionOutcome.reject(reason)

        return SubmissionOutcome.accept()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "OnosRestGateway":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["OnosRestGateway"]
