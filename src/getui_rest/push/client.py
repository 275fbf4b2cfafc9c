"""Push – GetuiClient, an authenticated session against the Getui REST API.

Token lifecycle::

    UNSIGNED --auth_sign--> SIGNED --(every 23h59m)--> SIGNED
                              \\--auth_close--> CLOSED (token cleared)

A scheduled refresh that fails keeps the previous token and is retried every
30 seconds until signing succeeds, then the 23h59m cadence resumes.

Only :meth:`GetuiClient.auth_sign` and :meth:`GetuiClient.auth_close` write
the token. A request racing a refresh may carry either the old or the new
token; both are valid at that moment.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Sequence

from getui_rest.adapters.http import HttpxHttpClient
from getui_rest.application.scheduler import APSchedulerAdapter, Job, Scheduler
from getui_rest.config.settings import DEFAULT_BASE_URL, GetuiSettings
from getui_rest.kernel.errors import BaseError, GetuiError, ValidationError
from getui_rest.kernel.security import sign_credentials
from getui_rest.kernel.serialization import remove_none
from getui_rest.kernel.time import Clock, SystemClock, epoch_millis
from getui_rest.kernel.types import new_request_id
from getui_rest.observability.logging import get_logger
from getui_rest.push.message import (
    AppMessage,
    BatchTask,
    Condition,
    ListMessage,
    Message,
    SingleMessage,
    TagMessage,
    Target,
    TargetList,
)

__all__ = ["GetuiClient", "TOKEN_REFRESH_INTERVAL", "TOKEN_REFRESH_RETRY_INTERVAL"]

logger = get_logger(__name__)

# Tokens live 24h; renew one minute early.
TOKEN_REFRESH_INTERVAL = timedelta(hours=23, minutes=59)
TOKEN_REFRESH_RETRY_INTERVAL = timedelta(seconds=30)
USER_AGENT = "getui-rest-python"
RESULT_OK = "ok"


def _format_date(value: date | str) -> str:
    if isinstance(value, date):
        return value.strftime("%Y%m%d")
    return value


class GetuiClient:
    """One app's session with the provider.

    Usage::

        async with GetuiClient.from_settings(settings) as client:
            await client.auth_sign()
            await client.push_message_to_single(message, Target(cid=cid))
            await client.auth_close()

    Every endpoint returns the provider's decoded response. A response whose
    ``result`` is not ``"ok"`` raises :class:`GetuiError`; transport failures
    raise :class:`~getui_rest.kernel.errors.InfrastructureError` subclasses.
    Nothing is retried.
    """

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        app_key: str,
        master_secret: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        scheduler: Scheduler | None = None,
        clock: Clock | None = None,
        http_client: HttpxHttpClient | None = None,
    ) -> None:
        self._app_id = app_id
        self._app_secret = app_secret
        self._app_key = app_key
        self._master_secret = master_secret
        self._base_url = f"{base_url.rstrip('/')}/{app_id}"
        self._owns_http = http_client is None
        self._http = http_client or HttpxHttpClient(base_url=self._base_url, timeout=timeout)
        self._owns_scheduler = scheduler is None
        self._scheduler: Scheduler = scheduler or APSchedulerAdapter()
        self._scheduler_started = False
        self._clock: Clock = clock or SystemClock()
        self._auth_token: str | None = None
        self._log = logger.bind(app_id=app_id)

    @classmethod
    def from_settings(cls, settings: GetuiSettings, **kwargs: Any) -> "GetuiClient":
        return cls(
            settings.app_id,
            settings.app_secret,
            settings.app_key,
            settings.master_secret,
            base_url=settings.base_url,
            timeout=settings.timeout,
            **kwargs,
        )

    async def __aenter__(self) -> "GetuiClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Stop token renewal and release the HTTP transport. Does not call ``/auth_close``."""
        self._scheduler.remove_job(self.refresh_job_id)
        if self._owns_scheduler:
            await self._scheduler.stop()
        if self._owns_http:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Session state
    # ------------------------------------------------------------------

    @property
    def app_id(self) -> str:
        return self._app_id

    @property
    def app_key(self) -> str:
        return self._app_key

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def auth_token(self) -> str | None:
        return self._auth_token

    @property
    def is_signed(self) -> bool:
        return self._auth_token is not None

    @property
    def refresh_job_id(self) -> str:
        return f"getui-auth-refresh:{self._app_id}"

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        headers = {"User-Agent": USER_AGENT}
        token = self._auth_token
        if token:
            headers["authtoken"] = token
        kwargs: dict[str, Any] = {"headers": headers}
        if body is not None:
            body = remove_none(body)
            kwargs["json"] = body

        self._log.debug(
            "getui.request",
            method=method,
            path=path,
            request_id=body.get("requestid") if body else None,
        )
        response = await self._http.request(method, path, **kwargs)
        result = response.get("result")
        if result != RESULT_OK:
            self._log.warning("getui.request.rejected", method=method, path=path, result=result)
            raise GetuiError(str(result), response, path=path)
        return response

    def _push_body(self, message: Message) -> dict[str, Any]:
        """``message`` (with the app key), ``<msgtype>: template`` and ``push_info``."""
        template = message.serialize_template()
        if template is None or message.msg_type is None:
            raise ValidationError(
                f"{type(message).__name__} has no template",
                errors=[{"field": "template", "error": "required"}],
            )
        core = message.serialize_core()
        core["appkey"] = self._app_key
        return {
            "message": core,
            message.msg_type: template,
            "push_info": message.serialize_push_info(),
        }

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    async def auth_sign(self) -> dict[str, Any]:
        """Obtain an auth token and schedule its renewal 23h59m from now."""
        timestamp = epoch_millis(self._clock)
        sign = sign_credentials(self._app_key, timestamp, self._master_secret)
        response = await self._request(
            "POST",
            "/auth_sign",
            {"sign": sign, "timestamp": timestamp, "appkey": self._app_key},
        )
        self._auth_token = response.get("auth_token")
        self._log.info("getui.auth.signed", expire_time=response.get("expire_time"))
        await self._schedule_refresh()
        return response

    async def _schedule_refresh(self, delay: timedelta = TOKEN_REFRESH_INTERVAL) -> None:
        self._scheduler.add_job(Job(
            id=self.refresh_job_id,
            name="getui auth token refresh",
            handler=self._refresh_token,
            interval_seconds=delay.total_seconds(),
        ))
        if not self._scheduler_started:
            await self._scheduler.start()
            self._scheduler_started = True
        self._log.debug("getui.auth.refresh_scheduled", delay_seconds=delay.total_seconds())

    async def _refresh_token(self) -> None:
        try:
            await self.auth_sign()
        except BaseError as exc:
            # keep retrying on a short interval until signing succeeds
            await self._schedule_refresh(TOKEN_REFRESH_RETRY_INTERVAL)
            self._log.warning(
                "getui.auth.refresh_failed",
                error=exc.code,
                retry_in_seconds=TOKEN_REFRESH_RETRY_INTERVAL.total_seconds(),
            )
            raise

    async def auth_close(self) -> dict[str, Any]:
        """Invalidate the token on the provider side, then forget it.

        If the call fails the token is kept (it may still be valid) and the
        error is re-raised.
        """
        try:
            response = await self._request("POST", "/auth_close", {})
        except BaseError as exc:
            self._log.warning("getui.auth.close_failed", error=exc.code)
            raise
        self._auth_token = None
        self._scheduler.remove_job(self.refresh_job_id)
        self._log.info("getui.auth.closed")
        return response

    # ------------------------------------------------------------------
    # Push
    # ------------------------------------------------------------------

    def _single_body(self, message: SingleMessage, target: Target) -> dict[str, Any]:
        body = self._push_body(message)
        body.update({
            "cid": target.cid,
            "alias": target.alias,
            "requestid": new_request_id(),
        })
        return body

    async def push_message_to_single(self, message: SingleMessage, target: Target) -> dict[str, Any]:
        """Push to one device, e.g. a transaction alert for one user."""
        return await self._request("POST", "/push_single", self._single_body(message, target))

    async def push_message_to_single_batch(
        self,
        batches: Sequence[BatchTask],
        need_detail: bool = True,
    ) -> dict[str, Any]:
        """Several single pushes, each with its own content, in one call."""
        msg_list = [self._single_body(batch.message, batch.target) for batch in batches]
        return await self._request(
            "POST",
            "/push_single_batch",
            {"msg_list": msg_list, "need_detail": need_detail},
        )

    async def push_message_to_app(
        self,
        message: AppMessage,
        task_name: str | None = None,
        speed: int = 0,
    ) -> dict[str, Any]:
        """Broadcast to the app's users matching ``message.conditions``."""
        body = self._push_body(message)
        body.update({
            "condition": message.serialize_conditions(),
            "requestid": new_request_id(),
            "speed": speed,
            "task_name": task_name,
        })
        return await self._request("POST", "/push_app", body)

    async def push_message_by_tag(
        self,
        message: TagMessage,
        task_name: str | None = None,
        speed: int = 0,
    ) -> dict[str, Any]:
        """Broadcast to the users carrying ``message.tag``."""
        body = self._push_body(message)
        body.update({
            "tag": message.tag,
            "requestid": new_request_id(),
            "speed": speed,
            "task_name": task_name,
        })
        return await self._request("POST", "/push_by_tag", body)

    async def save_list_body(self, message: ListMessage, task_name: str | None = None) -> dict[str, Any]:
        """Store a list message on the provider; the response carries its ``taskid``."""
        body = self._push_body(message)
        body["task_name"] = task_name
        return await self._request("POST", "/save_list_body", body)

    async def push_message_to_list(
        self,
        message: ListMessage,
        target_list: TargetList,
        task_name: str | None = None,
        need_detail: bool = True,
    ) -> dict[str, Any]:
        """Save ``message`` then push it to every cid / alias of ``target_list``.

        For one recipient use :meth:`push_message_to_single`. If saving fails
        its error propagates and ``/push_list`` is not called.
        """
        saved = await self.save_list_body(message, task_name)
        return await self._request(
            "POST",
            "/push_list",
            {
                "taskid": saved.get("taskid"),
                "cid": target_list.cid,
                "alias": target_list.alias,
                "need_detail": need_detail,
            },
        )

    async def stop_task(self, task_id: str) -> dict[str, Any]:
        """Stop delivery of a task that is still within its validity window."""
        return await self._request("DELETE", f"/stop_task/{task_id}")

    # ------------------------------------------------------------------
    # Aliases
    # ------------------------------------------------------------------

    async def bind_alias(self, alias: str, cids: Sequence[str]) -> dict[str, Any]:
        alias_list = [{"cid": cid, "alias": alias} for cid in cids]
        return await self._request("POST", "/bind_alias", {"alias_list": alias_list})

    async def query_alias(self, cid: str) -> dict[str, Any]:
        return await self._request("GET", f"/query_alias/{cid}")

    async def query_cid(self, alias: str) -> dict[str, Any]:
        return await self._request("GET", f"/query_cid/{alias}")

    async def unbind_alias(self, alias: str, cids: Sequence[str]) -> dict[str, Any]:
        return await self._request(
            "POST", "/unbind_alias", {"cid_list": list(cids), "alias": alias}
        )

    async def unbind_alias_all(self, alias: str) -> dict[str, Any]:
        return await self._request("POST", "/unbind_alias_all", {"alias": alias})

    # ------------------------------------------------------------------
    # Tags, blacklist, badge
    # ------------------------------------------------------------------

    async def set_tags(self, cid: str, tags: Sequence[str]) -> dict[str, Any]:
        return await self._request("POST", "/set_tags", {"cid": cid, "tag_list": list(tags)})

    async def get_tags(self, cid: str) -> dict[str, Any]:
        return await self._request("GET", f"/get_tags/{cid}")

    async def get_available_tags(self) -> dict[str, Any]:
        return await self._request("GET", "/get_bi_tags")

    async def add_user_blacklist(self, cids: Sequence[str]) -> dict[str, Any]:
        return await self._request("POST", "/user_blk_list", {"cid": list(cids)})

    async def remove_user_blacklist(self, cids: Sequence[str]) -> dict[str, Any]:
        return await self._request("DELETE", "/user_blk_list", {"cid": list(cids)})

    async def get_user_status(self, cid: str) -> dict[str, Any]:
        return await self._request("GET", f"/user_status/{cid}")

    async def set_badge(
        self,
        badge: str,
        cids: Sequence[str] | None = None,
        device_tokens: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """Set the iOS badge; ``badge`` accepts the same expressions as ``ApnsInfo.auto_badge``."""
        return await self._request(
            "POST",
            "/set_badge",
            {
                "badge": badge,
                "cid_list": list(cids) if cids is not None else None,
                "devicetoken_list": list(device_tokens) if device_tokens is not None else None,
            },
        )

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    async def query_app_user(self, day: date | str) -> dict[str, Any]:
        """User statistics (new, total, online) for one day."""
        return await self._request("GET", f"/query_app_user/{_format_date(day)}")

    async def query_app_push(self, day: date | str) -> dict[str, Any]:
        """Push statistics (sent, received, shown, clicked) for one day."""
        return await self._request("GET", f"/query_app_push/{_format_date(day)}")

    async def get_push_result(self, task_ids: Sequence[str]) -> dict[str, Any]:
        return await self._request("POST", "/push_result", {"taskIdList": list(task_ids)})

    async def query_user_count(self, conditions: Sequence[Condition]) -> dict[str, Any]:
        """Number of users an app push with ``conditions`` would reach."""
        return await self._request(
            "POST", "/query_user_count", {"condition": [c.to_dict() for c in conditions]}
        )

    async def get_feedback_users(self, task_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/get_feedback_users/{task_id}")
