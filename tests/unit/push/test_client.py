"""Unit tests – GetuiClient request dispatch and endpoints."""
from __future__ import annotations

import asyncio
import json
from datetime import UTC, date, datetime
from typing import Any

import httpx
import pytest
import respx

from getui_rest.application.scheduler import InMemoryScheduler
from getui_rest.config import GetuiSettings
from getui_rest.kernel.errors import (
    ExternalServiceError,
    GetuiError,
    InfrastructureError,
    SerializationError,
    TimeoutError as AppTimeoutError,
    ValidationError,
)
from getui_rest.kernel.time import FrozenClock
from getui_rest.push import (
    Alert,
    ApnsInfo,
    AppMessage,
    BatchTask,
    CondOptType,
    Condition,
    ConditionKey,
    GetuiClient,
    ListMessage,
    NotificationTemplate,
    SingleMessage,
    SystemStyle,
    TagMessage,
    Target,
    TargetList,
    TransmissionTemplate,
)

APP_ID = "test-app-id"
BASE = f"https://restapi.getui.com/v1/{APP_ID}"
OK = {"result": "ok"}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _client(**kwargs: Any) -> GetuiClient:
    kwargs.setdefault("scheduler", InMemoryScheduler())
    kwargs.setdefault("clock", FrozenClock(datetime(2026, 1, 1, 12, 0, tzinfo=UTC)))
    return GetuiClient(APP_ID, "test-app-secret", "test-app-key", "test-master-secret", **kwargs)


def _body(route: respx.Route) -> dict[str, Any]:
    return json.loads(route.calls.last.request.content)


def _transmission_message(cls: type = SingleMessage, **kwargs: Any) -> Any:
    return cls(
        TransmissionTemplate(transmission_content={"message": "hi"}),
        ApnsInfo(alert=Alert(title="T", body="B")),
        **kwargs,
    )


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_base_url_scoped_by_app_id(self) -> None:
        client = _client()
        assert client.base_url == BASE
        assert client.app_id == APP_ID
        assert client.auth_token is None
        assert client.is_signed is False

    def test_from_settings(self) -> None:
        settings = GetuiSettings(
            app_id="id",
            app_secret="secret",
            app_key="key",
            master_secret="master",
            base_url="https://example.test/v1/",
        )
        client = GetuiClient.from_settings(settings, scheduler=InMemoryScheduler())
        assert client.base_url == "https://example.test/v1/id"
        assert client.app_key == "key"


# ---------------------------------------------------------------------------
# Response contract
# ---------------------------------------------------------------------------

class TestResponseContract:
    @respx.mock
    def test_ok_response_returned_with_all_fields(self) -> None:
        respx.get(f"{BASE}/query_alias/cid-1").mock(
            return_value=httpx.Response(200, json={"result": "ok", "alias": "user-1"})
        )

        async def run() -> None:
            async with _client() as client:
                ret = await client.query_alias("cid-1")
            assert ret == {"result": "ok", "alias": "user-1"}

        asyncio.run(run())

    @respx.mock
    def test_provider_failure_raises_getui_error(self) -> None:
        respx.post(f"{BASE}/push_single").mock(
            return_value=httpx.Response(200, json={"result": "fail", "code": 123})
        )

        async def run() -> None:
            async with _client() as client:
                with pytest.raises(GetuiError) as exc_info:
                    await client.push_message_to_single(_transmission_message(), Target(cid="abc"))
            err = exc_info.value
            assert err.detail["code"] == 123
            assert err.detail["result"] == "fail"
            assert err.result == "fail"
            assert err.path == "/push_single"
            assert err.to_dict()["code"] == "getui_error"

        asyncio.run(run())

    @respx.mock
    def test_missing_result_is_a_failure(self) -> None:
        respx.get(f"{BASE}/get_tags/cid-1").mock(return_value=httpx.Response(200, json={"tags": []}))

        async def run() -> None:
            async with _client() as client:
                with pytest.raises(GetuiError):
                    await client.get_tags("cid-1")

        asyncio.run(run())

    @respx.mock
    def test_non_2xx_raises_external_service_error(self) -> None:
        respx.get(f"{BASE}/get_tags/cid-1").mock(return_value=httpx.Response(503))

        async def run() -> None:
            async with _client() as client:
                with pytest.raises(ExternalServiceError) as exc_info:
                    await client.get_tags("cid-1")
            assert exc_info.value.status_code == 503
            assert not isinstance(exc_info.value, GetuiError)

        asyncio.run(run())

    @respx.mock
    def test_malformed_json_raises_serialization_error(self) -> None:
        respx.get(f"{BASE}/get_tags/cid-1").mock(
            return_value=httpx.Response(200, content=b"<html>oops</html>")
        )

        async def run() -> None:
            async with _client() as client:
                with pytest.raises(SerializationError):
                    await client.get_tags("cid-1")

        asyncio.run(run())

    @respx.mock
    def test_timeout_raises_timeout_error(self) -> None:
        respx.get(f"{BASE}/get_tags/cid-1").mock(side_effect=httpx.ConnectTimeout("slow"))

        async def run() -> None:
            async with _client() as client:
                with pytest.raises(AppTimeoutError) as exc_info:
                    await client.get_tags("cid-1")
            assert isinstance(exc_info.value, InfrastructureError)

        asyncio.run(run())

    @respx.mock
    def test_transport_failure_not_retried(self) -> None:
        route = respx.get(f"{BASE}/get_tags/cid-1").mock(
            side_effect=httpx.ConnectError("refused")
        )

        async def run() -> None:
            async with _client() as client:
                with pytest.raises(ExternalServiceError):
                    await client.get_tags("cid-1")
            assert route.call_count == 1

        asyncio.run(run())

    @respx.mock
    def test_user_agent_and_no_token_header_when_unsigned(self) -> None:
        route = respx.get(f"{BASE}/get_tags/cid-1").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.get_tags("cid-1")
            sent = route.calls.last.request
            assert sent.headers["user-agent"] == "getui-rest-python"
            assert "authtoken" not in sent.headers

        asyncio.run(run())


# ---------------------------------------------------------------------------
# Push endpoints
# ---------------------------------------------------------------------------

class TestPushSingle:
    @respx.mock
    def test_end_to_end_body(self) -> None:
        route = respx.post(f"{BASE}/push_single").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.push_message_to_single(_transmission_message(), Target(cid="abc"))
            body = _body(route)
            assert body["message"] == {
                "is_offline": True,
                "offline_expire_time": 60000,
                "push_network_type": 0,
                "msgtype": "transmission",
                "appkey": "test-app-key",
            }
            assert body["transmission"]["transmission_content"] == '{"message":"hi"}'
            assert body["transmission"]["transmission_type"] is False
            assert body["push_info"]["aps"]["alert"]["title"] == "T"
            assert body["push_info"]["aps"]["alert"]["body"] == "B"
            assert body["cid"] == "abc"
            assert "alias" not in body
            assert len(body["requestid"]) == 30

        asyncio.run(run())

    @respx.mock
    def test_alias_target_and_no_push_info(self) -> None:
        route = respx.post(f"{BASE}/push_single").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            message = SingleMessage(NotificationTemplate(style=SystemStyle(title="Hi", text="There")))
            async with _client() as client:
                await client.push_message_to_single(message, Target(alias="user-1"))
            body = _body(route)
            assert body["alias"] == "user-1"
            assert "cid" not in body
            assert "push_info" not in body
            assert body["notification"]["style"]["type"] == 0
            assert body["message"]["msgtype"] == "notification"

        asyncio.run(run())

    def test_message_without_template_rejected_before_sending(self) -> None:
        async def run() -> None:
            with respx.mock(assert_all_called=False) as router:
                route = router.post(f"{BASE}/push_single").mock(
                    return_value=httpx.Response(200, json=OK)
                )
                async with _client() as client:
                    with pytest.raises(ValidationError):
                        await client.push_message_to_single(SingleMessage(), Target(cid="abc"))
            assert not route.called

        asyncio.run(run())

    @respx.mock
    def test_request_ids_are_fresh(self) -> None:
        route = respx.post(f"{BASE}/push_single").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.push_message_to_single(_transmission_message(), Target(cid="a"))
                await client.push_message_to_single(_transmission_message(), Target(cid="a"))
            ids = [json.loads(call.request.content)["requestid"] for call in route.calls]
            assert ids[0] != ids[1]

        asyncio.run(run())


class TestPushSingleBatch:
    @respx.mock
    def test_msg_list(self) -> None:
        route = respx.post(f"{BASE}/push_single_batch").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            batches = [
                BatchTask(_transmission_message(), Target(cid="c1")),
                BatchTask(_transmission_message(), Target(alias="a2")),
            ]
            async with _client() as client:
                await client.push_message_to_single_batch(batches)
            body = _body(route)
            assert body["need_detail"] is True
            assert [m.get("cid") for m in body["msg_list"]] == ["c1", None]
            assert body["msg_list"][1]["alias"] == "a2"
            for item in body["msg_list"]:
                assert item["message"]["appkey"] == "test-app-key"
                assert len(item["requestid"]) == 30
                assert "transmission" in item

        asyncio.run(run())


class TestPushApp:
    @respx.mock
    def test_conditions_and_defaults(self) -> None:
        route = respx.post(f"{BASE}/push_app").mock(
            return_value=httpx.Response(200, json={"result": "ok", "taskid": "task-1"})
        )

        async def run() -> None:
            message = _transmission_message(
                AppMessage,
                conditions=[Condition(ConditionKey.TAG, ["vip"], CondOptType.OR)],
            )
            async with _client() as client:
                ret = await client.push_message_to_app(message)
            assert ret["taskid"] == "task-1"
            body = _body(route)
            assert body["condition"] == [{"key": "tag", "values": ["vip"], "opt_type": 0}]
            assert body["speed"] == 0
            assert "task_name" not in body
            assert body["message"]["appkey"] == "test-app-key"

        asyncio.run(run())

    @respx.mock
    def test_task_name_and_speed(self) -> None:
        route = respx.post(f"{BASE}/push_app").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.push_message_to_app(_transmission_message(AppMessage), "anniversary", 100)
            body = _body(route)
            assert body["task_name"] == "anniversary"
            assert body["speed"] == 100

        asyncio.run(run())


class TestPushByTag:
    @respx.mock
    def test_tag_body(self) -> None:
        route = respx.post(f"{BASE}/push_by_tag").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.push_message_by_tag(_transmission_message(TagMessage, tag="beta"))
            body = _body(route)
            assert body["tag"] == "beta"
            assert body["message"]["msgtype"] == "transmission"
            assert len(body["requestid"]) == 30

        asyncio.run(run())


class TestPushList:
    @respx.mock
    def test_two_phase_push(self) -> None:
        save = respx.post(f"{BASE}/save_list_body").mock(
            return_value=httpx.Response(200, json={"result": "ok", "taskid": "task-42"})
        )
        push = respx.post(f"{BASE}/push_list").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.push_message_to_list(
                    _transmission_message(ListMessage), TargetList(cid=["c1", "c2"]), "promo"
                )
            saved = _body(save)
            assert saved["task_name"] == "promo"
            assert saved["message"]["appkey"] == "test-app-key"
            assert "requestid" not in saved
            assert _body(push) == {"taskid": "task-42", "cid": ["c1", "c2"], "need_detail": True}

        asyncio.run(run())

    def test_save_failure_aborts_push(self) -> None:
        async def run() -> None:
            with respx.mock(assert_all_called=False) as router:
                router.post(f"{BASE}/save_list_body").mock(
                    return_value=httpx.Response(200, json={"result": "sign_error"})
                )
                push = router.post(f"{BASE}/push_list").mock(
                    return_value=httpx.Response(200, json=OK)
                )
                async with _client() as client:
                    with pytest.raises(GetuiError) as exc_info:
                        await client.push_message_to_list(
                            _transmission_message(ListMessage), TargetList(alias=["u1"])
                        )
            assert exc_info.value.path == "/save_list_body"
            assert not push.called

        asyncio.run(run())

    def test_save_transport_failure_aborts_push(self) -> None:
        async def run() -> None:
            with respx.mock(assert_all_called=False) as router:
                router.post(f"{BASE}/save_list_body").mock(return_value=httpx.Response(500))
                push = router.post(f"{BASE}/push_list").mock(
                    return_value=httpx.Response(200, json=OK)
                )
                async with _client() as client:
                    with pytest.raises(ExternalServiceError):
                        await client.push_message_to_list(
                            _transmission_message(ListMessage), TargetList(cid=["c1"])
                        )
            assert push.call_count == 0

        asyncio.run(run())


class TestStopTask:
    @respx.mock
    def test_delete(self) -> None:
        route = respx.delete(f"{BASE}/stop_task/task-1").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.stop_task("task-1")
            assert route.calls.last.request.method == "DELETE"
            assert route.calls.last.request.content == b""

        asyncio.run(run())


# ---------------------------------------------------------------------------
# Alias / tag / blacklist / badge / statistics endpoints
# ---------------------------------------------------------------------------

class TestAccountEndpoints:
    @respx.mock
    def test_bind_alias(self) -> None:
        route = respx.post(f"{BASE}/bind_alias").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.bind_alias("user-1", ["c1", "c2"])
            assert _body(route) == {
                "alias_list": [{"cid": "c1", "alias": "user-1"}, {"cid": "c2", "alias": "user-1"}]
            }

        asyncio.run(run())

    @respx.mock
    def test_query_cid(self) -> None:
        respx.get(f"{BASE}/query_cid/user-1").mock(
            return_value=httpx.Response(200, json={"result": "ok", "cid": ["c1"]})
        )

        async def run() -> None:
            async with _client() as client:
                ret = await client.query_cid("user-1")
            assert ret["cid"] == ["c1"]

        asyncio.run(run())

    @respx.mock
    def test_unbind_alias(self) -> None:
        route = respx.post(f"{BASE}/unbind_alias").mock(return_value=httpx.Response(200, json=OK))
        route_all = respx.post(f"{BASE}/unbind_alias_all").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.unbind_alias("user-1", ("c1",))
                await client.unbind_alias_all("user-1")
            assert _body(route) == {"cid_list": ["c1"], "alias": "user-1"}
            assert _body(route_all) == {"alias": "user-1"}

        asyncio.run(run())

    @respx.mock
    def test_set_tags(self) -> None:
        route = respx.post(f"{BASE}/set_tags").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.set_tags("c1", ["vip", "beta"])
            assert _body(route) == {"cid": "c1", "tag_list": ["vip", "beta"]}

        asyncio.run(run())

    @respx.mock
    def test_available_tags(self) -> None:
        respx.get(f"{BASE}/get_bi_tags").mock(
            return_value=httpx.Response(200, json={"result": "ok", "tags": ["vip"]})
        )

        async def run() -> None:
            async with _client() as client:
                ret = await client.get_available_tags()
            assert ret["tags"] == ["vip"]

        asyncio.run(run())

    @respx.mock
    def test_blacklist_add_and_remove(self) -> None:
        add = respx.post(f"{BASE}/user_blk_list").mock(return_value=httpx.Response(200, json=OK))
        remove = respx.delete(f"{BASE}/user_blk_list").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.add_user_blacklist(["c1"])
                await client.remove_user_blacklist(["c1", "c2"])
            assert _body(add) == {"cid": ["c1"]}
            assert _body(remove) == {"cid": ["c1", "c2"]}

        asyncio.run(run())

    @respx.mock
    def test_user_status(self) -> None:
        respx.get(f"{BASE}/user_status/c1").mock(
            return_value=httpx.Response(200, json={"result": "ok", "status": "online"})
        )

        async def run() -> None:
            async with _client() as client:
                ret = await client.get_user_status("c1")
            assert ret["status"] == "online"

        asyncio.run(run())

    @respx.mock
    def test_set_badge_omits_absent_lists(self) -> None:
        route = respx.post(f"{BASE}/set_badge").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.set_badge("+1", cids=["c1"])
            assert _body(route) == {"badge": "+1", "cid_list": ["c1"]}

        asyncio.run(run())

    @respx.mock
    def test_statistics_dates(self) -> None:
        users = respx.get(f"{BASE}/query_app_user/20260102").mock(return_value=httpx.Response(200, json=OK))
        pushes = respx.get(f"{BASE}/query_app_push/20260103").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.query_app_user(date(2026, 1, 2))
                await client.query_app_push("20260103")
            assert users.called
            assert pushes.called

        asyncio.run(run())

    @respx.mock
    def test_push_result(self) -> None:
        route = respx.post(f"{BASE}/push_result").mock(return_value=httpx.Response(200, json=OK))

        async def run() -> None:
            async with _client() as client:
                await client.get_push_result(["t1", "t2"])
            assert _body(route) == {"taskIdList": ["t1", "t2"]}

        asyncio.run(run())

    @respx.mock
    def test_query_user_count(self) -> None:
        route = respx.post(f"{BASE}/query_user_count").mock(
            return_value=httpx.Response(200, json={"result": "ok", "user_count": 7})
        )

        async def run() -> None:
            async with _client() as client:
                ret = await client.query_user_count([Condition(ConditionKey.TAG, ["vip"])])
            assert ret["user_count"] == 7
            assert _body(route) == {"condition": [{"key": "tag", "values": ["vip"], "opt_type": 0}]}

        asyncio.run(run())

    @respx.mock
    def test_feedback_users(self) -> None:
        route = respx.get(f"{BASE}/get_feedback_users/task-1").mock(
            return_value=httpx.Response(200, json=OK)
        )

        async def run() -> None:
            async with _client() as client:
                await client.get_feedback_users("task-1")
            assert route.called

        asyncio.run(run())
