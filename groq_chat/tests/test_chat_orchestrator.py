"""测试对话编排器。"""

import httpx
import pytest

from groq_chat.agents.chat_orchestrator import ChatOrchestrator, OrchestratorConfig
from groq_chat.agents.completion_client import CompletionClient
from groq_chat.domain.exceptions import NetworkError
from groq_chat.domain.models import ChatChoice, ChatMessage, ChatResult
from groq_chat.prompts import LANGUAGE_SYSTEM_PROMPTS
from groq_chat.providers.groq_client import GroqClient


class FakeProvider:
    """模拟的 Provider，记录请求并可在调用时检查编排器状态。"""

    name = "fake"

    def __init__(self, reply="这是测试回复", error=None, on_call=None):
        self.requests = []
        self._reply = reply
        self._error = error
        self._on_call = on_call

    def chat(self, req):
        self.requests.append(req)
        if self._on_call:
            self._on_call(req)
        if self._error:
            raise self._error
        msg = ChatMessage(role="assistant", content=self._reply)
        return ChatResult(model=req.model, choices=[ChatChoice(index=0, message=msg)], usage=None, raw={})

    def list_models(self):
        return []


def make_orchestrator(provider, **config):
    return ChatOrchestrator(CompletionClient(provider), config=OrchestratorConfig(**config))


def test_send_text_appends_user_message_before_call():
    seen = {}
    orch = None

    def on_call(req):
        seen["messages"] = orch.messages
        seen["loading"] = orch.is_loading

    provider = FakeProvider(on_call=on_call)
    orch = make_orchestrator(provider)
    assert orch.send_text("  hello  ") is True

    assert seen["messages"] == (ChatMessage(role="user", content="  hello  "),)
    assert seen["loading"] is True
    assert orch.is_loading is False
    assert orch.messages[-1] == ChatMessage(role="assistant", content="这是测试回复")


def test_blank_inputs_are_noops():
    provider = FakeProvider()
    orch = make_orchestrator(provider)
    for blank in ["", "   ", "\n\t"]:
        assert orch.send_text(blank) is False
        assert orch.send_audio_transcript(blank) is False
    assert orch.messages == ()
    assert orch.is_loading is False
    assert provider.requests == []


def test_clear_is_idempotent():
    orch = make_orchestrator(FakeProvider(error=NetworkError(code="NETWORK_ERROR", message="down")), language="fr")
    orch.send_text("hi")
    assert orch.error == "down"
    for _ in range(3):
        orch.clear()
        assert orch.messages == ()
        assert orch.error is None
    assert orch.language == "fr"


def test_transport_failure_keeps_user_message():
    orch = make_orchestrator(FakeProvider(error=NetworkError(code="NETWORK_ERROR", message="connection reset")))
    assert orch.send_text("hello") is False
    assert orch.messages == (ChatMessage(role="user", content="hello"),)
    assert orch.error == "connection reset"
    assert orch.is_loading is False


def test_error_without_message_uses_intent_fallback():
    orch = make_orchestrator(FakeProvider(error=NetworkError(code="NETWORK_ERROR", message="")))
    orch.send_audio_transcript("hola")
    assert orch.error == "Failed to process audio"


def test_new_send_clears_previous_error():
    provider = FakeProvider(error=NetworkError(code="NETWORK_ERROR", message="down"))
    orch = make_orchestrator(provider)
    orch.send_text("first")
    provider._error = None
    assert orch.send_text("second") is True
    assert orch.error is None
    assert [m.content for m in orch.messages] == ["first", "second", "这是测试回复"]


def test_scenario_hello_round_trip():
    provider = FakeProvider(reply="Hi there")
    orch = make_orchestrator(provider, model="mixtral-8x7b-32768", language="en")
    orch.send_text("Hello")

    req = provider.requests[0]
    assert req.model == "mixtral-8x7b-32768"
    assert req.messages == [
        ChatMessage(role="system", content=LANGUAGE_SYSTEM_PROMPTS["en"]),
        ChatMessage(role="user", content="Hello"),
    ]
    assert orch.messages == (
        ChatMessage(role="user", content="Hello"),
        ChatMessage(role="assistant", content="Hi there"),
    )


def test_image_caption_never_sends_raw_bytes():
    provider = FakeProvider()
    orch = make_orchestrator(provider)
    raw = b"\x89PNG-raw-image-bytes"
    orch.send_image_caption(raw, "a cat")

    assert orch.messages[0] == ChatMessage(role="user", content="[Image with description]: a cat")
    sent = " ".join(m.content for m in provider.requests[0].messages)
    assert "PNG-raw-image-bytes" not in sent


def test_image_without_description():
    orch = make_orchestrator(FakeProvider())
    orch.send_image_caption("data:image/png;base64,AAAA", "   ")
    assert orch.messages[0].content == "[Image without description]"


def test_audio_transcript_prefix():
    provider = FakeProvider()
    orch = make_orchestrator(provider)
    orch.send_audio_transcript("what time is it")
    assert orch.messages[0].content == "[Voice input]: what time is it"
    assert provider.requests[0].messages[-1].content == "[Voice input]: what time is it"


def test_language_and_model_apply_to_next_request():
    provider = FakeProvider()
    orch = make_orchestrator(provider)
    orch.send_text("one")
    orch.set_language("ja")
    orch.set_model("gemma-7b-it")
    orch.send_text("two")

    assert provider.requests[0].messages[0].content == LANGUAGE_SYSTEM_PROMPTS["en"]
    assert provider.requests[1].messages[0].content == LANGUAGE_SYSTEM_PROMPTS["ja"]
    assert provider.requests[1].model == "gemma-7b-it"
    # 系统提示词不会写入会话
    assert all(m.role != "system" for m in orch.messages)


def test_overlapping_send_is_rejected():
    orch = None
    nested = {}

    def on_call(req):
        nested["accepted"] = orch.send_text("second")
        nested["messages"] = orch.messages

    orch = make_orchestrator(FakeProvider(on_call=on_call))
    assert orch.send_text("first") is True
    assert nested["accepted"] is False
    assert nested["messages"] == (ChatMessage(role="user", content="first"),)
    assert [m.role for m in orch.messages] == ["user", "assistant"]
    assert orch.is_loading is False


def test_scenario_unauthorized_response(monkeypatch):
    class SettingsStub:
        groq_api_key = "gsk_bad"
        http_timeout = 1.0
        groq_base_url = "https://api.groq.com/openai/v1"

    class Resp:
        status_code = 401

        def json(self):
            return {"error": {"message": "invalid key"}}

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, *a, **kw):
            return Resp()

    monkeypatch.setattr("httpx.Client", Client)
    orch = ChatOrchestrator(CompletionClient(GroqClient(SettingsStub())))
    orch.send_text("Hello")

    assert orch.error == "invalid key"
    assert orch.messages == (ChatMessage(role="user", content="Hello"),)
    assert orch.is_loading is False


def test_transport_failure_through_http_client(monkeypatch):
    class SettingsStub:
        groq_api_key = "gsk_ok"
        http_timeout = 1.0
        groq_base_url = "https://api.groq.com/openai/v1"

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, *a, **kw):
            raise httpx.ConnectError("name resolution failed")

    monkeypatch.setattr("httpx.Client", Client)
    orch = ChatOrchestrator(CompletionClient(GroqClient(SettingsStub())))
    orch.send_text("Hello")
    assert "name resolution failed" in orch.error
    assert orch.messages == (ChatMessage(role="user", content="Hello"),)


def test_state_snapshot():
    orch = make_orchestrator(FakeProvider(reply="ok"), language="ko", model="gemma-7b-it")
    orch.send_text("hi")
    state = orch.state
    assert state.language == "ko"
    assert state.model == "gemma-7b-it"
    assert state.is_loading is False
    assert state.error is None
    assert len(state.messages) == 2


@pytest.mark.parametrize(
    "body",
    [
        {"choices": [None]},
        {"choices": ["x"]},
        {"choices": [{"message": "hi"}]},
        {"choices": [], "usage": [1]},
    ],
)
def test_malformed_success_body_reports_no_response(monkeypatch, body):
    class SettingsStub:
        groq_api_key = "gsk_ok"
        http_timeout = 1.0
        groq_base_url = "https://api.groq.com/openai/v1"

    class Resp:
        status_code = 200

        def json(self):
            return body

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, *a, **kw):
            return Resp()

    monkeypatch.setattr("httpx.Client", Client)
    orch = ChatOrchestrator(CompletionClient(GroqClient(SettingsStub())))
    assert orch.send_text("Hello") is False
    assert orch.error == "No response from the assistant"
    assert orch.messages == (ChatMessage(role="user", content="Hello"),)
    assert orch.is_loading is False
