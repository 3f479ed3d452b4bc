"""
Test API Routes

End-to-end tests through the FastAPI app: request validation, status codes,
the {"error": ...} body and the upstream failure mapping. Providers are
replaced with fakes through dependency overrides.

Author: @kcaparas1630
"""

import json
import httpx
import pytest
from app.core.ai_client_manager import AIClientManager
from app.main import app
from app.routes.health import missing_credentials
from app.services.upstream.deepgram_client import DeepgramClient, get_deepgram_client
from app.core.config import get_settings
from app.services.upstream.llm_gateway import LLMGateway
from app.test.fakes import (
    FakeClientManager,
    FakeGateway,
    FakeSDKClient,
    chat_response,
    make_settings,
    responses_response,
)

FEEDBACK_BODY = {
    "questions": ["Tell me about a bug you fixed.", "Why this team?"],
    "answers": ["I traced a race condition.", "I like the product."],
}

def feedback_reply(count):
    block = {
        "response_organization": 70,
        "technical_knowledge": 70,
        "problem_solving": 70,
        "position_application": 70,
        "timing": 70,
        "personability": 70,
        "best_part_quote": "", "best_part_explanation": "",
        "worst_part_quote": "", "worst_part_explanation": "",
        "what_went_well": "", "needs_improvement": "", "summary": "",
        "confidence_score": 50,
    }
    overall = {key: block[key] for key in list(block)[:6]}
    overall.update({"what_went_well": "", "needs_improvement": "", "summary": ""})
    return json.dumps({"questions": [block] * count, "overall": overall})

class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_health_stays_ok_without_credentials(self, client):
        app.dependency_overrides[get_settings] = lambda: make_settings(groq_api_key=None, deepgram_api_key="")
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_missing_credentials_lists_names_only(self):
        settings = make_settings(groq_api_key=None, deepgram_api_key="")
        assert missing_credentials(settings) == ["GROQ_API_KEY", "DEEPGRAM_API_KEY"]
        assert missing_credentials(make_settings()) == []

class TestFeedbackRoutes:
    """Test /api/feedback and /api/factcheck."""

    def test_feedback_success(self, client, use_gateway):
        use_gateway(FakeGateway(respond_reply=responses_response(feedback_reply(2))))

        response = client.post("/api/feedback", json=FEEDBACK_BODY)

        assert response.status_code == 200
        body = response.json()
        assert len(body["questions"]) == 2
        assert body["questions"][0]["score"] == 70.0
        assert body["overall"]["score"] == 70.0

    def test_non_parallel_arrays_is_400(self, client, use_gateway):
        gateway = use_gateway(FakeGateway())
        response = client.post("/api/feedback", json={"questions": ["Q1", "Q2"], "answers": ["A1"]})

        assert response.status_code == 400
        assert response.json() == {"error": "questions and answers must be parallel arrays"}
        gateway.respond.assert_not_awaited()

    def test_oversize_interview_is_400(self, client, use_gateway):
        gateway = use_gateway(FakeGateway())
        response = client.post("/api/feedback", json={"questions": ["Q1"], "answers": ["word " * 20000]})

        assert response.status_code == 400
        assert response.json() == {"error": "Interview is too long to score; shorten the answers and retry"}
        gateway.respond.assert_not_awaited()

    def test_missing_field_is_400(self, client, use_gateway):
        use_gateway(FakeGateway())
        response = client.post("/api/feedback", json={"questions": ["Q1"]})
        assert response.status_code == 400
        assert response.json() == {"error": "answers is required"}

    def test_invalid_json_is_400(self, client, use_gateway):
        use_gateway(FakeGateway())
        response = client.post("/api/feedback", content="{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json() == {"error": "Request body must be valid JSON"}

    def test_wrong_method_is_405_without_body(self, client):
        response = client.get("/api/feedback")
        assert response.status_code == 405
        assert response.content == b""
        assert "POST" in response.headers["allow"]

    def test_missing_credential_is_500(self, client, use_gateway):
        settings = make_settings(openai_api_key=None)
        use_gateway(LLMGateway(AIClientManager(settings)), settings)

        response = client.post("/api/feedback", json=FEEDBACK_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "OPENAI_API_KEY is not configured"}

    def test_question_count_mismatch_is_502(self, client, use_gateway):
        use_gateway(FakeGateway(respond_reply=responses_response(feedback_reply(1))))
        response = client.post("/api/feedback", json=FEEDBACK_BODY)
        assert response.status_code == 502
        assert response.json() == {"error": "AI returned incomplete feedback. Please retry."}

    def test_invalid_model_json_is_502(self, client, use_gateway):
        use_gateway(FakeGateway(respond_reply=responses_response("Here is your feedback!")))
        response = client.post("/api/feedback", json=FEEDBACK_BODY)
        assert response.status_code == 502
        assert response.json() == {"error": "AI returned invalid JSON"}

    def test_upstream_timeout_is_504(self, client, use_gateway, tiny_timeouts):
        sdk_client = FakeSDKClient(responses_response(feedback_reply(2)), delay=1.0)
        use_gateway(LLMGateway(FakeClientManager(sdk_client)), make_settings(timeouts=tiny_timeouts))

        response = client.post("/api/feedback", json=FEEDBACK_BODY)

        assert response.status_code == 504
        assert response.json() == {"error": "OpenAI request timed out"}
        assert len(sdk_client.calls) == 1

    def test_factcheck_blank_correction_is_400(self, client, use_gateway):
        use_gateway(FakeGateway())
        response = client.post("/api/factcheck", json={"question": "Q", "answer": "A", "correction": "  "})
        assert response.status_code == 400
        assert response.json() == {"error": "correction is required"}

    def test_factcheck_success(self, client, use_gateway):
        reply = {"is_correct": False, "result": "The correction is not accurate.", "explanation": "No."}
        use_gateway(FakeGateway(respond_reply=responses_response(json.dumps(reply))))
        response = client.post("/api/factcheck", json={"question": "Q", "answer": "A", "correction": "C"})
        assert response.status_code == 200
        assert response.json() == reply

class TestQuestionRoutes:
    """Test the question generation endpoints."""

    def test_question_concrete_scenario(self, client, use_gateway):
        use_gateway(FakeGateway(chat_replies=[chat_response("Tell me about a time you disagreed with a teammate.")]))

        response = client.post("/api/question", json={
            "role": "backend engineer",
            "previousQuestions": ["Tell me about a bug you fixed."],
        })

        assert response.status_code == 200
        assert response.json() == {"question": "Tell me about a time you disagreed with a teammate."}

    def test_question_blank_previous_questions(self, client, use_gateway):
        gateway = use_gateway(FakeGateway(chat_replies=[chat_response("Why backend?")]))

        response = client.post("/api/question", json={"role": "backend engineer", "previousQuestions": ["  "]})

        assert response.status_code == 200
        assert response.json() == {"question": "Why backend?"}
        prompt = gateway.chat.await_args.kwargs["messages"][0]["content"]
        assert "Previously asked questions:\nNone" in prompt

    def test_question_missing_groq_key_is_500(self, client, use_gateway):
        settings = make_settings(groq_api_key=None)
        use_gateway(LLMGateway(AIClientManager(settings)), settings)
        response = client.post("/api/question", json={"role": "backend engineer"})
        assert response.status_code == 500
        assert response.json() == {"error": "GROQ_API_KEY is not configured"}

    def test_question_timeout_is_504(self, client, use_gateway, tiny_timeouts):
        sdk_client = FakeSDKClient(chat_response("late"), delay=1.0)
        use_gateway(LLMGateway(FakeClientManager(sdk_client)), make_settings(timeouts=tiny_timeouts))
        response = client.post("/api/question", json={})
        assert response.status_code == 504
        assert response.json() == {"error": "Groq request timed out"}

    def test_resume_question_requires_resume(self, client, use_gateway):
        use_gateway(FakeGateway())
        response = client.post("/api/resume-question", json={"jobDescription": "Backend role"})
        assert response.status_code == 400
        assert response.json() == {"error": "resumeText is required"}

    def test_jobdesc_question(self, client, use_gateway):
        reply = '{"question": "At Acme we move money. Tell me about a ledger you built.", "type": "behavioral", "focus": "payments"}'
        use_gateway(FakeGateway(chat_replies=[chat_response(reply)]))
        response = client.post("/api/jobdesc-question", json={"jobDescription": "Acme payments"})
        assert response.status_code == 200
        assert response.json()["focus"] == "payments"

    def test_generate_questions_count_out_of_range(self, client, use_gateway):
        use_gateway(FakeGateway())
        response = client.post("/api/generate-questions", json={"role": "designer", "count": 50})
        assert response.status_code == 400
        assert response.json()["error"].startswith("count:")

    def test_generate_questions(self, client, use_gateway):
        use_gateway(FakeGateway(chat_replies=[chat_response('["Q1?", "Q2?"]')]))
        response = client.post("/api/generate-questions", json={"role": "designer", "count": 2})
        assert response.status_code == 200
        assert response.json() == {"questions": ["Q1?", "Q2?"]}

    def test_generate_questions_empty_reply(self, client, use_gateway):
        use_gateway(FakeGateway(chat_replies=[chat_response("")]))
        response = client.post("/api/generate-questions", json={"role": "designer"})
        assert response.status_code == 200
        assert response.json() == {"questions": []}

class TestConversationRoutes:
    """Test pause, script, voice summary and coach endpoints."""

    def test_pause_unknown_verdict_is_ask(self, client, use_gateway):
        use_gateway(FakeGateway(chat_replies=[chat_response('{"verdict": "not sure"}')]))
        response = client.post("/api/pause", json={"transcript": "I think we"})
        assert response.status_code == 200
        assert response.json() == {"verdict": "ask"}

    def test_pause_requires_transcript(self, client, use_gateway):
        use_gateway(FakeGateway())
        response = client.post("/api/pause", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "transcript is required"}

    def test_script(self, client, use_gateway):
        use_gateway(FakeGateway(chat_replies=[chat_response("Welcome in!")]))
        response = client.post("/api/script", json={"systemPrompt": "You are Starly.", "directive": "Greet."})
        assert response.status_code == 200
        assert response.json() == {"text": "Welcome in!"}

    def test_voice_summary(self, client, use_gateway):
        use_gateway(FakeGateway(chat_replies=[chat_response("You scored 70%, nice job!")]))
        response = client.post("/api/voice-summary", json={
            "overall": {"score": 70, "what_went_well": "Stories", "needs_improvement": "Pace"},
            "questions": [{"score": 70, "summary": "Good"}],
        })
        assert response.status_code == 200
        assert response.json() == {"text": "You scored 70%, nice job!"}

    def test_coach_reply_omits_blocked(self, client, use_gateway):
        use_gateway(FakeGateway(chat_replies=[chat_response("Lead with the result.")]))
        response = client.post("/api/coach", json={
            "messages": [{"role": "user", "content": "How can I improve my answer?"}],
        })
        assert response.status_code == 200
        assert response.json() == {"reply": "Lead with the result."}

    def test_coach_blocks_off_topic(self, client, use_gateway):
        use_gateway(FakeGateway(chat_replies=[chat_response('{"isRelevant": false}')]))
        response = client.post("/api/coach", json={
            "messages": [{"role": "user", "content": "Recommend a pizza place nearby"}],
        })
        assert response.status_code == 200
        assert response.json()["blocked"] is True

    def test_coach_without_messages_is_400(self, client, use_gateway):
        use_gateway(FakeGateway())
        response = client.post("/api/coach", json={"messages": []})
        assert response.status_code == 400
        assert response.json() == {"error": "No messages provided"}

class TestSpeechKeyRoute:
    """Test /api/key."""

    def install(self, handler, **settings_overrides):
        settings = make_settings(**settings_overrides)
        client = DeepgramClient(
            api_key=settings.deepgram_api_key,
            base_url=settings.deepgram_base_url,
            timeout=settings.timeouts.speech_key,
            transport=httpx.MockTransport(handler),
        )
        app.dependency_overrides[get_deepgram_client] = lambda: client
        app.dependency_overrides[get_settings] = lambda: settings

    def test_key_success(self, client):
        def handler(request):
            if request.method == "GET":
                return httpx.Response(200, json={"projects": [{"project_id": "proj-1"}]})
            return httpx.Response(200, json={"key": "short-lived"})

        self.install(handler)
        response = client.post("/api/key")
        assert response.status_code == 200
        assert response.json() == {"key": "short-lived"}

    def test_key_missing_credential_is_500(self, client):
        self.install(lambda request: httpx.Response(200, json={}), deepgram_api_key=None)
        response = client.post("/api/key")
        assert response.status_code == 500
        assert response.json() == {"error": "DEEPGRAM_API_KEY is not configured"}

    def test_key_upstream_failure_is_502(self, client):
        self.install(lambda request: httpx.Response(500, json={"err": "down"}))
        response = client.post("/api/key")
        assert response.status_code == 502
        assert response.json() == {"error": "Deepgram API error"}
