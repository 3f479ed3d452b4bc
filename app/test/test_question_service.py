"""
Test Question Service Module

Author: @kcaparas1630
"""

import pytest
from fastapi import HTTPException
from app.core.ai_client_manager import GROQ, OPENAI
from app.schemas.question_schemas import (
    QuestionRequest,
    ResumeQuestionRequest,
    JobDescriptionQuestionRequest,
    QuestionSetRequest,
)
from app.services.questions.question_service import (
    QuestionService,
    clean_question,
    format_previous_questions,
    non_blank_questions,
)
from app.test.fakes import FakeGateway, chat_response, make_settings

class TestHelpers:
    """Test question cleanup and the previous-question block."""

    def test_clean_question_strips_preamble_and_quotes(self):
        assert clean_question('Sure! Here is one: "Tell me about a bug you fixed."') == "Tell me about a bug you fixed."

    def test_clean_question_keeps_plain_question(self):
        assert clean_question("  Tell me about a time you led a team.  ") == "Tell me about a time you led a team."

    def test_format_previous_questions(self):
        block = format_previous_questions(["First?", "Second?"])
        assert "do NOT repeat" in block
        assert "1. First?\n2. Second?" in block
        assert format_previous_questions([]) == ""
        assert format_previous_questions(None) == ""

    def test_blank_previous_questions_are_dropped(self):
        assert non_blank_questions(["  ", "", "First?", "\n"]) == ["First?"]
        assert non_blank_questions(None) == []
        assert format_previous_questions(["  "]) == ""

class TestGenerateQuestion:
    """Test the role-based question."""

    @pytest.mark.asyncio
    async def test_generate_question(self):
        gateway = FakeGateway(chat_replies=[chat_response("Tell me about a time you disagreed with a teammate.")])
        service = QuestionService(gateway, make_settings())

        result = await service.generate_question(QuestionRequest(
            role="backend engineer",
            previousQuestions=["Tell me about a bug you fixed."],
        ))

        assert result.question == "Tell me about a time you disagreed with a teammate."
        args, kwargs = gateway.chat.await_args
        assert args == (GROQ,)
        assert kwargs["model"] == "llama-3.3-70b-versatile"
        assert kwargs["temperature"] == 0.8
        assert kwargs["max_tokens"] == 250
        prompt = kwargs["messages"][0]["content"]
        assert "for a backend engineer." in prompt
        assert "Tell me about a bug you fixed." in prompt

    @pytest.mark.asyncio
    async def test_defaults_role_and_previous(self):
        gateway = FakeGateway(chat_replies=[chat_response("Why engineering?")])
        service = QuestionService(gateway, make_settings())

        await service.generate_question(QuestionRequest())

        prompt = gateway.chat.await_args.kwargs["messages"][0]["content"]
        assert "software engineering intern" in prompt
        assert "Previously asked questions:\nNone" in prompt

    @pytest.mark.asyncio
    async def test_whitespace_previous_questions_count_as_none(self):
        gateway = FakeGateway(chat_replies=[chat_response("Why engineering?")])
        service = QuestionService(gateway, make_settings())

        result = await service.generate_question(QuestionRequest(role="backend engineer", previousQuestions=["  ", ""]))

        assert result.question == "Why engineering?"
        prompt = gateway.chat.await_args.kwargs["messages"][0]["content"]
        assert "Previously asked questions:\nNone" in prompt

class TestTailoredQuestions:
    """Test resume and job description questions."""

    @pytest.mark.asyncio
    async def test_resume_question(self):
        reply = '{"question": "Tell me about the API you built.", "type": "behavioral", "focus": "APIs"}'
        gateway = FakeGateway(chat_replies=[chat_response(reply)])
        service = QuestionService(gateway, make_settings())

        result = await service.generate_resume_question(ResumeQuestionRequest(
            resumeText="Built a REST API.",
            jobDescription="Backend role.",
            questionNumber=2,
        ))

        assert result.focus == "APIs"
        kwargs = gateway.chat.await_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert "This is question number 2." in kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_missing_fields_get_defaults(self):
        gateway = FakeGateway(chat_replies=[chat_response('{"question": "What does a good review look like?"}')])
        service = QuestionService(gateway, make_settings())

        result = await service.generate_jobdesc_question(JobDescriptionQuestionRequest(
            jobDescription="We build payment rails.",
            candidateName="Sam",
        ))

        assert result.type == "behavioral"
        assert result.focus == ""
        prompt = gateway.chat.await_args.kwargs["messages"][0]["content"]
        assert "The candidate's name is Sam." in prompt
        assert "This is question number 1." in prompt

    @pytest.mark.asyncio
    async def test_non_object_reply_is_502(self):
        gateway = FakeGateway(chat_replies=[chat_response('["a", "b"]')])
        service = QuestionService(gateway, make_settings())
        with pytest.raises(HTTPException) as exc_info:
            await service.generate_resume_question(ResumeQuestionRequest(resumeText="r", jobDescription="j"))
        assert exc_info.value.status_code == 502

class TestQuestionSet:
    """Test batch question generation."""

    @pytest.mark.asyncio
    async def test_generate_question_set(self):
        gateway = FakeGateway(chat_replies=[chat_response('```json\n["Q1?", "Q2?", "Q3?"]\n```')])
        service = QuestionService(gateway, make_settings())

        result = await service.generate_question_set(QuestionSetRequest(role="data analyst", count=3))

        assert result.questions == ["Q1?", "Q2?", "Q3?"]
        args, kwargs = gateway.chat.await_args
        assert args == (OPENAI,)
        assert "Generate 3 interview questions for a data analyst position." in kwargs["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_empty_reply_is_no_questions(self):
        gateway = FakeGateway(chat_replies=[chat_response("")])
        service = QuestionService(gateway, make_settings())

        result = await service.generate_question_set(QuestionSetRequest(role="data analyst"))

        assert result.questions == []

    @pytest.mark.asyncio
    async def test_non_list_reply_is_502(self):
        gateway = FakeGateway(chat_replies=[chat_response('{"questions": ["Q1?"]}')])
        service = QuestionService(gateway, make_settings())
        with pytest.raises(HTTPException) as exc_info:
            await service.generate_question_set(QuestionSetRequest(role="data analyst"))
        assert exc_info.value.status_code == 502
