"""
Tests for the share-code codec.
"""
import base64
from dataclasses import replace
import json
import string
from urllib.parse import quote

import pytest

from quiz_share.core.lzw_compressor import compress
from quiz_share.core.models import QuizQuestion
from quiz_share.core.share_codec import (
    DecodeResult,
    decode_quiz,
    encode_quiz,
    quiz_from_dict,
    quiz_to_dict,
    try_decode_quiz,
)

TOKEN_ALPHABET = set(string.ascii_letters + string.digits + "+/=")


def _token_for(payload):
    """Build a token by hand so malformed payloads can be fed to the decoder."""
    compressed = compress(json.dumps(payload))
    return base64.b64encode(quote(compressed, safe="!*'()").encode("ascii")).decode("ascii")


class TestEncode:
    """Test cases for producing share codes."""

    def test_scenario_token_is_url_safe(self, cell_biology_quiz):
        token = encode_quiz(cell_biology_quiz)
        assert token
        assert set(token) <= TOKEN_ALPHABET

    def test_encoding_does_not_mutate_quiz(self, cell_biology_quiz):
        snapshot = replace(cell_biology_quiz, questions=list(cell_biology_quiz.questions))
        encode_quiz(cell_biology_quiz)
        assert cell_biology_quiz == snapshot

    def test_encoding_is_deterministic(self, cell_biology_quiz):
        assert encode_quiz(cell_biology_quiz) == encode_quiz(cell_biology_quiz)

    def test_missing_field_returns_empty_token(self, cell_biology_quiz):
        broken = replace(cell_biology_quiz, topic=None)
        assert encode_quiz(broken) == ""

    def test_unserializable_content_returns_empty_token(self, cell_biology_quiz):
        broken = replace(cell_biology_quiz, created_at=object())
        assert encode_quiz(broken) == ""

    def test_question_with_missing_field_returns_empty_token(self, cell_biology_quiz):
        for changes in ({"answer": None}, {"marks": None}, {"options": None}):
            question = replace(cell_biology_quiz.questions[0], **changes)
            assert encode_quiz(replace(cell_biology_quiz, questions=[question])) == ""

    def test_non_finite_marks_return_empty_token(self, cell_biology_quiz):
        assert encode_quiz(replace(cell_biology_quiz, total_marks=float("nan"))) == ""
        question = replace(cell_biology_quiz.questions[0], marks=float("inf"))
        assert encode_quiz(replace(cell_biology_quiz, questions=[question])) == ""

    def test_missing_instructor_is_allowed(self, cell_biology_quiz):
        token = encode_quiz(replace(cell_biology_quiz, instructor_id=None))
        assert token
        assert decode_quiz(token).instructor_id is None


class TestRoundTrip:
    """decode(encode(quiz)) == quiz."""

    def test_scenario_round_trip(self, cell_biology_quiz):
        assert decode_quiz(encode_quiz(cell_biology_quiz)) == cell_biology_quiz

    def test_multi_question_round_trip(self, multi_question_quiz):
        decoded = decode_quiz(encode_quiz(multi_question_quiz))
        assert decoded == multi_question_quiz

    def test_question_and_option_order_preserved(self, multi_question_quiz):
        decoded = decode_quiz(encode_quiz(multi_question_quiz))
        assert [q.question for q in decoded.questions] == [
            q.question for q in multi_question_quiz.questions
        ]
        for original, restored in zip(multi_question_quiz.questions, decoded.questions):
            assert restored.options == original.options

    def test_non_latin_text_round_trip(self, cell_biology_quiz):
        question = QuizQuestion(
            question="Τι είναι το μιτοχόνδριο; 线粒体是什么？ 🧬",
            options=["A. Ενέργεια", "B. 能量", "C. Ñandú", "D. \"quoted\" \\ slash"],
            answer="A",
            difficulty="Hard",
            marks=0.5,
        )
        quiz = replace(cell_biology_quiz, topic="Biologie – cellule", questions=[question])
        assert decode_quiz(encode_quiz(quiz)) == quiz

    def test_plus_signs_turned_into_spaces_still_decode(self, cell_biology_quiz):
        # Whether a token contains "+" depends on its content; try topics until one does
        for n in range(200):
            quiz = replace(cell_biology_quiz, topic=f"Topic {n} ~ x*y")
            token = encode_quiz(quiz)
            if "+" in token:
                break
        assert "+" in token
        mangled = token.replace("+", " ")
        assert mangled != token
        assert decode_quiz(mangled) == quiz

    @pytest.mark.parametrize("line_break", ["\n", "\r\n", "\n\t"])
    def test_token_wrapped_onto_several_lines_still_decodes(self, multi_question_quiz, line_break):
        token = encode_quiz(multi_question_quiz)
        wrapped = line_break.join(token[i : i + 60] for i in range(0, len(token), 60))
        assert decode_quiz(wrapped) == multi_question_quiz

    def test_surrounding_whitespace_is_ignored(self, cell_biology_quiz):
        token = encode_quiz(cell_biology_quiz)
        assert decode_quiz(f"  {token}\n") == cell_biology_quiz


class TestDecodeFailures:
    """Bad input yields a failed result instead of an exception."""

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "   ",
            "this is not a share code!!",
            "SGVsbG8gV29ybGQ=",
            "%%%%",
            "AB12CD",
            "@@@@====",
        ],
    )
    def test_garbage_is_rejected(self, token):
        result = try_decode_quiz(token)
        assert isinstance(result, DecodeResult)
        assert not result.ok
        assert result.quiz is None
        assert result.error

    def test_truncated_token_is_rejected(self, cell_biology_quiz):
        token = encode_quiz(cell_biology_quiz)
        for cut in (len(token) // 2, len(token) - 4, len(token) - 1):
            assert decode_quiz(token[:cut]) is None

    def test_invalid_base64_character_is_rejected(self, cell_biology_quiz):
        token = encode_quiz(cell_biology_quiz)
        assert decode_quiz(token[:8] + "*" + token[8:]) is None

    def test_non_string_token_is_rejected(self):
        assert decode_quiz(None) is None

    def test_payload_missing_field_is_rejected(self, cell_biology_quiz):
        payload = quiz_to_dict(cell_biology_quiz)
        del payload["topic"]
        result = try_decode_quiz(_token_for(payload))
        assert not result.ok
        assert "topic" in result.error

    def test_payload_with_wrong_types_is_rejected(self, cell_biology_quiz):
        payload = quiz_to_dict(cell_biology_quiz)
        payload["isArchived"] = "no"
        assert decode_quiz(_token_for(payload)) is None

    @pytest.mark.parametrize("constant", [float("nan"), float("inf"), float("-inf")])
    def test_payload_with_non_json_numbers_is_rejected(self, cell_biology_quiz, constant):
        payload = quiz_to_dict(cell_biology_quiz)
        payload["totalMarks"] = constant
        result = try_decode_quiz(_token_for(payload))
        assert not result.ok
        assert "non-JSON number" in result.error

    def test_question_missing_answer_is_rejected(self, cell_biology_quiz):
        payload = quiz_to_dict(cell_biology_quiz)
        del payload["questions"][0]["answer"]
        assert decode_quiz(_token_for(payload)) is None

    def test_json_that_is_not_an_object_is_rejected(self):
        assert decode_quiz(_token_for(["not", "a", "quiz"])) is None

    def test_successful_result_is_ok(self, cell_biology_quiz):
        result = try_decode_quiz(encode_quiz(cell_biology_quiz))
        assert result.ok
        assert result.error is None


class TestSerializationLayout:
    """The JSON layout uses the camelCase keys shared with existing clients."""

    def test_keys(self, cell_biology_quiz):
        payload = quiz_to_dict(cell_biology_quiz)
        assert set(payload) == {
            "id",
            "instructorId",
            "topic",
            "difficulty",
            "timerMinutes",
            "questions",
            "quizCode",
            "createdAt",
            "totalMarks",
            "isArchived",
        }
        assert payload["quizCode"] == "AB12CD"
        assert payload["questions"][0] == {
            "question": "What is the powerhouse of the cell?",
            "options": ["A. Nucleus", "B. Mitochondria", "C. Ribosome", "D. Golgi"],
            "answer": "B",
            "difficulty": "Easy",
            "marks": 20,
        }

    def test_from_dict_round_trip(self, multi_question_quiz):
        assert quiz_from_dict(quiz_to_dict(multi_question_quiz)) == multi_question_quiz
