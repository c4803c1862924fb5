import pytest
from types import SimpleNamespace
from pydantic import ValidationError
from exceptions import AnalysisError, ErrorCategory
from models.verdicts import AnalysisResult, Source, Verdict
from services.normalizer import (
    normalize_reply,
    validate_verdict,
    parse_reply_json,
    dedupe_sources,
    extract_grounding_sources,
)


def _chunks(*pairs):
    return {
        "candidates": [
            {"groundingMetadata": {"groundingChunks": [{"web": {"uri": u, "title": t}} for u, t in pairs]}}
        ]
    }


class TestValidateVerdict:
    """Tests for validate_verdict function."""

    @pytest.mark.parametrize("verdict", list(Verdict))
    def test_accepts_exact_values(self, verdict):
        assert validate_verdict({"verdict": verdict.value}) is verdict

    @pytest.mark.parametrize("value", [
        "true", "Likely True", "LIKELY_TRUE", "likely false", "False", " FALSE", "PROBABLY_TRUE", "", 1,
    ])
    def test_rejects_other_values(self, value):
        with pytest.raises(AnalysisError) as exc_info:
            validate_verdict({"verdict": value})
        assert exc_info.value.category == ErrorCategory.INVALID_VERDICT

    def test_names_offending_value(self):
        with pytest.raises(AnalysisError) as exc_info:
            validate_verdict({"verdict": "PROBABLY_TRUE"})
        assert "PROBABLY_TRUE" in exc_info.value.message
        assert exc_info.value.details["verdict"] == "PROBABLY_TRUE"

    def test_missing_verdict(self):
        with pytest.raises(AnalysisError) as exc_info:
            validate_verdict({"summary": "no verdict"})
        assert exc_info.value.category == ErrorCategory.INVALID_VERDICT

    def test_non_object_payload(self):
        with pytest.raises(AnalysisError) as exc_info:
            validate_verdict(["TRUE"])
        assert exc_info.value.category == ErrorCategory.INVALID_VERDICT


class TestParseReplyJson:

    def test_valid(self):
        assert parse_reply_json('{"a": 1}') == {"a": 1}

    @pytest.mark.parametrize("text", ["", "not json", '{"verdict": "TRUE",}', "```json\n{}"])
    def test_malformed(self, text):
        with pytest.raises(AnalysisError) as exc_info:
            parse_reply_json(text)
        assert exc_info.value.category == ErrorCategory.MALFORMED_RESPONSE
        assert "rephrasing" in exc_info.value.message

    def test_deeply_nested(self):
        with pytest.raises(AnalysisError) as exc_info:
            parse_reply_json("[" * 100000)
        assert exc_info.value.category == ErrorCategory.MALFORMED_RESPONSE


class TestDedupeSources:
    """Tests for dedupe_sources function."""

    def test_last_value_wins_first_position_kept(self):
        sources = [
            Source(uri="A", title="first A"),
            Source(uri="B", title="B"),
            Source(uri="A", title="last A"),
        ]
        result = dedupe_sources(sources)
        assert [s.uri for s in result] == ["A", "B"]
        assert result[0].title == "last A"

    def test_empty(self):
        assert dedupe_sources([]) == []


class TestExtractGroundingSources:

    def test_no_metadata(self):
        assert extract_grounding_sources({"text": "{}"}) == []

    def test_no_candidates(self):
        assert extract_grounding_sources({"candidates": []}) == []

    def test_discards_incomplete_chunks(self):
        raw = _chunks(("https://a", "A"), ("https://b", None), (None, "C"), ("", ""))
        result = extract_grounding_sources(raw)
        assert result == [Source(uri="https://a", title="A")]

    def test_attaches_reported_publication_date(self):
        raw = _chunks(("https://a", "A"), ("https://b", "B"))
        parsed = {"sources": [
            {"uri": "https://a", "title": "A", "published": "2024-06-01"},
            {"uri": "https://elsewhere", "title": "X", "published": "2024-01-01"},
        ]}
        result = extract_grounding_sources(raw, parsed)
        assert result[0].published == "2024-06-01"
        assert result[1].published is None
        assert len(result) == 2

    def test_snake_case_sdk_objects(self):
        web = SimpleNamespace(uri="https://sdk", title="SDK")
        chunk = SimpleNamespace(web=web)
        candidate = SimpleNamespace(grounding_metadata=SimpleNamespace(grounding_chunks=[chunk]))
        raw = SimpleNamespace(candidates=[candidate])
        assert extract_grounding_sources(raw) == [Source(uri="https://sdk", title="SDK")]


@pytest.mark.asyncio
class TestNormalizeReply:
    """Tests for normalize_reply function."""

    async def test_fenced_reply_without_sources(self):
        raw = {"text": '```json\n{"verdict":"FALSE","summary":"S","reasoning":"R"}\n```'}
        result = await normalize_reply(raw)
        assert result == AnalysisResult(verdict=Verdict.FALSE, summary="S", reasoning="R", sources=())

    async def test_fenced_equals_unfenced(self):
        body = '{"verdict":"MISLEADING","summary":"S","reasoning":"R"}'
        fenced = await normalize_reply({"text": f"```json\n{body}\n```"})
        plain = await normalize_reply({"text": body})
        assert fenced == plain

    async def test_backticks_inside_json(self):
        body = '{"verdict":"TRUE","summary":"Uses ```code```","reasoning":"R"}'
        result = await normalize_reply({"text": body})
        assert result.summary == "Uses ```code```"

    async def test_missing_summary_defaults(self):
        result = await normalize_reply({"text": '{"verdict":"TRUE","reasoning":"R"}'})
        assert result.summary == "No summary provided."
        assert result.reasoning == "R"

    async def test_missing_reasoning_defaults(self):
        result = await normalize_reply({"text": '{"verdict":"TRUE","summary":"S"}'})
        assert result.summary == "S"
        assert result.reasoning == "No reasoning provided."

    async def test_empty_strings_default(self):
        result = await normalize_reply({"text": '{"verdict":"TRUE","summary":"","reasoning":null}'})
        assert result.summary == "No summary provided."
        assert result.reasoning == "No reasoning provided."

    async def test_malformed_json(self):
        with pytest.raises(AnalysisError) as exc_info:
            await normalize_reply({"text": "The claim is false."})
        assert exc_info.value.category == ErrorCategory.MALFORMED_RESPONSE

    async def test_empty_reply_is_malformed(self):
        with pytest.raises(AnalysisError) as exc_info:
            await normalize_reply({})
        assert exc_info.value.category == ErrorCategory.MALFORMED_RESPONSE

    async def test_unknown_verdict(self):
        with pytest.raises(AnalysisError) as exc_info:
            await normalize_reply({"text": '{"verdict":"PROBABLY_TRUE"}'})
        assert exc_info.value.category == ErrorCategory.INVALID_VERDICT
        assert "PROBABLY_TRUE" in exc_info.value.message

    async def test_grounded_rest_reply(self, sample_gemini_response):
        result = await normalize_reply(sample_gemini_response)
        assert result.verdict is Verdict.LIKELY_TRUE
        assert result.reasoning == "Step one.\nStep two."
        assert [s.uri for s in result.sources] == ["https://example.org/a", "https://example.org/b"]
        assert result.sources[0].title == "A second"
        assert result.sources[0].published == "2024-05-01"

    async def test_result_is_immutable(self):
        result = await normalize_reply({"text": '{"verdict":"TRUE"}'})
        with pytest.raises(ValidationError):
            result.summary = "changed"
