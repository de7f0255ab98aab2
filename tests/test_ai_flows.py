"""Tests for the Gemini-backed flows and the AI report endpoint."""

import json
from unittest.mock import MagicMock, patch

import pytest

from dayflow.ai import generate_daily_summary as summary_flow
from dayflow.ai import suggest_unlogged_time as unlogged
from dayflow.ai.flow import Flow, GeminiClient
from dayflow.core.clock import local_today
from dayflow.core.exceptions import ConfigurationError, ExternalServiceError
from dayflow.crud.activity_log import crud_activity_log
from dayflow.crud.state_log import crud_state_log
from dayflow.schemas.ai import DailySummary, DailySummaryPromptInput, SuggestUnloggedTimeInput
from dayflow.schemas.logs import MoodLogCreate

SUMMARY_JSON = json.dumps({
    "overallSummary": "A focused morning followed by a calm evening.",
    "moodAnalysis": {
        "trend": "Energy rose steadily through the day.",
        "highestEnergy": "After the walk",
        "lowestEnergy": "Early morning",
    },
    "productivityAnalysis": {
        "mostProductiveActivity": "Deep Work",
        "totalProductiveHours": 2.5,
        "peakProductivityTime": "Late morning",
    },
    "keyInsights": ["Walking lifted your energy."],
    "suggestionsForTomorrow": [
        {"suggestion": "Start with Deep Work", "reasoning": "Your focus peaked before noon."},
    ],
})


def fake_client(text):
    client = MagicMock(spec=GeminiClient)
    client.generate_json.return_value = text
    return client


class TestFlow:

    def test_parses_camel_case_output(self):
        result = summary_flow.daily_summary_flow(DailySummaryPromptInput(), client=fake_client(SUMMARY_JSON))

        assert isinstance(result, DailySummary)
        assert result.productivity_analysis.most_productive_activity == "Deep Work"
        assert result.suggestions_for_tomorrow[0].reasoning == "Your focus peaked before noon."

    def test_strips_markdown_fence(self):
        fenced = f"```json\n{SUMMARY_JSON}\n```"

        result = summary_flow.daily_summary_flow(DailySummaryPromptInput(), client=fake_client(fenced))

        assert result.overall_summary.startswith("A focused morning")

    def test_empty_output(self):
        with pytest.raises(ExternalServiceError, match="The AI failed to generate a summary."):
            summary_flow.daily_summary_flow(DailySummaryPromptInput(), client=fake_client("  "))

    def test_output_of_wrong_shape(self):
        with pytest.raises(ExternalServiceError, match="The AI failed to generate a summary."):
            summary_flow.daily_summary_flow(
                DailySummaryPromptInput(), client=fake_client('{"overallSummary": 3}')
            )

    def test_input_is_validated_from_dict(self):
        flow = Flow("echo", DailySummaryPromptInput, dict, render=lambda d: d.user_goals)
        client = fake_client("{}")

        flow({"userGoals": "Sleep more"}, client=client)

        client.generate_json.assert_called_once_with("Sleep more")

    def test_client_without_key(self):
        with pytest.raises(ConfigurationError):
            GeminiClient(api_key="").generate_json("hello")


class TestDailySummaryPrompt:

    def test_empty_day(self):
        prompt = summary_flow.render_prompt(DailySummaryPromptInput())

        assert "Not specified" in prompt
        assert "No activities were logged today." in prompt
        assert "No mood or energy levels were logged today." in prompt

    def test_build_prompt_input(self, db, make_user):
        user = make_user(goals="  More deep work  ")
        day = local_today(user)
        crud_activity_log.create_many(
            db, user_id=user.id, day=str(day), entries=[("Deep Work", 90), ("Knitting", 30)], entry_type="Log"
        )
        crud_state_log.create(db, user_id=user.id, obj_in=MoodLogCreate(energy=7, focus=8, mood=6))

        data = summary_flow.build_prompt_input(db, user, day)

        assert data.user_goals == "More deep work"
        assert [(a.activity_name, a.kind) for a in data.activities] == [("Deep Work", "work"), ("Knitting", None)]
        assert (data.moods[0].energy, data.moods[0].focus, data.moods[0].mood) == (7, 8, 6)

        prompt = summary_flow.render_prompt(data)
        assert "Activity: Deep Work, Duration: 90 minutes" in prompt
        assert "Energy=7/10, Focus=8/10, Mood=6/10" in prompt


class TestUnloggedTimePrompt:

    def test_prompt_names_the_gap(self):
        data = SuggestUnloggedTimeInput(
            unlogged_time_start="13:00",
            unlogged_time_end="14:30",
            available_activities=["Deep Work", "Take a Walk"],
        )

        prompt = unlogged.render_prompt(data)

        assert "From 13:00 to 14:30" in prompt
        assert "Take a Walk" in prompt

    def test_suggestions_parsed(self):
        data = SuggestUnloggedTimeInput(unlogged_time_start="13:00", unlogged_time_end="14:00")
        client = fake_client('[{"activity": "Relax / Break", "reasoning": "Lunch time."}]')

        result = unlogged.suggest_unlogged_time(data, client=client)

        assert [s.activity for s in result] == ["Relax / Break"]


class TestReportApi:

    @patch("dayflow.ai.flow.GeminiClient.generate_json", return_value=SUMMARY_JSON)
    def test_daily_summary_in_camel_case(self, mock_generate, client, auth_headers):
        response = client.get("/report/daily", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["overallSummary"].startswith("A focused morning")
        assert body["productivityAnalysis"]["totalProductiveHours"] == 2.5
        mock_generate.assert_called_once()

    @patch("dayflow.ai.flow.GeminiClient.generate_json", return_value="")
    def test_empty_ai_answer(self, mock_generate, client, auth_headers):
        response = client.get("/report/daily", params={"date": "2024-03-04"}, headers=auth_headers)

        assert response.status_code == 502
        assert response.json()["detail"] == "The AI failed to generate a summary."

    def test_ai_not_configured(self, client, auth_headers):
        response = client.get("/report/daily", headers=auth_headers)

        assert response.status_code == 503
