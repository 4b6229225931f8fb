"""HTTP API tests: founders, interviews and nexus routes through TestClient.

Survey data is written to a temp directory and wired in through ``config``;
the webhook call is replaced with an async fake.
"""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from zar_insights import config
from zar_insights.constants import SURVEY_COLUMNS, TAXONOMY_VERSION
from zar_insights.main import app
from zar_insights.routes import nexus as nexus_routes
from zar_insights.schemas.nexus_schema import NexusResponse, SyncResult
from zar_insights.services.founder_dashboard import clear_caches

client = TestClient(app)

PHARMACY_TRANSCRIPT = (
    "Pharmacist: customers ask about dollar exchange every week "
    "Pharmacist: I send them to western union near the bank"
)

ROWS = [
    {
        "interviewer": "Ayesha",
        "shop_type": "Pharmacy",
        "location": "Saddar",
        "busiest_time": "Evening",
        "payment_methods": "EasyPaisa, JazzCash",
        "customer_asked_for_help": "Yes",
        "dollar_inquiry": "Yes",
        "currency_exchange_referral": "Western Union",
        "fraud_story": "No",
        "transcript": PHARMACY_TRANSCRIPT,
    },
    {
        "interviewer": "Bilal",
        "shop_type": "General store",
        "location": "Gulshan",
        "payment_methods": "Cash only",
        "fraud_story": "Yes",
        "fraud_details": "Payment reversed after an hour",
    },
]


def _survey_md(rows):
    keys = list(SURVEY_COLUMNS)
    lines = [
        "| " + " | ".join(SURVEY_COLUMNS[k] for k in keys) + " |",
        "|" + "|".join("---" for _ in keys) + "|",
    ]
    lines += ["| " + " | ".join(row.get(k, "") for k in keys) + " |" for row in rows]
    return "\n".join(lines) + "\n"


@pytest.fixture(autouse=True)
def survey_data(tmp_path, monkeypatch):
    """Point the loaders at a temp survey export and transcripts folder."""
    data_path = tmp_path / "data.md"
    data_path.write_text(_survey_md(ROWS), encoding="utf-8")
    transcripts = tmp_path / "transcripts"
    transcripts.mkdir()
    (transcripts / "Pharmacy Saddar.txt").write_text(PHARMACY_TRANSCRIPT, encoding="utf-8")

    monkeypatch.setattr(config, "INTERVIEWS_MD_PATH", str(data_path))
    monkeypatch.setattr(config, "TRANSCRIPTS_DIR", str(transcripts))
    monkeypatch.setattr(config, "NEXUS_BULK_DELAY", 0)
    clear_caches()
    yield tmp_path
    clear_caches()


@pytest.fixture
def fake_nexus(monkeypatch):
    """Record payloads instead of calling the webhook."""
    sent = []

    async def fake_send(payload, client=None):
        sent.append(payload)
        return NexusResponse(success=True, session_id=payload.session_id)

    monkeypatch.setattr(nexus_routes, "send_to_nexus", fake_send)
    return sent


# ===================================================================== #
#  General                                                                #
# ===================================================================== #

class TestGeneral:
    def test_root(self):
        res = client.get("/")
        assert res.status_code == 200
        assert res.json()["name"] == "ZAR Survey Insights"
        assert res.json()["taxonomy_version"] == TAXONOMY_VERSION

    def test_health(self):
        res = client.get("/health")
        assert res.status_code == 200
        assert res.json()["status"] == "healthy"

    def test_missing_survey_is_500(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config, "INTERVIEWS_MD_PATH", str(tmp_path / "gone.md"))
        monkeypatch.setattr(config, "DEBUG", False)
        clear_caches()
        res = TestClient(app, raise_server_exceptions=False).get("/founders/dashboard")
        assert res.status_code == 500
        assert res.json() == {
            "success": False,
            "error": "Internal server error",
            "detail": "An unexpected error occurred",
        }


# ===================================================================== #
#  Founders                                                               #
# ===================================================================== #

class TestFounderRoutes:
    def test_dashboard_camel_case(self):
        res = client.get("/founders/dashboard")
        assert res.status_code == 200
        data = res.json()
        assert data["totalInterviews"] == 2
        assert data["fxInquiryCount"] == 1
        assert [s["segment"] for s in data["segments"]] == [
            "ready_now", "promising_but_cautious", "digital_no_fx_yet", "cash_first",
        ]
        assert data["pilotCandidates"][0]["interviewId"] == "1"
        assert data["evidenceQuotes"][0]["transcriptFileName"] == "Pharmacy Saddar.txt"

    def test_overview(self):
        data = client.get("/founders/overview").json()
        assert set(data) == {
            "dashboard", "validationScorecard", "conversionFunnel",
            "willingnessFactors", "enhancedPilotCandidates",
        }
        assert data["validationScorecard"]["confidenceLevel"] == "low"

    def test_scorecard(self):
        data = client.get("/founders/scorecard").json()
        assert [d["id"] for d in data["dimensions"]] == [
            "problem", "willingness", "friction", "trust", "pilots",
        ]

    def test_scorecard_skips_funnel_and_willingness(self):
        with patch(
            "zar_insights.services.founder_dashboard.compute_conversion_funnel",
            side_effect=AssertionError("funnel built"),
        ), patch(
            "zar_insights.services.founder_dashboard.extract_willingness_factors",
            side_effect=AssertionError("willingness built"),
        ):
            res = client.get("/founders/scorecard")
        assert res.status_code == 200
        scorecard = res.json()
        overview_scorecard = client.get("/founders/overview").json()["validationScorecard"]
        scorecard.pop("lastUpdated")
        overview_scorecard.pop("lastUpdated")
        assert scorecard == overview_scorecard

    def test_funnel(self):
        data = client.get("/founders/funnel").json()
        assert [s["count"] for s in data] == [2, 1, 1, 1, 1]

    def test_pilot_candidates(self):
        data = client.get("/founders/pilot-candidates").json()
        assert [c["interviewId"] for c in data] == ["1"]
        assert data[0]["readinessScore"] == 100

    def test_willingness(self):
        assert client.get("/founders/willingness").json() == []


# ===================================================================== #
#  Interviews                                                             #
# ===================================================================== #

class TestInterviewRoutes:
    def test_directory(self):
        data = client.get("/interviews").json()
        assert data["total"] == 2
        assert data["resultCount"] == 2
        assert data["fraudCount"] == 1
        assert data["fxCount"] == 1
        assert data["interviews"][0]["shopType"] == "Pharmacy"

    def test_directory_filters(self):
        data = client.get("/interviews", params={"fraud": "true"}).json()
        assert [i["id"] for i in data["interviews"]] == ["2"]
        assert data["total"] == 2

        data = client.get("/interviews", params={"q": "saddar"}).json()
        assert [i["id"] for i in data["interviews"]] == ["1"]

    def test_detail_with_matched_transcript(self):
        data = client.get("/interviews/1").json()
        assert data["interview"]["dollarInquiry"] is True
        assert data["transcriptFileName"] == "Pharmacy Saddar.txt"

    def test_detail_without_transcript(self):
        data = client.get("/interviews/2").json()
        assert data["transcriptFileName"] is None

    def test_detail_not_found(self):
        assert client.get("/interviews/42").status_code == 404


# ===================================================================== #
#  Nexus                                                                  #
# ===================================================================== #

class TestNexusRoutes:
    def test_status(self, monkeypatch):
        monkeypatch.setattr(config, "NEXUS_API_KEY", "")
        data = client.get("/nexus").json()
        assert data["configured"] is False
        assert set(data["usage"]) == {"single", "bulk", "raw"}

    def test_raw_content(self, fake_nexus):
        res = client.post("/nexus", json={"content": "hello", "session_id": "s-1"})
        assert res.status_code == 200
        assert res.json()["success"] is True
        assert fake_nexus[0].content == "hello"

    def test_single_interview(self, fake_nexus):
        res = client.post("/nexus", json={"interview_id": "1"})
        assert res.status_code == 200
        assert res.json()["interview_id"] == "1"
        assert fake_nexus[0].session_id == "interview-1"

    def test_single_interview_not_found(self, fake_nexus):
        assert client.post("/nexus", json={"interview_id": "99"}).status_code == 404
        assert fake_nexus == []

    def test_single_interview_without_transcript(self, fake_nexus):
        res = client.post("/nexus", json={"interview_id": "2"})
        assert res.status_code == 400
        assert res.json()["detail"] == "Interview has no transcript"

    def test_bulk(self, fake_nexus):
        data = client.post("/nexus", json={"all": True}).json()
        assert data["total"] == 2
        assert data["successful"] == 1
        assert data["failed"] == 1
        assert data["success"] is False
        assert data["results"][1] == {"interview_id": "2", "success": False, "error": "No transcript"}
        assert len(fake_nexus) == 1

    def test_invalid_body(self, fake_nexus):
        assert client.post("/nexus", json={}).status_code == 400


# ===================================================================== #
#  Startup sync                                                           #
# ===================================================================== #

class TestStartupSync:
    def _boot(self):
        with TestClient(app) as booted:
            assert booted.get("/health").status_code == 200

    def test_runs_when_enabled_and_configured(self, monkeypatch):
        monkeypatch.setattr(config, "NEXUS_SYNC_ON_STARTUP", True)
        monkeypatch.setattr(config, "NEXUS_API_KEY", "test-key")
        sync = AsyncMock(return_value=SyncResult(synced=["1"], skipped=["2"]))
        with patch("zar_insights.main.sync_new_interviews_to_nexus", sync):
            self._boot()
        sync.assert_awaited_once()

    def test_skipped_without_key(self, monkeypatch):
        monkeypatch.setattr(config, "NEXUS_SYNC_ON_STARTUP", True)
        monkeypatch.setattr(config, "NEXUS_API_KEY", "")
        sync = AsyncMock(return_value=SyncResult())
        with patch("zar_insights.main.sync_new_interviews_to_nexus", sync):
            self._boot()
        sync.assert_not_awaited()

    def test_skipped_when_flag_off(self, monkeypatch):
        monkeypatch.setattr(config, "NEXUS_SYNC_ON_STARTUP", False)
        monkeypatch.setattr(config, "NEXUS_API_KEY", "test-key")
        sync = AsyncMock(return_value=SyncResult())
        with patch("zar_insights.main.sync_new_interviews_to_nexus", sync):
            self._boot()
        sync.assert_not_awaited()

    def test_missing_survey_does_not_block_startup(self, monkeypatch):
        monkeypatch.setattr(config, "NEXUS_SYNC_ON_STARTUP", True)
        monkeypatch.setattr(config, "NEXUS_API_KEY", "test-key")
        sync = AsyncMock(side_effect=FileNotFoundError("data.md"))
        with patch("zar_insights.main.sync_new_interviews_to_nexus", sync):
            self._boot()
        sync.assert_awaited_once()
