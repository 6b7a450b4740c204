"""Tests for the HTTP API layer.

Covers:
  - Context manifest (compact + full)
  - Schema / defaults endpoints
  - Simulation endpoints (/simulate, /simulate/flat, /simulate/csv,
    /simulate/sensitivity, /simulate/narrative)
  - Deep merge utility
  - Narrative generation
"""

from __future__ import annotations

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from debt_recycling_sim.api.context import (
    _extract_params,
    build_context,
    get_default_scenario,
    get_scenario_schema,
)
from debt_recycling_sim.api.narrative import generate_narrative
from debt_recycling_sim.api.server import _build_scenario, _deep_merge, app
from debt_recycling_sim.config import InvestmentConfig, LoanConfig, SimulationConfig
from debt_recycling_sim.engine.simulation import run_simulation
from debt_recycling_sim.export import CSV_HEADER


client = TestClient(app)

SHORT = {"projection": {"projection_years": 5}}


# ═══════════════════════════════════════════════════════════════════════════
# Context manifest tests
# ═══════════════════════════════════════════════════════════════════════════


class TestContext:
    """Tests for the context manifest generator."""

    def test_build_context_full(self):
        ctx = build_context("full")
        assert ctx.simulator_name == "Debt Recycling Simulator"
        assert ctx.version == "1.0"
        assert len(ctx.strategy_overview) > 100
        assert len(ctx.key_formulas) >= 5
        assert len(ctx.input_sections) == 6
        assert len(ctx.key_outputs) >= 10
        assert len(ctx.endpoints) >= 6
        assert len(ctx.interpretation_guide) > 100

    def test_build_context_compact(self):
        ctx = build_context("compact")
        assert ctx.strategy_overview == ""
        assert ctx.key_formulas == []
        assert ctx.interpretation_guide == ""
        # Sections still present
        assert len(ctx.input_sections) == 6
        assert len(ctx.key_outputs) >= 10

    def test_input_sections_have_parameters(self):
        for section in build_context("compact").input_sections:
            assert section.section
            assert section.description, f"Section {section.section} has no description"
            assert len(section.parameters) > 0, f"Section {section.section} has no parameters"

    def test_section_names_match_config(self):
        names = [s.section for s in build_context("compact").input_sections]
        assert names == list(SimulationConfig.model_fields)

    def test_extract_params_constraints(self):
        params = {p.name: p for p in _extract_params(InvestmentConfig)}
        assert params["franked_portion_pct"].constraints == {"min": 0, "max": 100}
        assert params["invest_growth_pct"].constraints == {"min": 0, "max": 1_000}
        assert params["franked_portion_pct"].type == "float"
        assert params["invest_growth_pct"].type == "float"

    def test_extract_params_defaults(self):
        params = {p.name: p for p in _extract_params(LoanConfig)}
        assert params["home_loan_start"].default == 600_000
        assert params["home_loan_start"].description


class TestSchemaEndpoints:
    def test_schema(self):
        schema = get_scenario_schema()
        assert "properties" in schema
        assert "loans" in schema["properties"]

    def test_defaults_round_trip(self):
        assert SimulationConfig(**get_default_scenario()) == SimulationConfig()

    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_root(self):
        resp = client.get("/")
        assert resp.status_code == 200
        assert "start_here" in resp.json()

    def test_context_endpoint(self):
        resp = client.get("/context", params={"detail_level": "compact"})
        assert resp.status_code == 200
        assert resp.json()["key_formulas"] == []

    def test_context_bad_detail_level(self):
        assert client.get("/context", params={"detail_level": "verbose"}).status_code == 422

    def test_schema_endpoint(self):
        resp = client.get("/schema")
        assert resp.status_code == 200
        assert "properties" in resp.json()

    def test_defaults_endpoint(self):
        resp = client.get("/scenario/defaults")
        assert resp.status_code == 200
        assert resp.json()["loans"]["home_loan_start"] == 600_000


# ═══════════════════════════════════════════════════════════════════════════
# Simulation endpoints
# ═══════════════════════════════════════════════════════════════════════════


class TestSimulate:
    def test_empty_request_uses_defaults(self):
        resp = client.post("/simulate", json={})
        assert resp.status_code == 200
        body = resp.json()
        assert len(body["result"]["years"]) == 20
        assert "OUTCOME AFTER 20 YEARS" in body["narrative"]

    def test_partial_override(self):
        resp = client.post("/simulate", json={"scenario": {
            "loans": {"kickstart_from_offset": 0}, **SHORT,
        }})
        assert resp.status_code == 200
        result = resp.json()["result"]
        assert len(result["years"]) == 5
        assert result["summary"]["kickstart_used"] == 0

    def test_matches_engine(self):
        resp = client.post("/simulate", json={"scenario": SHORT})
        expected = run_simulation(_build_scenario(SHORT))
        assert resp.json()["result"]["summary"]["final_advantage_b"] == pytest.approx(
            expected.summary.final_advantage_b
        )

    def test_bad_numbers_are_coerced(self):
        resp = client.post("/simulate", json={"scenario": {
            "loans": {"home_rate_pct": -4, "home_loan_start": "lots"}, **SHORT,
        }})
        assert resp.status_code == 200

    def test_extreme_growth_serializes(self):
        resp = client.post("/simulate/flat", json={"inputs": {
            "homeValueGrowthPct": 200_000, "investGrowthPct": 200_000, "projectionYears": 100,
        }})
        assert resp.status_code == 200
        assert len(resp.json()["result"]["years"]) == 100

    def test_unknown_field_rejected(self):
        resp = client.post("/simulate", json={"scenario": {"loans": {"bogus": 1}}})
        assert resp.status_code == 422

    def test_unknown_section_rejected(self):
        resp = client.post("/simulate", json={"scenario": {"pets": {}}})
        assert resp.status_code == 422

    def test_zero_years(self):
        resp = client.post("/simulate", json={"scenario": {"projection": {"projection_years": 0}}})
        assert resp.status_code == 200
        body = resp.json()
        assert body["result"]["years"] == []
        assert body["result"]["summary"]["final_advantage_b"] is None


class TestSimulateFlat:
    def test_camel_case_inputs(self):
        resp = client.post("/simulate/flat", json={"inputs": {
            "homeLoanStart": 500_000, "projectionYears": 3,
        }})
        assert resp.status_code == 200
        years = resp.json()["result"]["years"]
        assert len(years) == 3
        assert years[0]["home_loan_a"] < 500_000

    def test_unknown_key(self):
        resp = client.post("/simulate/flat", json={"inputs": {"homeLoan": 1}})
        assert resp.status_code == 422
        assert "homeLoan" in resp.json()["detail"]


class TestSimulateCsv:
    def test_csv(self):
        resp = client.post("/simulate/csv", json={"scenario": SHORT})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        lines = resp.text.strip().splitlines()
        assert lines[0] == ",".join(CSV_HEADER)
        assert len(lines) == 6


class TestSimulateSensitivity:
    def test_default_sweeps(self):
        resp = client.post("/simulate/sensitivity", json={"scenario": SHORT})
        assert resp.status_code == 200
        body = resp.json()
        assert len(body["tornado_bars"]) == 7
        deltas = [bar["delta_advantage"] for bar in body["tornado_bars"]]
        assert deltas == sorted(deltas, reverse=True)

    def test_custom_sweep(self):
        resp = client.post("/simulate/sensitivity", json={
            "scenario": SHORT,
            "sweep_params": [{"path": "loans.home_rate_pct", "low_pct": -0.5, "high_pct": 0.5}],
        })
        assert resp.status_code == 200
        (bar,) = resp.json()["tornado_bars"]
        assert bar["param_name"] == "loans.home_rate_pct"
        assert bar["low_value"] == pytest.approx(2.995)

    def test_non_field_path_ignored(self):
        resp = client.post("/simulate/sensitivity", json={
            "scenario": SHORT,
            "sweep_params": [{"path": "home.model_config"}, {"path": "loans.__class__"}],
        })
        assert resp.status_code == 200
        assert resp.json()["tornado_bars"] == []

    def test_missing_path(self):
        resp = client.post("/simulate/sensitivity", json={
            "scenario": SHORT,
            "sweep_params": [{"name": "No path"}],
        })
        assert resp.status_code == 422


class TestSimulateNarrative:
    def test_narrative_endpoint(self):
        resp = client.post("/simulate/narrative", json={"scenario": SHORT})
        assert resp.status_code == 200
        body = resp.json()
        assert "YEAR YOU COULD CLEAR ALL DEBT" in body["narrative"]
        metrics = body["headline_metrics"]
        assert metrics["effective_base_monthly_repayment"] == 4000
        assert set(metrics) >= {"final_net_wealth_a", "final_net_wealth_b", "final_advantage_b", "debt_free_year"}

    def test_zero_years(self):
        resp = client.post("/simulate/narrative", json={"scenario": {"projection": {"projection_years": 0}}})
        assert resp.status_code == 200
        assert resp.json()["headline_metrics"]["effective_base_monthly_repayment"] is None


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════


class TestDeepMerge:
    def test_nested_merge(self):
        base = {"a": {"x": 1, "y": 2}, "b": 3}
        assert _deep_merge(base, {"a": {"y": 20}}) == {"a": {"x": 1, "y": 20}, "b": 3}

    def test_non_dict_replaces(self):
        assert _deep_merge({"a": {"x": 1}}, {"a": 5}) == {"a": 5}

    def test_new_key_added(self):
        assert _deep_merge({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}

    def test_build_scenario_raises_http_422(self):
        with pytest.raises(HTTPException) as exc_info:
            _build_scenario({"tax": {"rate": 30}})
        assert exc_info.value.status_code == 422


class TestNarrative:
    def test_sections(self, config: SimulationConfig):
        text = generate_narrative(run_simulation(config))
        for heading in ("OUTCOME AFTER 20 YEARS", "YEAR YOU COULD CLEAR ALL DEBT", "REPAYMENTS", "OBSERVATIONS"):
            assert heading in text

    def test_floor_noted(self, config: SimulationConfig):
        low = config.model_copy(update={
            "repayment": config.repayment.model_copy(update={"base_monthly_repayment": 1_000}),
        })
        assert "below the minimum" in generate_narrative(run_simulation(low))

    def test_not_debt_free(self, config: SimulationConfig):
        short = config.model_copy(update={
            "projection": config.projection.model_copy(update={"projection_years": 1}),
        })
        assert "Not within projection" in generate_narrative(run_simulation(short))

    def test_empty_run(self, config: SimulationConfig):
        empty = config.model_copy(update={
            "projection": config.projection.model_copy(update={"projection_years": 0}),
        })
        assert "No projection years were simulated" in generate_narrative(run_simulation(empty))
