"""Unit tests for configuration models, defaults and core helpers."""

import logging
import logging.handlers
import os
import subprocess
import sys
import textwrap

import pytest
import structlog
from pydantic import ValidationError

from patrimoine_sim.application.services.defaults import (
    default_av,
    default_horizon,
    default_per,
    default_scpi,
    default_scpi_credit,
)
from patrimoine_sim.core.exceptions import InvalidParameterError, PatrimoineSimError
from patrimoine_sim.core import logging as sim_logging
from patrimoine_sim.core.logging import configure_logging, get_logger
from patrimoine_sim.core.settings import AppSettings, get_settings
from patrimoine_sim.domain.models import (
    AggregatedResults,
    EnvelopeConfig,
    EnvelopeType,
    FeeCurves,
    LivretResult,
    SCPICreditConfig,
)


REQUIRED = {"initial_capital": 1_000.0, "monthly_contribution": 100.0, "rate": 4.0, "tmi": 30.0}


class TestEnvelopeConfig:
    """Tests for EnvelopeConfig validation."""

    def test_defaults(self):
        config = EnvelopeConfig(**REQUIRED)
        assert config.enabled
        assert config.entry_fees == 0
        assert config.jouissance_months == 0

    @pytest.mark.parametrize("field", sorted(REQUIRED))
    def test_required_fields(self, field):
        """Amounts, yield and tax bracket must be given explicitly."""
        values = {k: v for k, v in REQUIRED.items() if k != field}
        with pytest.raises(ValidationError):
            EnvelopeConfig(**values)

    @pytest.mark.parametrize("field,value", [
        ("initial_capital", -1),
        ("monthly_contribution", -50),
        ("rate", 101),
        ("entry_fees", -0.1),
        ("mgmt_fees", 150),
        ("social_charges", 100.5),
        ("tmi", -3),
        ("jouissance_months", -1),
    ])
    def test_out_of_range_rejected(self, field, value):
        with pytest.raises(ValidationError):
            EnvelopeConfig(**{**REQUIRED, field: value})

    def test_assignment_validated(self):
        """Callers mutating a config keep it valid."""
        config = EnvelopeConfig(**REQUIRED)
        config.monthly_contribution = 300
        assert config.monthly_contribution == 300
        with pytest.raises(ValidationError):
            config.monthly_contribution = -300


class TestSCPICreditConfig:

    def test_derived_values(self):
        config = SCPICreditConfig(loan_amount=100_000, down_payment=20_000, loan_years=20)
        assert config.total_investment == 120_000
        assert config.loan_months == 240

    @pytest.mark.parametrize("field,value", [
        ("loan_amount", -1),
        ("down_payment", -1),
        ("loan_years", 0),
        ("interest_rate", -0.5),
        ("borrower_age", 12),
    ])
    def test_out_of_range_rejected(self, field, value):
        with pytest.raises(ValidationError):
            SCPICreditConfig(**{field: value})


class TestEnvelopeType:

    def test_values(self):
        assert EnvelopeType("scpi-credit") is EnvelopeType.SCPI_CREDIT
        assert EnvelopeType.AV == "av"


class TestResultModels:

    def test_empty_aggregate(self):
        results = AggregatedResults()
        assert results.livret_difference == 0
        assert results.livret_difference_pct == 0
        assert results.chart_frame().empty

    def test_livret_difference_pct(self):
        results = AggregatedResults(total_final=150.0, livret=LivretResult(capital=100.0))
        assert results.livret_difference == 50.0
        assert results.livret_difference_pct == pytest.approx(50.0)

    def test_fee_curves_difference(self):
        curves = FeeCurves(bank_curve=[100.0, 110.0], solution_curve=[95.0, 120.0], crossover_month=1)
        assert curves.final_difference == 10.0
        assert FeeCurves().final_difference == 0.0


class TestDefaults:
    """Tests for the default envelope factories."""

    def test_fresh_objects(self):
        first = default_scpi()
        first.monthly_contribution = 999
        assert default_scpi().monthly_contribution == 200

    def test_credit_disabled_by_default(self):
        assert not default_scpi_credit().enabled
        assert default_scpi_credit().loan_years == 25

    def test_wrappers(self):
        assert default_av().social_charges == pytest.approx(17.2)
        assert default_per().tmi == 30
        assert default_per().social_charges == 0
        assert default_av().entry_fees == default_per().entry_fees
        assert default_av().mgmt_fees == pytest.approx(1.0)
        assert default_per().mgmt_fees == pytest.approx(1.0)

    def test_default_horizon(self, fresh_settings, monkeypatch):
        assert default_horizon() == 25
        monkeypatch.setenv("PATRIMOINE_DEFAULT_HORIZON_YEARS", "15")
        get_settings.cache_clear()
        assert default_horizon() == 15


class TestSettings:

    def test_defaults(self, fresh_settings):
        settings = get_settings()
        assert settings.max_horizon_years == 40
        assert settings.livret_rate_pct == 1.0
        assert settings.scpi_revaluation_pct == 1.0

    def test_cached(self, fresh_settings):
        assert get_settings() is get_settings()

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PATRIMOINE_LIVRET_RATE_PCT", "3")
        assert AppSettings().livret_rate_pct == 3.0

    def test_invalid_env_rejected(self, monkeypatch):
        monkeypatch.setenv("PATRIMOINE_DEFAULT_HORIZON_YEARS", "0")
        with pytest.raises(ValidationError):
            AppSettings()


class TestExceptions:

    def test_invalid_parameter_message(self):
        err = InvalidParameterError("years", 0, "horizon must be at least one year")
        assert str(err) == "Invalid parameter 'years': 0 - horizon must be at least one year"
        assert err.param_name == "years"
        assert err.value == 0
        assert isinstance(err, PatrimoineSimError)

    def test_message_without_reason(self):
        assert str(InvalidParameterError("rate", -1)) == "Invalid parameter 'rate': -1"


class TestLogging:

    def test_configure_idempotent(self):
        configure_logging()
        configure_logging(level="DEBUG")
        assert get_logger() is not None

    def test_bound_name(self):
        configure_logging()
        with structlog.testing.capture_logs() as logs:
            get_logger("patrimoine_sim.test").info("event_emitted", value=1)
        assert logs[0]["event"] == "event_emitted"
        assert logs[0]["logger_name"] == "patrimoine_sim.test"

    def test_get_logger_configures_nothing(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        get_logger("patrimoine_sim.quiet")
        assert root.handlers == handlers
        assert root.level == level

    def test_import_keeps_host_logging(self, tmp_path):
        """Importing the engine leaves the host's root handlers, level and files alone."""
        script = textwrap.dedent("""
            import logging
            host = logging.StreamHandler()
            root = logging.getLogger()
            root.addHandler(host)
            root.setLevel(logging.WARNING)
            import patrimoine_sim
            import patrimoine_sim.application.services.aggregator
            print(host in root.handlers, root.level)
        """)
        project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
        env = {**os.environ, "PYTHONPATH": project_root}
        env.pop("PYTEST_CURRENT_TEST", None)
        out = subprocess.run(
            [sys.executable, "-c", script],
            cwd=tmp_path, env=env, capture_output=True, text=True, check=True,
        )
        assert out.stdout.split() == ["True", str(logging.WARNING)]
        assert list(tmp_path.iterdir()) == []

    def test_log_file_opt_in(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sim_logging, "_configured", False)
        log_file = tmp_path / "logs" / "engine.log"
        configure_logging(level="INFO", log_file=log_file)
        root = logging.getLogger()
        file_handlers = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        try:
            assert log_file.exists()
            assert len(file_handlers) == 1
        finally:
            for handler in file_handlers:
                root.removeHandler(handler)
                handler.close()
