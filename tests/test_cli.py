"""
Tests for the command line interface.
"""

import json

import pytest
from typer.testing import CliRunner

from salonslots import __version__
from salonslots.cli.app import app

runner = CliRunner()

SALON_DATA = {
    "professionals": [
        {
            "id": 1,
            "name": "Ana Souza",
            "work_start_time": "09:00",
            "work_end_time": "18:00",
            "lunch_start_time": "12:00",
            "lunch_end_time": "13:00",
            "absences": [{"date": "2025-12-24"}],
            "exceptions": [{"start_date": "2026-01-05", "end_date": "2026-01-09", "description": "Férias"}],
        },
        {"id": 3, "name": "Carla Dias"},
    ],
    "services": [
        {"id": 2, "name": "Coloração", "duration": 90, "price": 15050},
        {"id": 4, "name": "Escova", "duration": 45},
    ],
    "appointments": [
        {
            "id": 10,
            "professional_id": 1,
            "appointment_date": "2025-12-22 10:00:00",
            "end_date": "2025-12-22 10:30:00",
            "client_name": "Marina",
            "service": "Corte",
        },
        {
            "id": 11,
            "professional_id": 1,
            "appointment_date": "2025-12-22 14:00:00",
            "end_date": "2025-12-22 15:30:00",
        },
    ],
}


@pytest.fixture
def config_path(tmp_path):
    (tmp_path / "salon.json").write_text(json.dumps(SALON_DATA), encoding="utf-8")
    path = tmp_path / "config.yaml"
    path.write_text("data_file: salon.json\ntimezone: America/Sao_Paulo\n", encoding="utf-8")
    return path


def test_slots_lists_free_times(config_path):
    result = runner.invoke(app, ["slots", "1", "--date", "2025-12-22", "--config", str(config_path)])

    assert result.exit_code == 0
    assert "12 horário(s)" in result.output
    assert "10:30" in result.output
    assert "10:00" not in result.output


def test_slots_with_service_duration(config_path):
    result = runner.invoke(
        app, ["slots", "1", "--date", "2025-12-22", "--service", "2", "--config", str(config_path)]
    )

    assert result.exit_code == 0
    assert "serviço de 90 min" in result.output


def test_slots_distinguishes_missing_schedule(config_path):
    no_schedule = runner.invoke(app, ["slots", "3", "--date", "2025-12-22", "--config", str(config_path)])
    absent = runner.invoke(app, ["slots", "1", "--date", "2025-12-24", "--config", str(config_path)])

    assert "não tem um horário de trabalho definido" in no_schedule.output
    assert "ausente" in absent.output

def test_slots_reports_time_off(config_path):
    result = runner.invoke(app, ["slots", "1", "--date", "2026-01-07", "--config", str(config_path)])

    assert result.exit_code == 0
    assert "afastado" in result.output


def test_slots_rejects_invalid_duration(config_path):
    result = runner.invoke(
        app, ["slots", "1", "--date", "2025-12-22", "--duration", "0", "--config", str(config_path)]
    )

    assert result.exit_code == 1
    assert "Erro" in result.output


def test_slots_unknown_professional(config_path):
    result = runner.invoke(app, ["slots", "99", "--date", "2025-12-22", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_check_reports_conflict(config_path):
    result = runner.invoke(
        app, ["check", "1", "--start", "2025-12-22 10:15", "--duration", "30", "--config", str(config_path)]
    )

    assert result.exit_code == 1
    assert "Conflito" in result.output
    assert "Marina" in result.output


def test_check_accepts_touching_booking(config_path):
    result = runner.invoke(
        app,
        ["check", "1", "--start", "2025-12-22 10:30", "--end", "2025-12-22 11:00", "--config", str(config_path)],
    )

    assert result.exit_code == 0
    assert "Horário livre" in result.output


def test_check_allows_editing_own_appointment(config_path):
    result = runner.invoke(
        app,
        ["check", "1", "--start", "2025-12-22 10:15", "--exclude", "10", "--config", str(config_path)],
    )

    assert result.exit_code == 0

def test_check_rejects_zero_duration(config_path):
    """An explicit zero is not replaced by the default duration."""
    result = runner.invoke(
        app, ["check", "1", "--start", "2025-12-22 11:00", "--duration", "0", "--config", str(config_path)]
    )

    assert result.exit_code == 1
    assert "Erro" in result.output
    assert "Horário livre" not in result.output


def test_professionals_table(config_path):
    result = runner.invoke(app, ["professionals", "--config", str(config_path)])

    assert result.exit_code == 0
    assert "Ana Souza" in result.output
    assert "Carla Dias" in result.output

def test_services_table(config_path):
    result = runner.invoke(app, ["services", "--config", str(config_path)])

    assert result.exit_code == 0
    assert "Coloração" in result.output
    assert "90 min" in result.output
    assert "R$ 150,50" in result.output
    assert "Escova" in result.output


def test_missing_config(tmp_path):
    result = runner.invoke(app, ["slots", "1", "--config", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output
