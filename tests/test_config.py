"""Tests für Konfiguration, Datenmodelle, Beispieldaten und CLI."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from pydantic import ValidationError

from config.defaults import SAMPLE_CURRICULUM, default_school_config, default_time_grid
from config.manager import ConfigManager
from config.schema import DayConfig, DayOfWeek, Stream, TimeGridConfig, TimeSlot
from conftest import build_config, build_data
from data.sample_data import SampleDataGenerator
from models.faculty import Faculty
from models.school_data import SchoolData
from models.standard import Standard
from models.subject import Subject
from models.timeslot import SlotRef


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:

    def test_time_grid(self):
        """6 Slots, Recess an Index 2, Mo-Fr aktiv, Samstag nicht."""
        tg = default_time_grid()
        assert len(tg.slots) == 6
        assert tg.recess_indices == {2}
        assert [d.day for d in tg.active_days()] == list(DayOfWeek)[:5]
        assert tg.get_day(DayOfWeek.SATURDAY).is_active is False

    def test_generator_defaults(self):
        gen = default_school_config().generator
        assert gen.max_per_day == 2
        assert gen.max_retries == 50
        assert gen.jitter == 10.0
        assert gen.adjacent_bonus == 1000.0
        assert gen.first_of_day_bonus == 100.0
        assert gen.seed is None

    def test_slots_for_day_is_prefix(self):
        tg = default_time_grid()
        short = DayConfig(day=DayOfWeek.SATURDAY, lecture_count=3)
        assert [s.index for s in tg.slots_for_day(short)] == [0, 1, 2]


class TestPydanticValidation:

    def _slots(self, indices):
        return [TimeSlot(index=i, start_time="08:00", end_time="08:50") for i in indices]

    def test_slot_index_gap_rejected(self):
        """Slot-Indizes müssen lückenlos 0..n-1 sein."""
        with pytest.raises(ValidationError):
            TimeGridConfig(slots=self._slots([0, 2]), days=[])

    def test_duplicate_day_rejected(self):
        with pytest.raises(ValidationError):
            TimeGridConfig(slots=self._slots([0]), days=[
                DayConfig(day=DayOfWeek.MONDAY, lecture_count=1),
                DayConfig(day=DayOfWeek.MONDAY, lecture_count=1),
            ])

    def test_lecture_count_above_slots_rejected(self):
        with pytest.raises(ValidationError):
            TimeGridConfig(slots=self._slots([0, 1]), days=[
                DayConfig(day=DayOfWeek.MONDAY, lecture_count=3),
            ])

    def test_negative_values_rejected(self):
        with pytest.raises(ValidationError):
            TimeSlot(index=-1, start_time="08:00", end_time="08:50")
        with pytest.raises(ValidationError):
            build_config(max_per_day=0)


class TestConfigManager:

    def _manager(self, tmp_path: Path) -> ConfigManager:
        mgr = ConfigManager()
        mgr.CONFIG_DIR = tmp_path
        mgr.DEFAULT_CONFIG = tmp_path / "school_config.yaml"
        return mgr

    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Config speichern, laden und validieren — vollständiger Roundtrip."""
        config = default_school_config()
        mgr = self._manager(tmp_path)
        mgr.save(config)
        assert mgr.DEFAULT_CONFIG.exists()

        loaded = mgr.load()
        assert loaded == config

    def test_yaml_has_comments(self, tmp_path: Path):
        mgr = self._manager(tmp_path)
        mgr.save(default_school_config())
        text = mgr.DEFAULT_CONFIG.read_text(encoding="utf-8")
        assert text.startswith("# ====")
        assert "─── Zeitraster ───" in text
        assert "harte Grenze" in text

    def test_first_run_check(self, tmp_path: Path):
        mgr = self._manager(tmp_path)
        assert mgr.first_run_check() is True
        mgr.save(default_school_config())
        assert mgr.first_run_check() is False

    def test_load_nonexistent_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ConfigManager().load(tmp_path / "not_there.yaml")

    def test_load_invalid_raises_value_error(self, tmp_path: Path):
        """Ungültiger Inhalt → ValueError mit Pydantic-Details."""
        path = tmp_path / "broken.yaml"
        path.write_text("school_name: X\ngenerator:\n  max_per_day: 0\n", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigManager().load(path)


# ─── MODELLE ──────────────────────────────────────────────────────────────────

class TestModels:

    def test_standard_name(self):
        assert Standard(id="10A", grade=10, division="A").name == "10-A"
        std = Standard(id="12SB", grade=12, stream=Stream.SCIENCE, division="B")
        assert std.name == "12-Science-B"
        assert std.label == "12-Science-B (English Medium)"
        assert Standard(id="5", grade=5).name == "5"

    def test_faculty_qualification(self):
        """Qualifiziert nur wenn Fach UND Standard passen."""
        fac = Faculty(id="F01", name="A", subject_ids=["9A-MAT"], standard_ids=["9A"])
        assert fac.is_qualified("9A-MAT", "9A")
        assert not fac.is_qualified("9A-MAT", "9B")
        assert not fac.is_qualified("9A-ENG", "9A")

    def test_faculty_unavailability(self):
        fac = Faculty(id="F01", name="A",
                      unavailable_slots=[SlotRef(DayOfWeek.MONDAY, 0)])
        assert fac.is_unavailable(DayOfWeek.MONDAY, 0)
        assert not fac.is_unavailable(DayOfWeek.MONDAY, 1)
        assert not fac.is_unavailable(DayOfWeek.TUESDAY, 0)

    def test_slot_ref(self):
        """SlotRef ist hashbar und hat eine lesbare ID."""
        ref = SlotRef(DayOfWeek.FRIDAY, 4)
        assert ref == SlotRef(DayOfWeek.FRIDAY, 4)
        assert len({ref, SlotRef(DayOfWeek.FRIDAY, 4)}) == 1
        assert ref.slot_id == "Friday-4"
        assert str(ref) == "Fri 4"

    def test_subject_color_optional(self):
        subj = Subject(id="9A-MAT", name="Mathematics", standard_id="9A", lectures_per_week=6)
        assert subj.color is None


# ─── BEISPIELDATEN ────────────────────────────────────────────────────────────

class TestSampleData:

    @pytest.fixture(scope="class")
    def data(self) -> SchoolData:
        return SampleDataGenerator(default_school_config(), seed=42).generate()

    def test_standards(self, data):
        """Zwei Divisions pro Stufe der Stundentafel."""
        assert [s.id for s in data.standards] == ["9A", "9B", "10A", "10B"]

    def test_subjects_follow_curriculum(self, data):
        for std in data.standards:
            hours = {s.name: s.lectures_per_week for s in data.subjects_for(std.id)}
            assert hours == SAMPLE_CURRICULUM[std.grade]

    def test_every_subject_has_faculty(self, data):
        for subj in data.subjects:
            assert any(f.is_qualified(subj.id, subj.standard_id) for f in data.faculties)

    def test_feasible(self, data):
        report = data.validate_feasibility()
        assert report.is_feasible, report.errors

    def test_deterministic(self, data):
        again = SampleDataGenerator(default_school_config(), seed=42).generate()
        assert [f.name for f in again.faculties] == [f.name for f in data.faculties]

    def test_restricted_faculty(self, data):
        assert sum(1 for f in data.faculties if f.unavailable_slots) == 1

    def test_invalid_divisions(self):
        with pytest.raises(ValueError):
            SampleDataGenerator(default_school_config(), divisions=0)


# ─── SCHOOLDATA ───────────────────────────────────────────────────────────────

class TestSchoolData:

    def test_feasibility_no_subjects(self, school_config):
        """Ohne Fächer → Fehler, Generierung wird verweigert."""
        report = SchoolData(config=school_config).validate_feasibility()
        assert not report.is_feasible
        assert any("Keine Fächer" in e for e in report.errors)

    def test_feasibility_errors(self, mini_data):
        """Doppelte ID, unbekannter Standard und Stunden ≤ 0 sind Fehler."""
        bad = mini_data.model_copy(update={"subjects": mini_data.subjects + [
            Subject(id="9A-MAT", name="Mathematics", standard_id="9A", lectures_per_week=2),
            Subject(id="7X-ART", name="Art", standard_id="7X", lectures_per_week=0),
        ]})
        report = bad.validate_feasibility()
        assert not report.is_feasible
        text = "\n".join(report.errors)
        assert "9A-MAT" in text
        assert "7X" in text
        assert "muss > 0" in text

    def test_feasibility_warnings(self, mini_data):
        """Fach ohne Lehrkraft und Sperrzeit am Samstag → Warnungen."""
        fac = mini_data.faculties[0].model_copy(update={
            "unavailable_slots": [SlotRef(DayOfWeek.SATURDAY, 0)],
        })
        data = mini_data.model_copy(update={
            "faculties": [fac],
        })
        report = data.validate_feasibility()
        assert report.is_feasible
        text = "\n".join(report.warnings)
        assert "keine qualifizierte Lehrkraft" in text
        assert "inaktiven Tag" in text

    def test_feasibility_clean(self, mini_data):
        report = mini_data.validate_feasibility()
        assert report.is_feasible
        assert report.warnings == []

    def test_feasibility_subject_above_teachable(self):
        """Ein Fach mit mehr Stunden als Unterrichtsslots der Woche → eigene Warnung."""
        # 5 Tage × 1 Slot = 5 Unterrichtsslots, Tageslimit × Tage = 10
        config = build_config(n_slots=1, lecture_count=1, recess=())
        data = build_data(
            config,
            subjects=[("9A-MAT", "Mathematics", "9A", 6)],
            faculties=[("F01", ["9A-MAT"])],
        )
        report = data.validate_feasibility()
        assert report.is_feasible
        subject_warnings = [w for w in report.warnings if w.startswith("Fach 'Mathematics'")]
        assert len(subject_warnings) == 1
        assert "nur 5 Unterrichtsslots" in subject_warnings[0]

    def test_derived_faculty_standards(self, school_config):
        data = build_data(
            school_config,
            subjects=[("9A-MAT", "Mathematics", "9A", 4), ("10B-MAT", "Mathematics", "10B", 4)],
            faculties=[("F01", ["9A-MAT", "10B-MAT", "ghost"])],
        )
        assert data.faculties[0].standard_ids == ["9A", "10B"]

    def test_json_roundtrip(self, tmp_path: Path, mini_data):
        path = tmp_path / "data.json"
        mini_data.save_json(path)
        loaded = SchoolData.load_json(path)
        assert loaded.subjects == mini_data.subjects
        assert loaded.faculties == mini_data.faculties
        assert loaded.created_at is not None
        assert json.loads(path.read_text(encoding="utf-8"))["data_version"] == "1.0"

    def test_load_missing_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            SchoolData.load_json(tmp_path / "missing.json")


# ─── CLI ──────────────────────────────────────────────────────────────────────

class TestCli:

    @pytest.fixture
    def runner(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        return CliRunner()

    def _history(self):
        from main import DEFAULT_HISTORY_JSON
        from solver.history import ScheduleHistory
        return ScheduleHistory.load_json(DEFAULT_HISTORY_JSON)

    def test_help(self):
        from main import cli
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_config_show_no_file(self, runner):
        """config show ohne Konfiguration → Fehlermeldung."""
        from main import cli
        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 1
        assert "Keine Konfiguration" in result.output

    def test_full_workflow(self, runner):
        """init → sample → validate → generate → show → history → check."""
        from main import cli

        assert runner.invoke(cli, ["init"]).exit_code == 0
        assert runner.invoke(cli, ["config", "show"]).exit_code == 0
        assert runner.invoke(cli, ["sample", "--seed", "1"]).exit_code == 0
        assert runner.invoke(cli, ["validate"]).exit_code == 0

        result = runner.invoke(cli, ["generate", "--seed", "3"])
        assert result.exit_code == 0, result.output
        assert "Version 1" in result.output
        assert runner.invoke(cli, ["generate", "--seed", "4"]).exit_code == 0

        history = self._history()
        assert [s.name for s in history.versions] == ["Version 2", "Version 1"]
        assert history.active.name == "Version 2"

        result = runner.invoke(cli, ["show", "--standard", "9A"])
        assert result.exit_code == 0
        assert "RECESS" in result.output

        assert runner.invoke(cli, ["history", "list"]).exit_code == 0
        assert runner.invoke(cli, ["history", "activate", "Version 1"]).exit_code == 0
        assert self._history().active.name == "Version 1"
        assert runner.invoke(
            cli, ["history", "rename", "Version 1", "Final"]
        ).exit_code == 0
        assert self._history().active.name == "Final"
        assert runner.invoke(cli, ["history", "delete", "Final", "--yes"]).exit_code == 0
        assert self._history().active.name == "Version 2"

        assert runner.invoke(cli, ["check"]).exit_code == 0

    def test_edit_cell(self, runner):
        """Zelle leeren und regelwidrig setzen; check meldet den Fehler."""
        from main import cli, DEFAULT_DATA_JSON

        runner.invoke(cli, ["init"])
        runner.invoke(cli, ["sample"])
        runner.invoke(cli, ["generate", "--seed", "2"])

        result = runner.invoke(cli, ["edit-cell", "9A", "Mon", "0", "--clear"])
        assert result.exit_code == 0, result.output
        grid = self._history().active.get_schedule("9A")
        assert grid.get_cell(DayOfWeek.MONDAY, 0) is None

        data = SchoolData.load_json(DEFAULT_DATA_JSON)
        outsider = next(
            f for f in data.faculties if not f.is_qualified("9A-MAT", "9A")
        )
        result = runner.invoke(cli, [
            "edit-cell", "9A", "monday", "0",
            "--subject", "9A-MAT", "--faculty", outsider.id,
        ])
        assert result.exit_code == 0, result.output
        assert runner.invoke(cli, ["check"]).exit_code == 1

    def test_edit_cell_rejects_recess(self, runner):
        from main import cli

        runner.invoke(cli, ["init"])
        runner.invoke(cli, ["sample"])
        runner.invoke(cli, ["generate", "--seed", "2"])
        result = runner.invoke(cli, ["edit-cell", "9A", "Tuesday", "2", "--clear"])
        assert result.exit_code == 1
        assert "Recess" in result.output

    def test_generate_refuses_without_subjects(self, runner):
        """Datensatz ohne Fächer → Generierung abgebrochen, kein Verlauf."""
        from main import cli, DEFAULT_DATA_JSON

        SchoolData(config=default_school_config()).save_json(DEFAULT_DATA_JSON)
        result = runner.invoke(cli, ["generate"])
        assert result.exit_code == 1
        assert "abgebrochen" in result.output
        assert len(self._history()) == 0

    def test_generate_shows_warnings(self, runner):
        """Nur Warnungen → Check wird angezeigt, Generierung läuft trotzdem."""
        from main import cli, DEFAULT_DATA_JSON

        data = build_data(
            default_school_config(),
            subjects=[("9A-MAT", "Mathematics", "9A", 2), ("9A-SCI", "Science", "9A", 2)],
            faculties=[("F01", ["9A-MAT"])],
        )
        data.save_json(DEFAULT_DATA_JSON)
        result = runner.invoke(cli, ["generate", "--seed", "1"])
        assert result.exit_code == 0, result.output
        assert "Machbarkeits-Check" in result.output
        assert "Warnungen:" in result.output
        assert self._history().active.name == "Version 1"

    def test_show_without_schedule(self, runner):
        from main import cli

        runner.invoke(cli, ["init"])
        runner.invoke(cli, ["sample"])
        result = runner.invoke(cli, ["show"])
        assert result.exit_code == 1
        assert "Kein aktiver Stundenplan" in result.output
