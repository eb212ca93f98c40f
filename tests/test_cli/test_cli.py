"""End-to-end tests for the typer CLI using a temporary config and database."""

from __future__ import annotations

import json
from datetime import date

import pytest
from typer.testing import CliRunner

from career_pathfinder.cli import app
from career_pathfinder.db.connection import get_connection
from career_pathfinder.db.repositories.attempt_repo import QuizAttemptRepository
from career_pathfinder.taxonomy.career_taxonomy import CareerCategory

from conftest import CATALOG_FILE, QUESTIONS_FILE

runner = CliRunner()

_ALL_B = ["-a", "1=b", "-a", "2=b", "-a", "3=b", "-a", "4=b", "-a", "5=b"]


@pytest.fixture
def cfg(tmp_path):
    """Write a config TOML pointing every path into ``tmp_path``."""
    path = tmp_path / "test.toml"
    path.write_text(
        f"""
[database]
db_path = "{(tmp_path / 'db' / 'quiz.db').as_posix()}"
wal_mode = false

[quiz]
questions_file = "{QUESTIONS_FILE.as_posix()}"
catalog_file = "{CATALOG_FILE.as_posix()}"
require_complete = true
secondary_count = 2

[output]
export_dir = "{(tmp_path / 'outputs').as_posix()}"

[logging]
level = "WARNING"
log_file = "{(tmp_path / 'logs' / 'test.log').as_posix()}"
""",
        encoding="utf-8",
    )
    return path


def _invoke(cfg, *args, **kwargs):
    return runner.invoke(app, [*args, "--config", str(cfg)], **kwargs)


def _stored(tmp_path, user="alice"):
    with get_connection(tmp_path / "db" / "quiz.db") as conn:
        return QuizAttemptRepository(conn).list_for_user(user)


class TestSetupCommands:
    def test_validate_config(self, cfg):
        result = _invoke(cfg, "validate-config")
        assert result.exit_code == 0, result.output
        assert "(5 questions)" in result.output
        assert "[OK] Config valid." in result.output

    def test_validate_config_missing_file(self, tmp_path):
        result = runner.invoke(app, ["validate-config", "--config", str(tmp_path / "nope.toml")])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output

    def test_validate_config_bad_question_bank(self, cfg, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("[]", encoding="utf-8")
        cfg.write_text(
            cfg.read_text(encoding="utf-8").replace(QUESTIONS_FILE.as_posix(), bad.as_posix()),
            encoding="utf-8",
        )
        result = _invoke(cfg, "validate-config")
        assert result.exit_code == 1
        assert "Quiz data invalid" in result.output

    def test_init_db(self, cfg, tmp_path):
        result = _invoke(cfg, "init-db")
        assert result.exit_code == 0, result.output
        assert (tmp_path / "db" / "quiz.db").exists()

    def test_questions(self, cfg):
        result = _invoke(cfg, "questions")
        assert result.exit_code == 0
        assert "Question 5 of 5" in result.output


class TestRecommend:
    def test_all_b_backend(self, cfg):
        result = _invoke(cfg, "recommend", *_ALL_B)
        assert result.exit_code == 0, result.output
        assert "#1  Backend Development" in result.output

    def test_json_output(self, cfg):
        result = _invoke(cfg, "recommend", *_ALL_B, "--json")
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["primary"]["category"] == "backend"
        assert payload["scores"]["devops"] == 10

    def test_incomplete_rejected_by_default(self, cfg):
        result = _invoke(cfg, "recommend", "-a", "1=a")
        assert result.exit_code == 1
        assert "Please answer all questions" in result.output

    def test_allow_partial(self, cfg):
        result = _invoke(cfg, "recommend", "-a", "1=a", "--allow-partial")
        assert result.exit_code == 0, result.output
        assert "#1  UI/UX Design" in result.output

    def test_last_answer_wins(self, cfg):
        result = _invoke(cfg, "recommend", "-a", "1=a", "-a", "1=b", "--allow-partial", "--json")
        payload = json.loads(result.output)
        assert payload["primary"]["category"] == "backend"
        assert payload["answers"] == [{"question_id": 1, "option_id": "b"}]

    def test_unknown_option(self, cfg):
        result = _invoke(cfg, "recommend", "-a", "1=z", "--allow-partial")
        assert result.exit_code == 1
        assert "Unknown option 'z'" in result.output

    def test_malformed_answer(self, cfg):
        result = _invoke(cfg, "recommend", "-a", "one=b")
        assert result.exit_code == 1
        assert "must be an integer" in result.output

    def test_save_requires_user(self, cfg):
        result = _invoke(cfg, "recommend", *_ALL_B, "--save")
        assert result.exit_code == 1
        assert "--save requires --user" in result.output

    def test_save_persists_attempt(self, cfg, tmp_path):
        result = _invoke(cfg, "recommend", *_ALL_B, "--user", "alice", "--save")
        assert result.exit_code == 0, result.output
        stored = _stored(tmp_path)
        assert len(stored) == 1
        assert stored[0].category is CareerCategory.BACKEND
        assert stored[0].score == 18

    def test_blank_user_rejected_before_scoring(self, cfg, tmp_path):
        result = _invoke(cfg, "recommend", *_ALL_B, "--user", "   ", "--save")
        assert result.exit_code == 1
        assert "[ERROR] --user must be a non-empty user id." in result.output
        assert "Backend" not in result.output
        assert not (tmp_path / "db" / "quiz.db").exists()

    def test_saved_user_id_is_stripped(self, cfg, tmp_path):
        result = _invoke(cfg, "recommend", *_ALL_B, "--user", "  alice ", "--save")
        assert result.exit_code == 0, result.output
        assert "for user 'alice'" in result.output
        assert len(_stored(tmp_path, "alice")) == 1


class TestTakeQuiz:
    def test_interactive_flow_with_back_and_typo(self, cfg, tmp_path):
        keystrokes = "\n".join(["z", "b", "back", "c", "b", "b", "b", "b"]) + "\n"
        result = _invoke(cfg, "take-quiz", "--user", "alice", "--export", input=keystrokes)
        assert result.exit_code == 0, result.output
        assert "'z' is not an option" in result.output
        assert "[OK] Saved attempt #1" in result.output

        stored = _stored(tmp_path)
        assert stored[0].category is CareerCategory.BACKEND
        assert stored[0].score == 15
        assert dict((a.question_id, a.option_id) for a in stored[0].answers)[1] == "c"

        reports = list((tmp_path / "outputs" / "recommendations").glob("recommendations_alice_*.json"))
        assert len(reports) == 1

    def test_no_save(self, cfg, tmp_path):
        result = _invoke(cfg, "take-quiz", "--user", "bob", "--no-save", input="a\n" * 5)
        assert result.exit_code == 0, result.output
        assert "Saved attempt" not in result.output
        assert not (tmp_path / "db" / "quiz.db").exists()

    def test_blank_user_rejected_before_questions(self, cfg):
        result = _invoke(cfg, "take-quiz", "--user", " ", input="a\n" * 5)
        assert result.exit_code == 1
        assert "[ERROR] --user must be a non-empty user id." in result.output
        assert "Question 1 of 5" not in result.output


class TestHistoryCommands:
    @pytest.fixture
    def saved(self, cfg):
        for option in ("b", "c"):
            answers = [arg for q in range(1, 6) for arg in ("-a", f"{q}={option}")]
            _invoke(cfg, "recommend", *answers, "--user", "alice", "--save")
        return cfg

    def test_history(self, saved):
        result = _invoke(saved, "history", "--user", "alice")
        assert result.exit_code == 0
        assert "(2 attempts)" in result.output

    def test_history_empty_user(self, saved):
        result = _invoke(saved, "history", "--user", "nobody")
        assert "No quiz attempts recorded for user 'nobody'." in result.output

    def test_stats(self, saved):
        result = _invoke(saved, "stats", "--user", "alice")
        assert result.exit_code == 0
        assert "Attempts:        2" in result.output
        assert "Paths explored:  2" in result.output

    def test_delete_attempt(self, saved, tmp_path):
        result = _invoke(saved, "delete-attempt", "1", "--yes")
        assert result.exit_code == 0, result.output
        assert len(_stored(tmp_path)) == 1

        again = _invoke(saved, "delete-attempt", "1", "--yes")
        assert again.exit_code == 1
        assert "not found" in again.output

    def test_delete_attempt_wrong_owner(self, saved, tmp_path):
        result = _invoke(saved, "delete-attempt", "2", "--user", "mallory", "--yes")
        assert result.exit_code == 1
        assert len(_stored(tmp_path)) == 2

    def test_export_history(self, saved, tmp_path):
        out = tmp_path / "csv"
        result = _invoke(saved, "export-history", "--user", "alice", "--output-dir", str(out))
        assert result.exit_code == 0, result.output
        assert "Exported 2 attempt(s)" in result.output
        assert (out / f"history_alice_{date.today()}.csv").exists()


class TestProfileCommands:
    def test_show_blank_profile(self, cfg):
        result = _invoke(cfg, "profile-show", "--user", "alice")
        assert result.exit_code == 0, result.output
        assert "Name:            -" in result.output
        assert "Profile not filled in yet." in result.output

    def test_update_then_show(self, cfg):
        _invoke(cfg, "recommend", *_ALL_B, "--user", "alice", "--save")
        result = _invoke(
            cfg, "profile-update", "--user", "alice",
            "--full-name", "Alice Ade", "--email", "alice@example.com",
        )
        assert result.exit_code == 0, result.output
        assert "[OK] Profile updated for user 'alice'." in result.output

        shown = _invoke(cfg, "profile-show", "--user", "alice")
        assert "Name:            Alice Ade" in shown.output
        assert "Email:           alice@example.com" in shown.output
        assert "Quizzes taken:   1" in shown.output
        assert "not filled in" not in shown.output

    def test_update_keeps_omitted_fields(self, cfg):
        _invoke(cfg, "profile-update", "--user", "alice", "--full-name", "Alice", "--bio", "Hi")
        _invoke(cfg, "profile-update", "--user", "alice", "--location", "Lagos")
        shown = _invoke(cfg, "profile-show", "--user", "alice").output
        assert "Bio:             Hi" in shown
        assert "Location:        Lagos" in shown

    def test_update_requires_full_name(self, cfg):
        result = _invoke(cfg, "profile-update", "--user", "alice", "--bio", "Hi")
        assert result.exit_code == 1
        assert "[ERROR] Profile not saved: Full name is required." in result.output

    def test_invalid_email(self, cfg):
        result = _invoke(cfg, "profile-update", "--user", "alice", "--full-name", "A", "--email", "nope")
        assert result.exit_code == 1
        assert "[ERROR] Profile not saved" in result.output

    def test_blank_user_rejected(self, cfg):
        result = _invoke(cfg, "profile-show", "--user", " ")
        assert result.exit_code == 1
        assert "[ERROR] --user must be a non-empty user id." in result.output


class TestCVCommands:
    @pytest.fixture
    def cv_file(self, tmp_path):
        path = tmp_path / "cv.json"
        path.write_text(json.dumps({
            "title": "Backend roles",
            "summary": "Backend developer.",
            "experience": [{"title": "Intern", "company": "Paystack", "current": True}],
            "skills": [{"name": "Python", "level": "Advanced"}],
        }), encoding="utf-8")
        return path

    @pytest.fixture
    def saved_cv(self, cfg, cv_file):
        _invoke(cfg, "profile-update", "--user", "alice",
                "--full-name", "Alice Ade", "--email", "alice@example.com")
        result = _invoke(cfg, "cv-save", "--user", "alice", "--file", str(cv_file))
        assert result.exit_code == 0, result.output
        return cfg

    def test_save_prefills_from_profile(self, saved_cv):
        result = _invoke(saved_cv, "cv-show", "--user", "alice")
        assert result.exit_code == 0, result.output
        assert result.output.startswith("Alice Ade")
        assert "alice@example.com" in result.output
        assert "Intern, Paystack" in result.output

    def test_first_cv_is_default(self, cfg, cv_file):
        result = _invoke(cfg, "cv-save", "--user", "alice", "--file", str(cv_file))
        assert "[OK] Saved CV #1 'Backend roles' (default) for user 'alice'." in result.output

    def test_file_fields_win_over_profile(self, cfg, tmp_path):
        _invoke(cfg, "profile-update", "--user", "alice", "--full-name", "Alice Ade")
        path = tmp_path / "named.json"
        path.write_text(json.dumps({"full_name": "A. Ade"}), encoding="utf-8")
        _invoke(cfg, "cv-save", "--user", "alice", "--file", str(path))
        assert _invoke(cfg, "cv-show", "--user", "alice").output.startswith("A. Ade")

    def test_update_by_id(self, saved_cv, tmp_path):
        path = tmp_path / "retitled.json"
        path.write_text(json.dumps({"title": "Data roles", "full_name": "Alice Ade"}), encoding="utf-8")
        result = _invoke(saved_cv, "cv-save", "--user", "alice", "--file", str(path), "--id", "1")
        assert result.exit_code == 0, result.output
        listed = _invoke(saved_cv, "cv-list", "--user", "alice").output
        assert "Data roles" in listed
        assert "CVs for 'alice' (1)" in listed

    def test_update_unknown_id(self, saved_cv, cv_file):
        result = _invoke(saved_cv, "cv-save", "--user", "bob", "--file", str(cv_file), "--id", "1")
        assert result.exit_code == 1
        assert "CV #1 not found for user 'bob'." in result.output

    def test_invalid_cv_file(self, cfg, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"template": "fancy"}), encoding="utf-8")
        result = _invoke(cfg, "cv-save", "--user", "alice", "--file", str(path))
        assert result.exit_code == 1
        assert "[ERROR] CV invalid" in result.output

    def test_unreadable_cv_file(self, cfg, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        result = _invoke(cfg, "cv-save", "--user", "alice", "--file", str(path))
        assert result.exit_code == 1
        assert "[ERROR]" in result.output

    def test_list_empty(self, cfg):
        result = _invoke(cfg, "cv-list", "--user", "alice")
        assert "No CVs saved for user 'alice'." in result.output

    def test_show_without_cv(self, cfg):
        result = _invoke(cfg, "cv-show", "--user", "alice")
        assert result.exit_code == 1
        assert "has no saved CV" in result.output

    def test_export_pdf_default_dir(self, saved_cv, tmp_path):
        result = _invoke(saved_cv, "cv-export", "--user", "alice")
        assert result.exit_code == 0, result.output
        path = tmp_path / "outputs" / "cvs" / f"Alice_Ade_CV_{date.today()}.pdf"
        assert path.read_bytes().startswith(b"%PDF")

    def test_export_json(self, saved_cv, tmp_path):
        out = tmp_path / "json"
        result = _invoke(saved_cv, "cv-export", "--user", "alice", "--format", "json",
                         "--output-dir", str(out))
        assert result.exit_code == 0, result.output
        data = json.loads((out / f"Alice_Ade_CV_{date.today()}.json").read_text(encoding="utf-8"))
        assert data["skills"] == [{"name": "Python", "level": "Advanced", "category": ""}]

    def test_export_bad_format(self, saved_cv):
        result = _invoke(saved_cv, "cv-export", "--user", "alice", "--format", "docx")
        assert result.exit_code == 1
        assert "--format must be one of ['json', 'pdf']" in result.output

    def test_export_requires_name(self, cfg, cv_file, tmp_path):
        _invoke(cfg, "cv-save", "--user", "bob", "--file", str(cv_file))
        result = _invoke(cfg, "cv-export", "--user", "bob")
        assert result.exit_code == 1
        assert "fill in at least your name" in result.output
        assert not (tmp_path / "outputs" / "cvs").exists()

    def test_set_default_and_delete(self, saved_cv, cv_file):
        _invoke(saved_cv, "cv-save", "--user", "alice", "--file", str(cv_file))
        result = _invoke(saved_cv, "cv-set-default", "2", "--user", "alice")
        assert result.exit_code == 0, result.output
        assert "[OK] CV #2 is now the default for user 'alice'." in result.output

        deleted = _invoke(saved_cv, "cv-delete", "2", "--user", "alice", "--yes")
        assert deleted.exit_code == 0, deleted.output
        listed = _invoke(saved_cv, "cv-list", "--user", "alice").output
        assert "(1)" in listed
        assert listed.splitlines()[3].endswith(" *")

    def test_set_default_other_user(self, saved_cv):
        result = _invoke(saved_cv, "cv-set-default", "1", "--user", "bob")
        assert result.exit_code == 1
        assert "not found for user 'bob'" in result.output

    def test_delete_missing(self, cfg):
        result = _invoke(cfg, "cv-delete", "9", "--user", "alice", "--yes")
        assert result.exit_code == 1
        assert "[ERROR] CV #9 not found for user 'alice'." in result.output
