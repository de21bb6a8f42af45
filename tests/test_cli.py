"""
Tests for the command line interface.
"""

import io
import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))


class TestSolveCommand:
    """Test solving from the command line."""

    def test_text_output(self, capsys):
        from main import main

        assert main(["2 + 3 * 4", "--no-save"]) == 0
        out = capsys.readouterr().out
        assert "Answer: 14" in out

    def test_steps(self, capsys):
        from main import main

        main(["-s", "2x + 3 = 7", "--no-save"])
        out = capsys.readouterr().out
        assert "Steps:" in out
        assert "4. Verify" in out

    def test_json_output(self, capsys):
        from main import main

        main(["-f", "json", "circle radius 5", "--no-save"])
        data = json.loads(capsys.readouterr().out)
        assert data["topic"] == "geometry"
        assert data["answer"]["kind"] == "circle"

    def test_failure_exit_code(self, capsys):
        from main import main

        assert main(["rectangle 4", "--no-save"]) == 1
        assert "Xatolik" in capsys.readouterr().out

    def test_strict_word(self, capsys):
        from main import main

        problem = "there are 5 red cats and 3 dogs in the big old house now"
        assert main([problem, "--no-save"]) == 0
        assert main([problem, "--no-save", "--strict-word"]) == 1

    def test_stdin(self, capsys, monkeypatch):
        from main import main

        monkeypatch.setattr(sys, "stdin", io.StringIO("5 + 5\n"))
        assert main(["-", "--no-save"]) == 0
        assert "Answer: 10" in capsys.readouterr().out

    def test_no_problem(self, capsys):
        from main import main

        assert main([]) == 1
        assert "No problem given" in capsys.readouterr().err

    def test_version(self, capsys):
        from main import main

        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "problemsolver" in capsys.readouterr().out


class TestClassifyCommand:
    def test_classify(self, capsys):
        from main import main

        assert main(["--classify", "derivative of sin(x)"]) == 0
        out = capsys.readouterr().out
        assert "calculus" in out
        assert "is_calculus" in out

    def test_classify_fallback(self, capsys):
        from main import main

        main(["--classify", "2 + 2"])
        assert "Rule: default" in capsys.readouterr().out


class TestHistoryCommand:
    """Test saving and listing history."""

    def test_save_and_list(self, capsys, tmp_path):
        from main import main

        db = str(tmp_path / "history.db")
        main(["2 + 2", "--db", db])
        main(["sin 30", "--db", db])
        capsys.readouterr()

        assert main(["--history", "--db", db]) == 0
        out = capsys.readouterr().out
        assert out.index("sin 30") < out.index("2 + 2")

    def test_history_limit(self, capsys, tmp_path):
        from main import main

        db = str(tmp_path / "history.db")
        main(["1 + 1", "--db", db])
        main(["2 + 2", "--db", db])
        capsys.readouterr()

        main(["--history", "1", "--db", db])
        out = capsys.readouterr().out
        assert "2 + 2" in out
        assert "1 + 1" not in out

    def test_no_save(self, capsys, tmp_path):
        from main import main

        db = str(tmp_path / "history.db")
        main(["2 + 2", "--db", db, "--no-save"])
        capsys.readouterr()

        main(["--history", "--db", db])
        assert "No history yet" in capsys.readouterr().out
