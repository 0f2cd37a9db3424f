# Area: Shared
"""Tests for the command-line entry point."""

import json
from unittest.mock import patch

from word_conquest._config import GameSettings
from word_conquest._quiz.question_bank import JsonQuestionBank, StaticQuestionBank
from word_conquest.cli import build_question_provider, build_store, is_demo_mode, main, parse_args


class TestParseArgs:

    def test_defaults(self):
        args = parse_args([])
        assert args.demo is False
        assert args.speed == 1.0
        assert args.demo_accuracy == 0.8
        assert args.config is None

    def test_flags(self):
        args = parse_args(["--demo", "--seed", "7", "--size", "12", "--grade", "grade6",
                           "--nickname", "Ada", "--speed", "4"])
        assert (args.seed, args.size, args.grade, args.nickname, args.speed) == (
            7, 12, "grade6", "Ada", 4.0)

    def test_demo_from_env(self):
        with patch.dict("os.environ", {"WORD_CONQUEST_DEMO": "yes"}):
            assert is_demo_mode(parse_args([]))


class TestBuild:

    def test_provider_selection(self, tmp_path):
        assert isinstance(build_question_provider(GameSettings()), StaticQuestionBank)
        path = tmp_path / "bank.json"
        path.write_text(json.dumps({"default": [
            {"id": "q", "word": "w", "options": ["a", "b"], "correct_answer": 1},
        ]}), encoding="utf-8")
        settings = GameSettings(question_bank_path=str(path))
        assert isinstance(build_question_provider(settings), JsonQuestionBank)

    def test_seeded_stores_build_the_same_map(self):
        settings = GameSettings(map_size=8, seed=21, log_file="")
        a, b = build_store(settings), build_store(settings)
        a.initialize_map()
        b.initialize_map()
        assert [c.content for c in a.grid.iter_cells()] == [c.content for c in b.grid.iter_cells()]


class TestMain:

    def test_invalid_config_returns_error(self, tmp_path, capsys):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"max_energy": 2, "starting_energy": 5}))
        with patch("word_conquest.cli.load_dotenv"):
            assert main(["--config", str(path)]) == 1
        assert "CONFIGURATION_INVARIANT_VIOLATION" in capsys.readouterr().err

    def test_interactive_session(self, tmp_path):
        with patch("word_conquest.cli.load_dotenv"), \
                patch("word_conquest.cli.setup_logging") as mock_logging, \
                patch("word_conquest.cli.GameRunner") as mock_runner:
            assert main(["--nickname", "Ada", "--size", "5", "--seed", "3"]) == 0
        mock_logging.assert_called_once()
        store = mock_runner.call_args.args[0]
        assert store.grid.size == 5
        assert store.player.nickname == "Ada"
        mock_runner.return_value.run.assert_called_once()

    def test_demo_session(self):
        with patch("word_conquest.cli.load_dotenv"), \
                patch("word_conquest.cli.setup_logging"), \
                patch("word_conquest.cli.DemoRunner") as mock_demo:
            assert main(["--demo", "--demo-accuracy", "0.5", "--demo-quizzes", "2"]) == 0
        kwargs = mock_demo.call_args.kwargs
        assert kwargs["accuracy"] == 0.5
        assert kwargs["max_quizzes"] == 2
        assert mock_demo.call_args.args[0].player.nickname == "Demo"
