from __future__ import annotations

import pytest

from vocab_quiz.core import config as config_mod
from vocab_quiz.core import workspace as workspace_mod


def test_load_config_defaults():
    cfg = config_mod.load_config(None)
    assert cfg.mode == "term-to-meaning"
    assert cfg.input_mode == "choice"
    assert cfg.question_count == 10
    assert cfg.noise_scale == pytest.approx(0.2)
    assert cfg.source is None


def test_load_config_merges_user_values(tmp_path):
    path = tmp_path / "quiz.toml"
    path.write_text(
        '[quiz]\ninput_mode = "recall"\nquestion_count = 25\n'
        "[logging]\nverbose = true\n",
        encoding="utf-8",
    )

    cfg = config_mod.load_config(path)

    assert cfg.input_mode == "recall"
    assert cfg.question_count == 25
    assert cfg.mode == "term-to-meaning"
    assert cfg.verbose is True
    assert cfg.source == path


def test_default_config_is_not_mutated_by_merges(tmp_path):
    path = tmp_path / "quiz.toml"
    path.write_text("[quiz]\nquestion_count = 3\n", encoding="utf-8")
    config_mod.load_config(path)
    assert config_mod.DEFAULT_CONFIG["quiz"]["question_count"] == 10


@pytest.mark.parametrize(
    "body,message",
    [
        ("[quiz]\nextra = 1\n", "Unknown configuration key 'quiz.extra'"),
        ("quiz = 3\n", "Expected table for 'quiz'"),
        ('[quiz]\nmode = "sideways"\n', "Unsupported quiz mode"),
        ('[quiz]\ninput_mode = "typing"\n', "Unsupported input mode"),
        ("[quiz]\nquestion_count = -1\n", "question_count"),
        ('[quiz]\nnoise_scale = "lots"\n', "Invalid [quiz] value"),
        ("[quiz\n", "Failed to parse"),
    ],
)
def test_load_config_errors(tmp_path, body, message):
    path = tmp_path / "quiz.toml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(config_mod.TomlConfigError) as excinfo:
        config_mod.load_config(path)
    assert message in str(excinfo.value)


def test_template_round_trips_to_defaults(tmp_path):
    path = config_mod.write_toml_template(tmp_path / "cfg" / "quiz.toml")
    assert config_mod.load_config(path) == config_mod.QuizConfig(source=path)

    with pytest.raises(config_mod.TomlConfigError):
        config_mod.write_toml_template(path)


def test_find_config_path_order(tmp_path, monkeypatch):
    home = tmp_path / "home"
    monkeypatch.setenv(workspace_mod.WORKSPACE_ENV, str(home))
    monkeypatch.chdir(tmp_path)

    assert config_mod.find_config_path() is None

    local = tmp_path / "quiz.toml"
    local.write_text("", encoding="utf-8")
    assert config_mod.find_config_path() == local.resolve()

    ws_cfg = home / "config" / "quiz.toml"
    ws_cfg.parent.mkdir(parents=True)
    ws_cfg.write_text("", encoding="utf-8")
    assert config_mod.find_config_path() == ws_cfg.resolve()

    explicit = tmp_path / "other.toml"
    explicit.write_text("", encoding="utf-8")
    assert config_mod.find_config_path(str(explicit)) == explicit.resolve()
    with pytest.raises(config_mod.TomlConfigError):
        config_mod.find_config_path(str(tmp_path / "missing.toml"))
