import copy

import pytest

import main
from icon_extractor.controllers.batch_controller import BatchController
from icon_extractor.config.config_manager import DEFAULT_CONFIG


@pytest.fixture
def app_config(monkeypatch):
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["LOGGING"]["log_to_file"] = False
    config["SKIP_DEPENDENCIES"] = True
    monkeypatch.setattr(main, "load_config", lambda: config)
    return config


def test_parser_defaults_leave_config_in_charge():
    args = main.build_parser().parse_args([])
    assert args.paths == []
    assert args.format is None
    assert args.index is None
    assert args.large is None


def test_parser_accepts_every_option():
    args = main.build_parser().parse_args(["C:/Apps/tool", "-f", "PNG", "-i", "2", "-l", "-o", "logo"])
    assert args.paths == ["C:/Apps/tool"]
    assert args.format == "png"
    assert args.index == 2
    assert args.large is True
    assert args.output_name == "logo"


def test_parser_rejects_unknown_format():
    with pytest.raises(SystemExit):
        main.build_parser().parse_args(["-f", "gif"])


def test_failed_items_still_exit_normally(app_config, tmp_path):
    assert main.main([str(tmp_path / "missing")]) == 0


def test_output_name_overrides_config(app_config, tmp_path):
    main.main(["-o", "logo", str(tmp_path / "missing")])
    assert app_config["EXTRACTION"]["output_basename"] == "logo"


def test_small_flag_overrides_configured_large(app_config, tmp_path, monkeypatch):
    app_config["EXTRACTION"]["prefer_large"] = True
    calls = []

    def fake_run(self, paths, fmt=None, index=None, prefer_large=None):
        calls.append(prefer_large)
        return {"succeeded": 0, "failed": 0}

    monkeypatch.setattr(BatchController, "run", fake_run)

    assert main.main(["-s", str(tmp_path)]) == 0
    assert main.main([str(tmp_path)]) == 0
    assert calls == [False, None]


def test_size_flags_are_exclusive():
    assert main.build_parser().parse_args(["-s"]).large is False
    with pytest.raises(SystemExit):
        main.build_parser().parse_args(["-l", "-s"])
