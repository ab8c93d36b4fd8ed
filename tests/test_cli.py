import json
import webbrowser

import pytest

from quickswitch import cli
from quickswitch.item_policy import ItemType
from quickswitch.picker.models import ResultItem
from tests.fakes import FakeSource, make_sources


@pytest.fixture
def fake_sources(monkeypatch):
    sources = make_sources(
        tabs=FakeSource(per_query={"": [{"id": 5, "title": "Inbox"}], "git": [{"id": 2, "title": "GitHub"}]}),
        bookmarks=FakeSource(per_query={"git": [{"title": "git", "url": "https://git.example"}]}),
    )
    monkeypatch.setattr(cli, "build_sources", lambda _cfg: sources)
    return sources


@pytest.fixture
def no_config(monkeypatch):
    monkeypatch.setattr(cli, "load_cfg", lambda path: {} if path is None else json.loads(path.read_text()))


def test_parse_args_collects_query_and_flags():
    query = cli.parse_args(["quickswitch", "-v", "--json", "--activate=1", "git", "docs"])
    assert query == "git docs"
    assert cli.VERBOSE is True
    assert cli.JSON_OUTPUT is True
    assert cli.ACTIVATE_INDEX == 1


def test_parse_args_rejects_unknown_option():
    with pytest.raises(SystemExit):
        cli.parse_args(["quickswitch", "--frobnicate"])


def test_main_prints_json_ranked_list(fake_sources, no_config, capsys):
    rc = cli.main(["quickswitch", "--json", "git"])
    out = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert [item["title"] for item in out["items"]] == ["git", "GitHub"]
    assert out["items"][1] == {"type": "tab", "title": "GitHub", "id": 2}
    assert out["activated"] is None


def test_main_empty_query_lists_tabs_only(fake_sources, no_config, capsys):
    rc = cli.main(["quickswitch"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "[tab     ] Inbox  <#5>" in out
    assert fake_sources[ItemType.HISTORY].calls == []


def test_main_activate_dispatches_selected_row(fake_sources, no_config, monkeypatch, capsys):
    opened = []
    monkeypatch.setattr(webbrowser, "open_new_tab", opened.append)
    rc = cli.main(["quickswitch", "--activate", "0", "git"])
    assert rc == 0
    assert opened == ["https://git.example"]
    assert "activated: git" in capsys.readouterr().out


def test_main_no_results_exit_code(fake_sources, no_config):
    assert cli.main(["quickswitch", "nothing-matches"]) == 3


def test_main_activate_out_of_range(fake_sources, no_config, capsys):
    assert cli.main(["quickswitch", "--activate", "9", "git"]) == 2
    assert "out of range" in capsys.readouterr().err


def test_main_reports_bad_config(tmp_path, capsys):
    bad = tmp_path / "config.json"
    bad.write_text("[]", encoding="utf-8")
    assert cli.main(["quickswitch", "--config", str(bad), "x"]) == 1
    assert "JSON object" in capsys.readouterr().err


def test_main_usage_error_exit_code(capsys):
    assert cli.main(["quickswitch", "--activate", "-1"]) == 2
    assert "usage:" in capsys.readouterr().err


def test_main_reports_unreadable_config(tmp_path, capsys):
    assert cli.main(["quickswitch", "--config", str(tmp_path), "x"]) == 1
    assert str(tmp_path) in capsys.readouterr().err


def test_format_row_truncates_titles_for_display():
    item = ResultItem(type=ItemType.HISTORY, title="Project Alpha roadmap", url="https://a")
    assert cli.format_row(0, item, 10) == " 0  [history ] Project A…  <https://a>"
    assert cli.format_row(0, item) == " 0  [history ] Project Alpha roadmap  <https://a>"


def test_main_title_max_len_only_shortens_rows(fake_sources, no_config, tmp_path, capsys):
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps({"titleMaxLen": 4}), encoding="utf-8")
    rc = cli.main(["quickswitch", "--config", str(cfg_path), "git"])
    out = capsys.readouterr().out
    assert rc == 0
    assert " 0  [bookmark] git  <https://git.example>" in out
    assert " 1  [tab     ] Git…  <#2>" in out


def test_main_ignores_non_numeric_title_max_len(fake_sources, no_config, tmp_path, capsys):
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps({"titleMaxLen": "wide"}), encoding="utf-8")
    assert cli.main(["quickswitch", "--config", str(cfg_path), "git"]) == 0
    assert "[tab     ] GitHub  <#2>" in capsys.readouterr().out
