"""
CLI tests. The harvest itself is replaced, so nothing is launched.
"""

import pytest

from src.harvest import cli
from src.harvest.errors import PaginationError
from src.models.ranking import HarvestResult, HarvestStatus, HarvestStore


def _result(pages_completed=1, pages_requested=1):
    store = HarvestStore()
    store.merge({"a": {"rank": 1, "name": "A"}, "b": {"rank": 2, "name": "B"}})
    return HarvestResult.from_store(store, pages_requested, pages_completed)


@pytest.fixture
def fake_rankings(monkeypatch):
    calls = []

    async def fake(*args, **kwargs):
        calls.append((args, kwargs))
        return _result()

    monkeypatch.setattr(cli, "rankings", fake)
    return calls


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("HARVEST_TIMEOUT_SEC", "HARVEST_TICK_INTERVAL_MS", "HARVEST_MAX_TICKS"):
        monkeypatch.delenv(name, raising=False)


def test_wrong_argument_count_exits_non_zero(fake_rankings):
    with pytest.raises(SystemExit) as info:
        cli.main(["1", "7d", "ethereum"])
    assert info.value.code != 0
    assert fake_rankings == []


@pytest.mark.parametrize("argv", [
    ["1", "7d", "bitcoin", "out.json"],
    ["1", "60d", "ethereum", "out.json"],
    ["0", "7d", "ethereum", "out.json"],
    ["two", "7d", "ethereum", "out.json"],
])
def test_invalid_arguments_fail_before_harvest(argv, fake_rankings, capsys):
    assert cli.main(argv) == 2
    assert fake_rankings == []
    assert "error" in capsys.readouterr().err


def test_success_passes_options_through(fake_rankings, capsys):
    code = cli.main(["3", "total", "solana", "out.json", "--debug", "--quiet", "--timeout", "90"])

    assert code == 0
    args, kwargs = fake_rankings[0]
    assert args == ("3", "total", "solana", "out.json")
    assert kwargs["debug"] is True
    assert kwargs["logs"] is False
    assert kwargs["allow_partial"] is False
    assert kwargs["config"].timeout == 90
    assert "2 collections" in capsys.readouterr().out


def test_env_config_is_used(fake_rankings, monkeypatch):
    monkeypatch.setenv("HARVEST_TICK_INTERVAL_MS", "40")
    monkeypatch.setenv("HARVEST_MAX_TICKS", "50")

    assert cli.main(["1", "1d", "ethereum", "out.json"]) == 0
    config = fake_rankings[0][1]["config"]
    assert config.tick_interval == pytest.approx(0.04)
    assert config.max_ticks == 50


def test_bad_env_value_fails_validation(fake_rankings, monkeypatch):
    monkeypatch.setenv("HARVEST_MAX_TICKS", "lots")
    assert cli.main(["1", "1d", "ethereum", "out.json"]) == 2
    assert fake_rankings == []


def test_harvest_error_exits_one(monkeypatch, capsys):
    async def failing(*args, **kwargs):
        raise PaginationError("next page control missing", partial=_result(1, 2))

    monkeypatch.setattr(cli, "rankings", failing)

    assert cli.main(["2", "7d", "ethereum", "out.json"]) == 1
    err = capsys.readouterr().err
    assert "next page control missing" in err
    assert "2 collections collected" in err


def test_partial_result_reported(monkeypatch, capsys):
    async def partial(*args, **kwargs):
        return _result(1, 2)

    monkeypatch.setattr(cli, "rankings", partial)

    assert cli.main(["2", "7d", "ethereum", "out.json", "--allow-partial"]) == 0
    assert HarvestStatus.STOPPED_EARLY.value in capsys.readouterr().out
