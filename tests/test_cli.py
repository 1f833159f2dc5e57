import json

import pytest

import run


@pytest.fixture()
def fake_server(monkeypatch):
    calls = []

    def fake_start_server(host, port, debug):
        calls.append({"host": host, "port": port, "debug": debug})

    monkeypatch.setattr("keymaze.server.start_server", fake_start_server)
    monkeypatch.setattr("run.signal.signal", lambda *a, **k: None)
    return calls


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        run.main(["--version"])
    assert exc.value.code == 0
    assert "Keymaze" in capsys.readouterr().out


def test_no_arguments_defaults_to_server():
    assert run.parse_args([]).command == "server"


def test_server_uses_flags(fake_server, capsys):
    assert run.main(["server", "--host", "127.0.0.1", "--port", "5055", "--debug"]) == 0
    assert fake_server == [{"host": "127.0.0.1", "port": 5055, "debug": True}]
    out = capsys.readouterr().out
    assert "Keymaze Server" in out
    assert "5055" in out


def test_server_reads_env(fake_server, monkeypatch):
    monkeypatch.setenv("HOST", "10.0.0.1")
    monkeypatch.setenv("PORT", "6001")
    monkeypatch.delenv("FLASK_DEBUG", raising=False)
    run.main(["server"])
    assert fake_server == [{"host": "10.0.0.1", "port": 6001, "debug": False}]


def test_generate_ascii(capsys):
    assert run.main(["generate", "--rows", "4", "--cols", "5", "--seed", "7"]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[0] == "Maze 4x5 seed=7"
    assert lines[1] == "+---+---+---+---+---+"
    assert " S " in out and " E " in out
    assert "attempts=" in lines[-1]


def test_generate_json(capsys):
    assert run.main(["generate", "--rows", "3", "--cols", "3", "--seed", "2", "--no-items", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["seed"] == 2
    assert payload["board"]["rows"] == 3
    assert len(payload["board"]["cells"]) == 9
    assert payload["board"]["collectibles"] == []
    assert payload["metrics"]["open_passages"] == 8


def test_generate_rejects_bad_size(capsys):
    assert run.main(["generate", "--rows", "0"]) == 2
    assert "[ERROR]" in capsys.readouterr().err
