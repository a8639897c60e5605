import pytest

from tinysh.history import HISTORY_FILENAME, MAX_HISTORY_LINES, History


@pytest.fixture
def history(tmp_path):
    return History(tmp_path / HISTORY_FILENAME)


def test_append_creates_file_with_lines(history):
    history.append("ls -l")
    history.append("cd /tmp")
    assert history.path.read_text(encoding="utf-8") == "ls -l\ncd /tmp\n"


def test_recent_returns_all_when_few(history):
    commands = ["echo one", "echo two", "pwd"]
    for command in commands:
        history.append(command)
    assert history.recent() == commands


def test_recent_defaults_to_last_ten(history):
    commands = [f"echo {n}" for n in range(15)]
    for command in commands:
        history.append(command)
    result = history.recent()
    assert len(result) == MAX_HISTORY_LINES
    assert result == commands[-MAX_HISTORY_LINES:]


def test_recent_with_custom_limit(history):
    commands = [f"cmd{n}" for n in range(6)]
    for command in commands:
        history.append(command)
    assert history.recent(2) == commands[-2:]


def test_clear_empties_history(history):
    history.append("whoami")
    history.clear()
    assert history.recent() == []
    assert history.path.exists()


def test_clear_creates_missing_file(history):
    history.clear()
    assert history.path.read_text(encoding="utf-8") == ""


def test_recent_missing_file_raises(history):
    with pytest.raises(FileNotFoundError):
        history.recent()


def test_append_into_missing_directory_raises(tmp_path):
    history = History(tmp_path / "missing" / HISTORY_FILENAME)
    with pytest.raises(OSError):
        history.append("ls")