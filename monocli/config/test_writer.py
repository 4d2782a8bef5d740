import pytest

from monocli.config.operation import ConfigAction, ConfigOperation
from monocli.config.writer import ConfigWriter, format_value


@pytest.fixture
def writer():
    return ConfigWriter()


def test_invalid_action_rejected():
    with pytest.raises(ValueError, match="Invalid config action"):
        ConfigOperation(".env", "replace", {"A": "1"})


def test_payload_values_are_strings():
    operation = ConfigOperation.set(".env", {"DEBUG": True, "PORT": 3306, "EMPTY": None})
    assert operation.action is ConfigAction.SET
    assert operation.payload == {"DEBUG": "true", "PORT": "3306", "EMPTY": ""}


def test_format_value_quotes_whitespace_only():
    assert format_value("plain") == "plain"
    assert format_value("My App") == '"My App"'
    assert format_value('say "hi" now') == '"say \\"hi\\" now"'


def test_set_creates_file_and_parent_dirs(writer, tmp_path):
    operation = ConfigOperation.set("config/.env", {"APP_NAME": "Demo App", "APP_ENV": "local"})
    path = writer.apply(operation, tmp_path)
    assert path == tmp_path / "config" / ".env"
    assert path.read_text() == 'APP_NAME="Demo App"\nAPP_ENV=local\n'


def test_set_is_idempotent(writer, tmp_path):
    env = tmp_path / ".env"
    env.write_text("# local settings\nEXISTING=1\n")
    operation = ConfigOperation.set(".env", {"APP_ENV": "local", "EXISTING": "2"})
    writer.apply(operation, tmp_path)
    first = env.read_text()
    writer.apply(operation, tmp_path)
    assert env.read_text() == first


def test_set_replaces_in_place_and_appends_new_keys(writer, tmp_path):
    env = tmp_path / ".env"
    env.write_text("A=1\nB=2\nC=3\n")
    writer.apply(ConfigOperation.set(".env", {"B": "20", "D": "4"}), tmp_path)
    assert env.read_text() == "A=1\nB=20\nC=3\nD=4\n"


def test_merge_leaves_unrelated_lines(writer, tmp_path):
    env = tmp_path / ".env"
    env.write_text("# comment\nKEEP=yes\n")
    writer.apply(ConfigOperation.merge(".env", {"NEW": "1"}), tmp_path)
    assert env.read_text() == "# comment\nKEEP=yes\nNEW=1\n"


def test_append_does_not_check_collisions(writer, tmp_path):
    env = tmp_path / ".env"
    env.write_text("A=1")
    writer.apply(ConfigOperation.append(".env", {"A": "2"}), tmp_path)
    assert env.read_text() == "A=1\nA=2\n"


def test_apply_all_later_operations_win(writer, tmp_path):
    writer.apply_all(
        [
            ConfigOperation.set(".env", {"A": "1", "B": "1"}),
            ConfigOperation.set(".env", {"A": "2"}),
        ],
        tmp_path,
    )
    assert (tmp_path / ".env").read_text() == "A=2\nB=1\n"
