import pytest

from monocli.cli.commands import COMMANDS, build_registry
from monocli.cli.registry import CommandDescriptor, CommandRegistry
from monocli.errors import RegistrationError


def noop() -> int:
    """Do nothing."""
    return 0


def test_builtin_commands_are_injective():
    tokens = [token for descriptor in COMMANDS for token in descriptor.tokens]
    assert len(tokens) == len(set(tokens))
    assert len(build_registry()) == len(COMMANDS)


def test_name_collision_names_both_commands():
    registry = CommandRegistry([CommandDescriptor("build", noop)])
    with pytest.raises(RegistrationError, match="'compile'.*'build'"):
        registry.register(CommandDescriptor("compile", noop, aliases=("build",)))


def test_alias_collision():
    registry = CommandRegistry([CommandDescriptor("install", noop, aliases=("i",))])
    with pytest.raises(RegistrationError, match="already claimed by command 'install'"):
        registry.register(CommandDescriptor("info", noop, aliases=("i",)))


def test_failed_registration_leaves_registry_unchanged():
    registry = CommandRegistry([CommandDescriptor("install", noop, aliases=("i",))])
    with pytest.raises(RegistrationError):
        registry.register(CommandDescriptor("info", noop, aliases=("show", "i")))
    assert registry.resolve("show") is None


def test_duplicate_token_within_one_command():
    with pytest.raises(RegistrationError, match="more than once"):
        CommandRegistry([CommandDescriptor("test", noop, aliases=("t", "t"))])


def test_resolve_is_exact_and_case_sensitive():
    registry = build_registry()
    assert registry.resolve("i").name == "install"
    assert registry.resolve("upgrade").name == "update"
    assert registry.resolve("Install") is None
    assert registry.resolve("inst") is None


def test_suggest_close_names():
    registry = build_registry()
    assert "build" in registry.suggest("biuld")
    assert "publish" in registry.suggest("publsh")
    assert registry.suggest("zzzzzz") == []


def test_summary_falls_back_to_docstring():
    assert CommandDescriptor("noop", noop).summary == "Do nothing."


def test_option_schema_of_publish():
    schema = build_registry().resolve("publish").option_schema
    assert schema["--tag"] == {"shortcut": "-t", "arity": 1, "default": "latest"}
    assert schema["--dry-run"]["arity"] == 0
    assert schema["--workspace"]["shortcut"] == "-w"
    assert schema["--no-interaction"]["shortcut"] == "-n"
