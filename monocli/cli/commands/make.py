#!/usr/bin/env python3
"""
monocli/cli/commands/make.py

Scaffolding Commands

Create a new monorepo from the template repository, or add an app or package
to the current one.
"""

import logging
import time
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from monocli.cli.context import AppContext
from monocli.cli.helpers import NoInteractionOption, initialize
from monocli.cli.registry import CommandDescriptor
from monocli.config.providers import AppType, get_provider
from monocli.errors import ScaffoldError
from monocli.naming import best_suggestion, is_valid_name, suggest_names
from monocli.utils import save_json
from monocli.workspace import manifests
from monocli.workspace.registry import Workspace, WorkspaceType

logger = logging.getLogger(__name__)

NAME_RULES = "Use lowercase letters, digits and single hyphens (e.g. shop-api)."


def _check_name(app: AppContext, name: str) -> bool:
    if is_valid_name(name):
        return True
    app.console.error(f"Invalid name '{name}'. {NAME_RULES}")
    return False


def _resolve_free_name(app: AppContext, parent: Path, name: str, kind: str) -> Optional[str]:
    """
    Return name if parent/name is free, otherwise let the user pick an
    alternative. Returns None when no name could be settled on.
    """
    destination = parent / name
    if not destination.exists() or (destination.is_dir() and not any(destination.iterdir())):
        return name

    suggestions = suggest_names(name, kind, lambda n: not (parent / n).exists())
    app.console.error(f"'{destination}' already exists")
    if not suggestions:
        return None
    best = best_suggestion(suggestions)
    if not app.console.interactive:
        app.console.comment(f"Available alternatives: {', '.join(suggestions)}")
        return None
    return app.console.select("Choose another name", suggestions, default=best)


def make_workspace_command(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Directory and project name of the new monorepo.")],
    template_url: Annotated[
        Optional[str], typer.Option("--template", help="Git URL of the template repository.")
    ] = None,
    branch: Annotated[Optional[str], typer.Option("--branch", help="Template branch to clone.")] = None,
    directory: Annotated[
        Optional[Path], typer.Option("--directory", "-d", help="Parent directory (default: current).")
    ] = None,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Create a new monorepo from the template repository.
    """
    app = initialize(ctx, no_interaction)
    if not _check_name(app, name):
        return 1
    parent = (directory or app.cwd).resolve()
    final_name = _resolve_free_name(app, parent, name, "workspace")
    if final_name is None:
        return 1

    url = template_url or app.config.get("template_url")
    app.console.intro(f"Creating workspace: {final_name}")
    app.console.info(f"Cloning {url}")
    try:
        app.scaffolder.clone_template(url, parent / final_name, final_name, branch=branch)
    except ScaffoldError as e:
        app.console.error(f"✗ {e}")
        return 1

    app.console.outro(f"✓ Workspace '{final_name}' created successfully!")
    app.console.comment("Next steps:")
    app.console.line(f"  1. cd {final_name}")
    app.console.line("  2. pnpm install")
    app.console.line("  3. mono install")
    return 0


def create_app_command(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Name of the new app.")],
    app_type: Annotated[
        AppType, typer.Option("--type", case_sensitive=False, help="Application framework.")
    ] = AppType.SKELETON,
    db_host: Annotated[Optional[str], typer.Option("--db-host", help="Database host.")] = None,
    db_port: Annotated[Optional[str], typer.Option("--db-port", help="Database port.")] = None,
    db_name: Annotated[Optional[str], typer.Option("--db-name", help="Database name.")] = None,
    db_user: Annotated[Optional[str], typer.Option("--db-user", help="Database user.")] = None,
    db_password: Annotated[
        Optional[str], typer.Option("--db-password", help="Database password.")
    ] = None,
    redis: Annotated[bool, typer.Option("--redis", help="Configure Redis.")] = False,
    app_url: Annotated[Optional[str], typer.Option("--url", help="Public application URL.")] = None,
    install: Annotated[
        bool, typer.Option("--install", help="Run composer install afterwards.")
    ] = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Add a framework application under apps/.
    """
    app = initialize(ctx, no_interaction)
    if not _check_name(app, name):
        return 1
    path = app.root / "apps" / name
    if path.exists():
        app.console.error(f"App '{name}' already exists")
        return 1

    vendor = app.config.get("vendor", "mono-php")
    app.console.intro(f"Creating {app_type.value} app: {name}")
    for sub in ("src", "public", "tests/Unit", "tests/Feature"):
        (path / sub).mkdir(parents=True, exist_ok=True)
    (path / "src" / ".gitkeep").touch()
    save_json(path / "composer.json", manifests.app_composer_json(name, vendor, app_type), indent=4)
    save_json(path / "package.json", manifests.app_package_json(name, vendor, app_type))
    (path / "README.md").write_text(manifests.readme(name, vendor, "application"), encoding="utf-8")

    settings = {
        "name": name,
        "app_url": app_url,
        "db_host": db_host,
        "db_port": db_port,
        "db_name": db_name,
        "db_user": db_user,
        "db_password": db_password,
        "use_redis": redis,
    }
    operations = get_provider(app_type).build_operations(settings)
    app.writer.apply_all(operations, path)
    app.console.info(f"Wrote {', '.join(sorted({op.target_file for op in operations}))}")

    if install:
        workspace = Workspace(
            name=name,
            path=path,
            type=WorkspaceType.APP,
            package_name=f"@{vendor}/{name}",
            has_composer=True,
            has_package_json=True,
        )
        if app.composer.install(workspace) != 0:
            app.console.error("✗ composer install failed")
            return 1

    app.console.outro(f"✓ App '{name}' created successfully!")
    app.console.comment(f"Start it with: mono dev --workspace={name}")
    return 0


def _package_failed(app: AppContext, message: str, as_json: bool) -> int:
    if as_json:
        app.console.json({"success": False, "error": message})
    else:
        app.console.error(message)
    return 1


def _install_package(app: AppContext, workspace: Workspace, package_type: AppType) -> bool:
    if package_type is AppType.MAGENTO:
        repository = f"config repositories.magento composer {manifests.MAGENTO_REPOSITORY}"
        if app.composer.run_command(repository, workspace.path) != 0:
            return False
    return app.composer.install(workspace) == 0


def create_package_command(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Name of the new package.")],
    package_type: Annotated[
        Optional[AppType],
        typer.Option("--type", "-t", case_sensitive=False, help="Package framework."),
    ] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d", help="Package description.")
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Print the result as JSON.")
    ] = False,
    install: Annotated[
        bool, typer.Option("--install", help="Run composer install afterwards.")
    ] = False,
    no_interaction: NoInteractionOption = False,
) -> int:
    """
    Add a PHP package under packages/.
    """
    app = initialize(ctx, no_interaction)
    started = time.monotonic()
    if not is_valid_name(name):
        return _package_failed(app, f"Invalid name '{name}'. {NAME_RULES}", json_output)
    path = app.root / "packages" / name
    if path.exists():
        return _package_failed(app, f"Package '{name}' already exists", json_output)

    if package_type is None:
        choice = app.console.select(
            "Select package type", [t.value for t in AppType], default=AppType.SKELETON.value
        )
        package_type = AppType(choice)

    vendor = app.config.get("vendor", "mono-php")
    if not json_output:
        app.console.intro(f"Creating package: {name}")
        app.console.comment(f"Selected: {manifests.PACKAGE_TYPE_LABELS[package_type]}")
    (path / "src").mkdir(parents=True)
    (path / "tests" / "Unit").mkdir(parents=True)
    (path / "src" / ".gitkeep").touch()
    save_json(
        path / "composer.json",
        manifests.package_composer_json(name, vendor, package_type, description),
        indent=4,
    )
    save_json(path / "package.json", manifests.package_package_json(name, vendor))
    (path / "README.md").write_text(manifests.readme(name, vendor, "package"), encoding="utf-8")
    for relative, content in manifests.package_sources(name, vendor, package_type).items():
        target = path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    if install:
        workspace = Workspace(
            name=name,
            path=path,
            type=WorkspaceType.PACKAGE,
            package_name=f"@{vendor}/{name}",
            has_composer=True,
            has_package_json=True,
        )
        installed = _install_package(app, workspace, package_type)
        if not installed and not json_output:
            app.console.warning("⚠ Dependency installation had issues (run composer install manually)")

    next_steps = [f"cd packages/{name}", "Start coding in src/", "Run tests with: composer test"]
    if json_output:
        app.console.json(
            {
                "success": True,
                "type": "package",
                "package_type": package_type.value,
                "name": name,
                "path": str(path),
                "duration": round(time.monotonic() - started, 2),
                "next_steps": next_steps,
            }
        )
        return 0

    app.console.outro(f"✓ Package '{name}' created successfully!")
    app.console.comment("Next steps:")
    for number, step in enumerate(next_steps, start=1):
        app.console.line(f"  {number}. {step}")
    return 0


COMMANDS = [
    CommandDescriptor("make:workspace", make_workspace_command, aliases=("init", "new")),
    CommandDescriptor("create:app", create_app_command, aliases=("new:app", "make:app")),
    CommandDescriptor(
        "create:package", create_package_command, aliases=("new:package", "make:package")
    ),
]
