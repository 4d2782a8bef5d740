from pathlib import Path

import typer

# Application Constants
APP_NAME = "Mono CLI"
APP_BINARY = "mono"

# Directories and Files (User)
USER_APP_DIR = Path(typer.get_app_dir(APP_BINARY))

# Monorepo layout
ROOT_MARKERS = ("turbo.json", "pnpm-workspace.yaml")
WORKSPACE_MANIFESTS = ("package.json", "composer.json")
DEFAULT_WORKSPACE_PATTERNS = ["apps/*", "packages/*"]

TEMPLATE_URL = "https://github.com/pixielity-inc/hive-template.git"
NOT_INSTALLED = "Not installed"
