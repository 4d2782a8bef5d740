"""
monocli/workspace/manifests.py

composer.json / package.json templates and framework entry points for new
apps and packages.
"""

from typing import Any, Dict, Optional

from monocli.config.providers import AppType

FRAMEWORK_REQUIREMENTS = {
    AppType.LARAVEL: {"laravel/framework": "^11.0"},
    AppType.SYMFONY: {"symfony/framework-bundle": "^7.0", "symfony/runtime": "^7.0"},
    AppType.MAGENTO: {"magento/product-community-edition": "^2.4"},
    AppType.SKELETON: {},
}

DEV_SERVERS = {
    AppType.LARAVEL: "php artisan serve",
    AppType.SYMFONY: "php -S localhost:8000 -t public",
    AppType.MAGENTO: "php -S localhost:8000 -t pub",
    AppType.SKELETON: "php -S localhost:8000 -t public",
}

QUALITY_SCRIPTS = {
    "composer:install": "composer install --no-interaction --prefer-dist --optimize-autoloader",
    "test": "vendor/bin/phpunit",
    "test:unit": "vendor/bin/phpunit --testsuite=Unit",
    "test:feature": "vendor/bin/phpunit --testsuite=Feature",
    "lint": "vendor/bin/pint --test",
    "format": "vendor/bin/pint",
    "typecheck": "vendor/bin/phpstan analyse",
    "clean": "rm -rf .phpunit.cache .phpstan.cache",
}

PACKAGE_TYPE_LABELS = {
    AppType.LARAVEL: "Laravel package (service provider)",
    AppType.SYMFONY: "Symfony bundle (dependency injection)",
    AppType.MAGENTO: "Magento module (component registrar)",
    AppType.SKELETON: "Skeleton package (plain PHP library)",
}

PACKAGE_REQUIREMENTS = {
    AppType.LARAVEL: {"illuminate/support": "^11.0"},
    AppType.SYMFONY: {"symfony/http-kernel": "^7.0", "symfony/dependency-injection": "^7.0"},
    AppType.MAGENTO: {"magento/framework": "^103.0"},
    AppType.SKELETON: {},
}

MAGENTO_REPOSITORY = "https://repo.magento.com/"


def to_namespace(name: str) -> str:
    """shop-api -> ShopApi"""
    return "".join(part.capitalize() for part in name.split("-"))


def to_title(name: str) -> str:
    return name.replace("-", " ").capitalize()


def _composer_base(name: str, vendor: str, kind: str, description: str) -> Dict[str, Any]:
    namespace = to_namespace(name)
    return {
        "name": f"{vendor}/{name}",
        "description": description,
        "type": kind,
        "license": "MIT",
        "require": {"php": "^8.2"},
        "require-dev": {
            "phpunit/phpunit": "^11.0",
            "phpstan/phpstan": "^2.0",
            "laravel/pint": "^1.18",
        },
        "autoload": {"psr-4": {f"{namespace}\\": "src/"}},
        "autoload-dev": {"psr-4": {f"{namespace}\\Tests\\": "tests/"}},
        "minimum-stability": "stable",
        "prefer-stable": True,
    }


def magento_module_name(name: str, vendor: str) -> str:
    """billing-core under acme -> Acme_BillingCore"""
    return f"{to_namespace(vendor)}_{to_namespace(name)}"


def package_composer_json(
    name: str,
    vendor: str,
    package_type: AppType = AppType.SKELETON,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    package_type = AppType(package_type)
    kind = "magento2-module" if package_type is AppType.MAGENTO else "library"
    data = _composer_base(name, vendor, kind, description or f"{to_title(name)} package")
    data["require"].update(PACKAGE_REQUIREMENTS[package_type])
    namespace = to_namespace(name)
    if package_type is AppType.LARAVEL:
        provider = f"{namespace}\\Providers\\{namespace}ServiceProvider"
        data["extra"] = {"laravel": {"providers": [provider]}}
    elif package_type is AppType.MAGENTO:
        data["autoload"]["files"] = ["registration.php"]
    return data


def package_sources(name: str, vendor: str, package_type: AppType) -> Dict[str, str]:
    """Relative path -> file content for the framework entry points of a package."""
    namespace = to_namespace(name)
    package_type = AppType(package_type)
    if package_type is AppType.LARAVEL:
        return {
            f"src/Providers/{namespace}ServiceProvider.php": (
                "<?php\n\n"
                "declare(strict_types=1);\n\n"
                f"namespace {namespace}\\Providers;\n\n"
                "use Illuminate\\Support\\ServiceProvider;\n\n"
                f"final class {namespace}ServiceProvider extends ServiceProvider\n"
                "{\n"
                "    public function register(): void\n    {\n    }\n\n"
                "    public function boot(): void\n    {\n    }\n"
                "}\n"
            ),
        }
    if package_type is AppType.SYMFONY:
        return {
            f"src/{namespace}Bundle.php": (
                "<?php\n\n"
                "declare(strict_types=1);\n\n"
                f"namespace {namespace};\n\n"
                "use Symfony\\Component\\HttpKernel\\Bundle\\Bundle;\n\n"
                f"final class {namespace}Bundle extends Bundle\n"
                "{\n"
                "}\n"
            ),
            f"src/DependencyInjection/{namespace}Extension.php": (
                "<?php\n\n"
                "declare(strict_types=1);\n\n"
                f"namespace {namespace}\\DependencyInjection;\n\n"
                "use Symfony\\Component\\DependencyInjection\\ContainerBuilder;\n"
                "use Symfony\\Component\\DependencyInjection\\Extension\\Extension;\n\n"
                f"final class {namespace}Extension extends Extension\n"
                "{\n"
                "    public function load(array $configs, ContainerBuilder $container): void\n"
                "    {\n    }\n"
                "}\n"
            ),
        }
    if package_type is AppType.MAGENTO:
        module = magento_module_name(name, vendor)
        return {
            "registration.php": (
                "<?php\n\n"
                "declare(strict_types=1);\n\n"
                "use Magento\\Framework\\Component\\ComponentRegistrar;\n\n"
                f"ComponentRegistrar::register(ComponentRegistrar::MODULE, '{module}', __DIR__);\n"
            ),
            "etc/module.xml": (
                '<?xml version="1.0"?>\n'
                '<config xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
                'xsi:noNamespaceSchemaLocation="urn:magento:framework:Module/etc/module.xsd">\n'
                f'    <module name="{module}"/>\n'
                "</config>\n"
            ),
        }
    return {}


def app_composer_json(name: str, vendor: str, app_type: AppType) -> Dict[str, Any]:
    data = _composer_base(name, vendor, "project", f"{to_title(name)} application")
    data["require"].update(FRAMEWORK_REQUIREMENTS[AppType(app_type)])
    return data


def package_package_json(name: str, vendor: str) -> Dict[str, Any]:
    return {
        "name": f"@{vendor}/{name}",
        "version": "1.0.0",
        "private": True,
        "scripts": dict(QUALITY_SCRIPTS),
    }


def app_package_json(name: str, vendor: str, app_type: AppType) -> Dict[str, Any]:
    scripts = dict(QUALITY_SCRIPTS)
    scripts["dev"] = DEV_SERVERS[AppType(app_type)]
    scripts["build"] = "composer dump-autoload --optimize --classmap-authoritative"
    scripts["deploy"] = "echo 'Configure the deploy script for this app'"
    return {
        "name": f"@{vendor}/{name}",
        "version": "1.0.0",
        "private": True,
        "scripts": scripts,
    }


def readme(name: str, vendor: str, kind: str) -> str:
    title = to_title(name)
    return (
        f"# {title}\n\n"
        f"{title} {kind} for the {vendor} monorepo.\n\n"
        "## Testing\n\n"
        "```bash\n"
        f"mono test --workspace={name}\n"
        "```\n"
    )
