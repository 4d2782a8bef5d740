import pytest

from monocli.config.operation import ConfigAction
from monocli.config.providers import (
    AppType,
    LaravelConfigProvider,
    MagentoConfigProvider,
    SkeletonConfigProvider,
    SymfonyConfigProvider,
    get_provider,
)


def payload(provider, settings):
    operations = provider.build_operations(settings)
    assert len(operations) == 1
    assert operations[0].target_file == ".env"
    assert operations[0].action is ConfigAction.SET
    return operations[0].payload


def test_laravel_defaults():
    env = payload(LaravelConfigProvider(), {"name": "shop"})
    assert env["APP_NAME"] == "shop"
    assert env["APP_ENV"] == "local"
    assert env["DB_HOST"] == "db"
    assert env["DB_DATABASE"] == "laravel"
    assert env["APP_KEY"].startswith("base64:")
    assert "REDIS_HOST" not in env


def test_laravel_optional_services():
    env = payload(
        LaravelConfigProvider(),
        {"use_redis": True, "mail_host": "mailpit", "use_meilisearch": True, "use_minio": True},
    )
    assert env["CACHE_DRIVER"] == env["QUEUE_CONNECTION"] == env["SESSION_DRIVER"] == "redis"
    assert env["MAIL_HOST"] == "mailpit"
    assert env["SCOUT_DRIVER"] == "meilisearch"
    assert env["FILESYSTEM_DISK"] == "s3"


def test_symfony_database_url_and_mailer():
    env = payload(SymfonyConfigProvider(), {"db_user": "app", "db_password": "pw", "db_name": "shop"})
    assert env["DATABASE_URL"] == "mysql://app:pw@db:3306/shop?serverVersion=8.0"
    assert env["MAILER_DSN"] == "null://null"
    assert len(env["APP_SECRET"]) == 32


def test_symfony_secret_is_stable_per_instance():
    provider = SymfonyConfigProvider()
    first = payload(provider, {})["APP_SECRET"]
    second = payload(provider, {})["APP_SECRET"]
    assert first == second
    assert payload(SymfonyConfigProvider(), {})["APP_SECRET"] != first


def test_symfony_redis_url_with_password():
    env = payload(SymfonyConfigProvider(), {"use_redis": True, "redis_password": "secret"})
    assert env["REDIS_URL"] == "redis://:secret@redis:6379"


def test_magento_mode():
    env = payload(MagentoConfigProvider(), {"use_elasticsearch": True})
    assert env["MAGE_MODE"] == "developer"
    assert env["ELASTICSEARCH_PORT"] == "9200"


def test_skeleton_database_only_when_host_given():
    assert "DB_HOST" not in payload(SkeletonConfigProvider(), {})
    assert payload(SkeletonConfigProvider(), {"db_host": "db"})["DB_NAME"] == "skeleton"


def test_get_provider():
    assert isinstance(get_provider("laravel"), LaravelConfigProvider)
    assert get_provider(AppType.MAGENTO).app_type is AppType.MAGENTO
    with pytest.raises(ValueError, match="Unknown app type"):
        get_provider("rails")
