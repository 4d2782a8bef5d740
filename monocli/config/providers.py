#!/usr/bin/env python3
"""
monocli/config/providers.py

Framework Configuration Providers

Each provider turns installer settings (database host, optional services, ...)
into the ConfigOperations that configure a freshly scaffolded application.
Generated secrets are created once per provider instance so that retrying an
install step never rotates a secret the user has already seen.
"""

import base64
import logging
import secrets
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Type

from monocli.config.operation import ConfigOperation

logger = logging.getLogger(__name__)

ENV_FILE = ".env"


class AppType(str, Enum):
    LARAVEL = "laravel"
    SYMFONY = "symfony"
    MAGENTO = "magento"
    SKELETON = "skeleton"


def _get(settings: Mapping[str, Any], key: str, default: Any = "") -> Any:
    value = settings.get(key)
    return default if value is None else value


def _enabled(settings: Mapping[str, Any], key: str) -> bool:
    return settings.get(key) is True


def _present(settings: Mapping[str, Any], key: str) -> bool:
    return settings.get(key) not in (None, "")


class ConfigProvider(ABC):
    app_type: AppType
    env_file = ENV_FILE

    @abstractmethod
    def build_operations(self, settings: Mapping[str, Any]) -> List[ConfigOperation]:
        """Return the operations that configure an application of this type."""


class LaravelConfigProvider(ConfigProvider):
    app_type = AppType.LARAVEL

    def __init__(self, app_key: Optional[str] = None):
        self.app_key = app_key or "base64:" + base64.b64encode(secrets.token_bytes(32)).decode()

    def build_operations(self, settings: Mapping[str, Any]) -> List[ConfigOperation]:
        app_name = _get(settings, "name", "Laravel")
        env: Dict[str, Any] = {
            "APP_NAME": app_name,
            "APP_ENV": "local",
            "APP_KEY": self.app_key,
            "APP_DEBUG": "true",
            "APP_URL": _get(settings, "app_url", "http://localhost"),
            "DB_CONNECTION": _get(settings, "db_type", "mysql"),
            "DB_HOST": _get(settings, "db_host", "db"),
            "DB_PORT": _get(settings, "db_port", "3306"),
            "DB_DATABASE": _get(settings, "db_name", "laravel"),
            "DB_USERNAME": _get(settings, "db_user", "root"),
            "DB_PASSWORD": _get(settings, "db_password"),
        }
        if _enabled(settings, "use_redis"):
            env["REDIS_HOST"] = _get(settings, "redis_host", "redis")
            env["REDIS_PORT"] = _get(settings, "redis_port", "6379")
            if _present(settings, "redis_password"):
                env["REDIS_PASSWORD"] = settings["redis_password"]
            env["CACHE_DRIVER"] = "redis"
            env["QUEUE_CONNECTION"] = "redis"
            env["SESSION_DRIVER"] = "redis"
        if _present(settings, "mail_host"):
            env["MAIL_MAILER"] = "smtp"
            env["MAIL_HOST"] = settings["mail_host"]
            env["MAIL_PORT"] = _get(settings, "mail_port", "1025")
            env["MAIL_USERNAME"] = _get(settings, "mail_username")
            env["MAIL_PASSWORD"] = _get(settings, "mail_password")
            env["MAIL_ENCRYPTION"] = _get(settings, "mail_encryption", "null")
            env["MAIL_FROM_ADDRESS"] = _get(settings, "mail_from", "hello@example.com")
            env["MAIL_FROM_NAME"] = app_name
        if _enabled(settings, "use_meilisearch"):
            env["MEILISEARCH_HOST"] = _get(settings, "meilisearch_host", "http://meilisearch:7700")
            if _present(settings, "meilisearch_key"):
                env["MEILISEARCH_KEY"] = settings["meilisearch_key"]
            env["SCOUT_DRIVER"] = "meilisearch"
        if _enabled(settings, "use_minio"):
            env["FILESYSTEM_DISK"] = "s3"
            env["AWS_ACCESS_KEY_ID"] = _get(settings, "minio_access_key", "minioadmin")
            env["AWS_SECRET_ACCESS_KEY"] = _get(settings, "minio_secret_key", "minioadmin")
            env["AWS_DEFAULT_REGION"] = "us-east-1"
            env["AWS_BUCKET"] = _get(settings, "minio_bucket", "laravel")
            env["AWS_ENDPOINT"] = _get(settings, "minio_endpoint", "http://minio:9000")
            env["AWS_USE_PATH_STYLE_ENDPOINT"] = "true"
        return [ConfigOperation.set(self.env_file, env)]


class SymfonyConfigProvider(ConfigProvider):
    app_type = AppType.SYMFONY

    def __init__(self, app_secret: Optional[str] = None):
        self.app_secret = app_secret or secrets.token_hex(16)

    def build_operations(self, settings: Mapping[str, Any]) -> List[ConfigOperation]:
        env: Dict[str, Any] = {
            "APP_ENV": "dev",
            "APP_DEBUG": "1",
            "APP_SECRET": self.app_secret,
        }
        env["DATABASE_URL"] = "mysql://{user}:{password}@{host}:{port}/{name}?serverVersion={version}".format(
            user=_get(settings, "db_user", "root"),
            password=_get(settings, "db_password"),
            host=_get(settings, "db_host", "db"),
            port=_get(settings, "db_port", "3306"),
            name=_get(settings, "db_name", "symfony"),
            version=_get(settings, "db_version", "8.0"),
        )
        if _enabled(settings, "use_redis"):
            host = _get(settings, "redis_host", "redis")
            port = _get(settings, "redis_port", "6379")
            password = _get(settings, "redis_password")
            auth = f":{password}@" if password else ""
            env["REDIS_URL"] = f"redis://{auth}{host}:{port}"
            env["CACHE_DRIVER"] = "redis"
        if _present(settings, "mail_host"):
            host = settings["mail_host"]
            port = _get(settings, "mail_port", "1025")
            user = _get(settings, "mail_username")
            password = _get(settings, "mail_password")
            auth = f"{user}:{password}@" if user and password else ""
            env["MAILER_DSN"] = f"smtp://{auth}{host}:{port}"
        else:
            env["MAILER_DSN"] = "null://null"
        if _enabled(settings, "use_meilisearch"):
            host = _get(settings, "meilisearch_host", "meilisearch")
            port = _get(settings, "meilisearch_port", "7700")
            env["MEILISEARCH_URL"] = f"http://{host}:{port}"
            if _present(settings, "meilisearch_key"):
                env["MEILISEARCH_API_KEY"] = settings["meilisearch_key"]
        if _enabled(settings, "use_minio"):
            env["S3_ENDPOINT"] = _get(settings, "minio_endpoint", "http://minio:9000")
            env["S3_ACCESS_KEY"] = _get(settings, "minio_access_key", "minioadmin")
            env["S3_SECRET_KEY"] = _get(settings, "minio_secret_key", "minioadmin")
            env["S3_BUCKET"] = _get(settings, "minio_bucket", "symfony")
            env["S3_REGION"] = "us-east-1"
        return [ConfigOperation.set(self.env_file, env)]


class MagentoConfigProvider(ConfigProvider):
    app_type = AppType.MAGENTO

    def build_operations(self, settings: Mapping[str, Any]) -> List[ConfigOperation]:
        env: Dict[str, Any] = {
            "DATABASE_HOST": _get(settings, "db_host", "db"),
            "DATABASE_NAME": _get(settings, "db_name", "magento"),
            "DATABASE_USER": _get(settings, "db_user", "root"),
            "DATABASE_PASSWORD": _get(settings, "db_password"),
            "APP_ENV": "development",
            "MAGE_MODE": "developer",
        }
        if _enabled(settings, "use_redis"):
            env["REDIS_HOST"] = _get(settings, "redis_host", "redis")
            env["REDIS_PORT"] = _get(settings, "redis_port", "6379")
            if _present(settings, "redis_password"):
                env["REDIS_PASSWORD"] = settings["redis_password"]
        if _enabled(settings, "use_elasticsearch"):
            env["ELASTICSEARCH_HOST"] = _get(settings, "elasticsearch_host", "elasticsearch")
            env["ELASTICSEARCH_PORT"] = _get(settings, "elasticsearch_port", "9200")
        if _enabled(settings, "use_meilisearch"):
            env["MEILISEARCH_HOST"] = _get(settings, "meilisearch_host", "meilisearch")
            env["MEILISEARCH_PORT"] = _get(settings, "meilisearch_port", "7700")
            if _present(settings, "meilisearch_key"):
                env["MEILISEARCH_KEY"] = settings["meilisearch_key"]
        if _enabled(settings, "use_minio"):
            env["MINIO_ENDPOINT"] = _get(settings, "minio_endpoint", "minio:9000")
            env["MINIO_ACCESS_KEY"] = _get(settings, "minio_access_key", "minioadmin")
            env["MINIO_SECRET_KEY"] = _get(settings, "minio_secret_key", "minioadmin")
            env["MINIO_BUCKET"] = _get(settings, "minio_bucket", "magento")
        return [ConfigOperation.set(self.env_file, env)]


class SkeletonConfigProvider(ConfigProvider):
    app_type = AppType.SKELETON

    def build_operations(self, settings: Mapping[str, Any]) -> List[ConfigOperation]:
        env: Dict[str, Any] = {
            "APP_NAME": _get(settings, "name", "Skeleton"),
            "APP_ENV": "development",
            "APP_DEBUG": "true",
        }
        if _present(settings, "db_host"):
            env["DB_HOST"] = settings["db_host"]
            env["DB_PORT"] = _get(settings, "db_port", "3306")
            env["DB_NAME"] = _get(settings, "db_name", "skeleton")
            env["DB_USER"] = _get(settings, "db_user", "root")
            env["DB_PASSWORD"] = _get(settings, "db_password")
        if _enabled(settings, "use_redis"):
            env["REDIS_HOST"] = _get(settings, "redis_host", "redis")
            env["REDIS_PORT"] = _get(settings, "redis_port", "6379")
            if _present(settings, "redis_password"):
                env["REDIS_PASSWORD"] = settings["redis_password"]
        return [ConfigOperation.set(self.env_file, env)]


PROVIDERS: Dict[AppType, Type[ConfigProvider]] = {
    AppType.LARAVEL: LaravelConfigProvider,
    AppType.SYMFONY: SymfonyConfigProvider,
    AppType.MAGENTO: MagentoConfigProvider,
    AppType.SKELETON: SkeletonConfigProvider,
}


def get_provider(app_type: str) -> ConfigProvider:
    try:
        key = AppType(app_type)
    except ValueError:
        valid = ", ".join(t.value for t in AppType)
        raise ValueError(f"Unknown app type '{app_type}'. Valid types are: {valid}") from None
    logger.debug("Using %s for app type '%s'", PROVIDERS[key].__name__, key.value)
    return PROVIDERS[key]()
