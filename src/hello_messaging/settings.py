"""Runtime configuration for the hello publisher and consumer."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Type, TypeVar
from urllib.parse import quote

from .delivery import AckMode, PublishMode
from .queue_config import DEFAULT_QUEUE_NAME, QueueConfig
from .retry_policy import DEFAULT_MAX_ATTEMPTS, DEFAULT_RETRY_DELAY, RetryPolicy

DEFAULT_HOST = "rabbitmq"
DEFAULT_PORT = 5672

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

E = TypeVar("E", bound=Enum)


def build_rabbitmq_url(
    *,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    user: str = "guest",
    password: str = "guest",
    vhost: str = "/",
) -> str:
    return (
        f"amqp://{quote(user, safe='')}:{quote(password, safe='')}"
        f"@{host}:{port}/{quote(vhost, safe='')}"
    )


@dataclass(frozen=True)
class MessagingSettings:
    """Everything a publisher or consumer process needs to reach the broker."""

    rabbitmq_url: str = field(default_factory=build_rabbitmq_url)
    queue: QueueConfig = field(default_factory=QueueConfig)
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ack_mode: AckMode = AckMode.AUTO
    publish_mode: PublishMode = PublishMode.UNCONFIRMED

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> MessagingSettings:
        env = os.environ if environ is None else environ

        url = (env.get("RABBITMQ_URL") or "").strip()
        if not url:
            url = build_rabbitmq_url(
                host=env.get("RABBITMQ_HOST", DEFAULT_HOST),
                port=_parse_int(env, "RABBITMQ_PORT", DEFAULT_PORT),
                user=env.get("RABBITMQ_USER", "guest"),
                password=env.get("RABBITMQ_PASSWORD", "guest"),
                vhost=env.get("RABBITMQ_VHOST", "/"),
            )

        return cls(
            rabbitmq_url=url,
            queue=QueueConfig(
                queue_name=env.get("HELLO_QUEUE_NAME", DEFAULT_QUEUE_NAME),
                durable=_parse_bool(env, "HELLO_QUEUE_DURABLE", False),
            ),
            retry=RetryPolicy(
                max_attempts=_parse_int(env, "RABBITMQ_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
                retry_delay=_parse_float(env, "RABBITMQ_RETRY_DELAY", DEFAULT_RETRY_DELAY),
            ),
            ack_mode=_parse_enum(env, "HELLO_ACK_MODE", AckMode, AckMode.AUTO),
            publish_mode=_parse_enum(
                env, "HELLO_PUBLISH_MODE", PublishMode, PublishMode.UNCONFIRMED
            ),
        )


def _parse_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _parse_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _parse_enum(env: Mapping[str, str], name: str, enum_cls: Type[E], default: E) -> E:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return enum_cls(raw.strip().lower())
    except ValueError as exc:
        choices = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"{name} must be one of: {choices}; got {raw!r}") from exc
