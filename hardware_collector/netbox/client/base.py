"""
Базовый класс NetBox клиента.

Инициализация подключения к NetBox API через pynetbox,
HTTP-сессия с таймаутом и повтором при HTTP 429.
"""

import logging
import time
from typing import Any, Callable, List, Optional, TypeVar

import pynetbox
import requests

from ...core.credentials import get_netbox_token
from ...core.exceptions import ConfigError, UpstreamFetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
MAX_RETRIES_429 = 3
DEFAULT_RETRY_DELAY = 5

T = TypeVar("T")


class NetBoxSession(requests.Session):
    """
    requests.Session для pynetbox.

    - таймаут по умолчанию для каждого запроса
    - повтор при HTTP 429 (Too Many Requests) с учётом Retry-After
    """

    def __init__(self, timeout: int = DEFAULT_TIMEOUT, verify: bool = True):
        super().__init__()
        self.timeout = timeout
        self.verify = verify

    def request(self, method, url, **kwargs):
        kwargs.setdefault("timeout", self.timeout)

        response = super().request(method, url, **kwargs)
        for attempt in range(1, MAX_RETRIES_429 + 1):
            if response.status_code != 429:
                break
            delay = self._retry_delay(response)
            logger.warning(
                f"NetBox вернул 429, повтор {attempt}/{MAX_RETRIES_429} через {delay}s"
            )
            time.sleep(delay)
            response = super().request(method, url, **kwargs)
        return response

    @staticmethod
    def _retry_delay(response) -> int:
        """Задержка из Retry-After или значение по умолчанию."""
        retry_after = response.headers.get("Retry-After")
        if retry_after and str(retry_after).isdigit():
            return int(retry_after)
        return DEFAULT_RETRY_DELAY


def normalize_url(host: str) -> str:
    """localhost:8000 -> http://localhost:8000"""
    host = host.strip()
    if not host.startswith(("http://", "https://")):
        host = f"http://{host}"
    return host.rstrip("/")


def tag_names(tags: Any) -> List[str]:
    """
    Имена тегов объекта NetBox.

    pynetbox отдаёт теги как Record или dict, в зависимости от версии.
    """
    names = []
    for tag in tags or []:
        if isinstance(tag, dict):
            name = tag.get("name")
        else:
            name = getattr(tag, "name", None)
        if name:
            names.append(str(name))
    return names


class NetBoxClientBase:
    """
    Базовый класс для NetBox клиента.

    Отвечает за инициализацию подключения к NetBox API.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        ssl_verify: bool = True,
        timeout: int = DEFAULT_TIMEOUT,
        config_token: Optional[str] = None,
    ):
        """
        Инициализация клиента NetBox.

        Токен ищется в следующем порядке:
        1. Параметр token
        2. get_netbox_token() - env NETBOX_TOKEN, keyring, config_token

        Args:
            url: Хост или URL NetBox (localhost:8000 или https://netbox.local)
            token: API токен
            ssl_verify: Проверять SSL сертификат
            timeout: Таймаут HTTP запроса в секундах
            config_token: Токен из config.yaml

        Raises:
            ConfigError: URL или токен не указаны
        """
        if not url:
            raise ConfigError("NetBox host не указан. Укажите --host или netbox.url", key="netbox.url")

        self.url = normalize_url(url)
        self._token = token or get_netbox_token(config_token=config_token)
        if not self._token:
            raise ConfigError(
                "NetBox токен не указан. Укажите --token или установите NETBOX_TOKEN",
                key="netbox.token",
            )

        self.api = pynetbox.api(self.url, token=self._token)
        self.api.http_session = NetBoxSession(timeout=timeout, verify=ssl_verify)

        logger.info(f"NetBox клиент инициализирован: {self.url}")

    def _fetch(
        self,
        stage: str,
        call: Callable[[], T],
        device: Optional[str] = None,
    ) -> T:
        """
        Выполняет запрос к NetBox и оборачивает ошибки транспорта.

        Raises:
            UpstreamFetchError: pynetbox или requests вернули ошибку
        """
        try:
            return call()
        except (pynetbox.RequestError, pynetbox.ContentError, requests.RequestException) as e:
            raise UpstreamFetchError(stage, e, device=device) from e
