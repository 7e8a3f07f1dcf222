"""
Получение API токена NetBox.

Приоритет источников:
1. Переменная окружения NETBOX_TOKEN
2. Системное хранилище (keyring: Windows Credential Manager / Secret Service)
3. Токен из config.yaml

Пример использования:
    token = get_netbox_token(config.netbox.token)
"""

import logging
import os
from typing import Optional

import keyring
from keyring.errors import KeyringError

logger = logging.getLogger(__name__)

ENV_TOKEN = "NETBOX_TOKEN"
KEYRING_SERVICE = "hardware_collector"
KEYRING_USERNAME = "netbox_token"


def get_netbox_token(config_token: Optional[str] = None) -> Optional[str]:
    """
    Получает NetBox API токен.

    Args:
        config_token: Токен из config.yaml (fallback)

    Returns:
        str: API токен или None
    """
    env_token = os.getenv(ENV_TOKEN)
    if env_token:
        logger.debug(f"NetBox токен получен из переменной окружения {ENV_TOKEN}")
        return env_token.strip()

    try:
        stored_token = keyring.get_password(KEYRING_SERVICE, KEYRING_USERNAME)
    except KeyringError as e:
        logger.debug(f"Системное хранилище недоступно: {e}")
        stored_token = None
    if stored_token:
        logger.debug("NetBox токен получен из системного хранилища")
        return stored_token.strip()

    if config_token:
        logger.debug("NetBox токен получен из config.yaml")
        return config_token.strip()

    return None
