"""
Базовый класс экспортера машин.

Определяет интерфейс для всех экспортеров и общую логику:
папка вывода, имя файла, расширение, обёртка ошибок записи.

Пример создания своего экспортера:
    class YAMLExporter(BaseExporter):
        file_extension = ".yaml"

        def _write(self, machines, file_path):
            ...
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from ..core.exceptions import ExportError
from ..core.models import Machine

logger = logging.getLogger(__name__)


class BaseExporter(ABC):
    """
    Абстрактный базовый класс для экспортеров.

    Attributes:
        output_folder: Папка для сохранения файлов
        encoding: Кодировка файлов
        default_filename: Имя файла если не указано явно
    """

    file_extension: str = ".txt"
    default_filename: str = "hardware"

    def __init__(self, output_folder: str = ".", encoding: str = "utf-8"):
        """
        Args:
            output_folder: Папка для сохранения
            encoding: Кодировка файлов
        """
        self.output_folder = Path(output_folder)
        self.encoding = encoding

    def export(self, machines: List[Machine], filename: Optional[str] = None) -> Path:
        """
        Экспортирует машины в файл.

        Пустой список тоже экспортируется (файл только с заголовком
        или пустым массивом).

        Args:
            machines: Машины в порядке вывода
            filename: Имя файла (без пути)

        Returns:
            Path: Путь к созданному файлу

        Raises:
            ExportError: Ошибка создания папки или записи файла
        """
        filename = filename or self.default_filename
        if not filename.endswith(self.file_extension):
            filename += self.file_extension

        file_path = self.output_folder / filename
        try:
            self._ensure_output_folder()
            self._write(machines, file_path)
        except OSError as e:
            raise ExportError(file_path, e) from e

        logger.info(f"Данные экспортированы: {file_path}")
        return file_path

    @abstractmethod
    def _write(self, machines: List[Machine], file_path: Path) -> None:
        """Записывает машины в файл."""

    def _ensure_output_folder(self) -> None:
        """Создаёт папку если не существует."""
        if not self.output_folder.exists():
            self.output_folder.mkdir(parents=True, exist_ok=True)
            logger.info(f"Создана папка: {self.output_folder}")
