"""
Контекст выполнения для отслеживания запусков.

RunContext создаётся один раз в CLI и прокидывается в pipeline:
- run_id: идентификатор запуска (попадает в каждую строку лога)
- started_at: время начала
- output_dir: папка для hardware.csv и JSON
- cancel_event: флаг отмены, проверяется только перед стартом pipeline

Пример использования:
    ctx = RunContext.create(output_dir=Path("."))
    set_current_context(ctx)
    pipeline = HardwarePipeline(client, context=ctx)
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Literal, Optional

logger = logging.getLogger(__name__)

TriggerSource = Literal["cli", "api", "test"]


@dataclass
class RunContext:
    """
    Контекст выполнения.

    Attributes:
        run_id: Идентификатор запуска (timestamp)
        started_at: Время начала выполнения
        triggered_by: Источник запуска
        output_dir: Папка для файлов экспорта
        cancel_event: Установлен -> запуск отменён
    """

    run_id: str
    started_at: datetime
    triggered_by: TriggerSource = "cli"
    output_dir: Path = field(default_factory=lambda: Path("."))
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @classmethod
    def create(
        cls,
        triggered_by: TriggerSource = "cli",
        output_dir: Optional[Path] = None,
    ) -> "RunContext":
        """
        Создаёт новый контекст выполнения.

        Args:
            triggered_by: Источник запуска
            output_dir: Папка для файлов (default: текущая)

        Returns:
            RunContext: Новый контекст
        """
        started_at = datetime.now()
        ctx = cls(
            run_id=started_at.strftime("%Y-%m-%dT%H-%M-%S"),
            started_at=started_at,
            triggered_by=triggered_by,
            output_dir=Path(output_dir) if output_dir else Path("."),
        )
        logger.debug(f"Created RunContext: {ctx.run_id}")
        return ctx

    def cancel(self) -> None:
        """Отменяет запуск (учитывается только до старта pipeline)."""
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    @property
    def elapsed_seconds(self) -> float:
        return (datetime.now() - self.started_at).total_seconds()

    @property
    def elapsed_human(self) -> str:
        """Время выполнения в человекочитаемом формате."""
        elapsed = self.elapsed_seconds
        if elapsed < 60:
            return f"{elapsed:.1f}s"
        minutes = int(elapsed // 60)
        seconds = int(elapsed % 60)
        return f"{minutes}m {seconds}s"

    def __str__(self) -> str:
        return f"RunContext({self.run_id})"


# Глобальный контекст для логирования
_current_context: Optional[RunContext] = None


def get_current_context() -> Optional[RunContext]:
    """Возвращает текущий глобальный контекст."""
    return _current_context


def set_current_context(ctx: Optional[RunContext]) -> None:
    """Устанавливает текущий глобальный контекст."""
    global _current_context
    _current_context = ctx
