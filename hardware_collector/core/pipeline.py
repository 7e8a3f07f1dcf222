"""
HardwarePipeline - последовательный сбор машин из NetBox.

Стадии выполняются строго по очереди, каждая проходит по всему набору
машин до старта следующей:

    devices -> interfaces -> ip_ranges

Ошибка любой стадии прерывает запуск и оборачивается в StageError.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .constants import (
    DEFAULT_CSV_FILENAME,
    STAGE_DEVICES,
    STAGE_EXPORT,
    STAGE_INTERFACES,
    STAGE_IP_RANGES,
    STAGE_SERIALIZE,
)
from .context import RunContext
from .domain import DeviceNormalizer, InterfaceResolver, NetworkEnricher
from .exceptions import HardwareCollectorError, PipelineCancelledError, StageError
from .logging import get_logger
from .models import Machine, MatchingOptions

logger = get_logger(__name__)


class StageStatus(str, Enum):
    """Статус выполнения стадии."""
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class StageResult:
    """Результат выполнения стадии."""
    stage: str
    status: StageStatus
    records: int = 0
    duration_ms: int = 0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "stage": self.stage,
            "status": self.status.value,
            "records": self.records,
            "duration_ms": self.duration_ms,
            "error": self.error,
        }


@dataclass
class ExportResult:
    """Пути записанных файлов."""
    csv_path: Path
    json_path: Optional[Path] = None
    machines: List[Machine] = field(default_factory=list)


class HardwarePipeline:
    """
    Сбор машин из NetBox.

    Pipeline владеет набором машин одного запуска; между запусками
    ничего не сохраняется.

    Example:
        pipeline = HardwarePipeline(client)
        machines = pipeline.run(filter_tag="eks-a")
        export_inventory(machines, output_folder=".")
    """

    def __init__(
        self,
        client,
        matching: Optional[MatchingOptions] = None,
        context: Optional[RunContext] = None,
    ):
        """
        Args:
            client: NetBoxClient или объект с list_devices / list_interfaces / list_ip_ranges
            matching: Настройки сопоставления
            context: Контекст запуска (run_id, отмена)
        """
        self.client = client
        self.matching = matching or MatchingOptions()
        self.context = context
        self.results: List[StageResult] = []

        self.normalizer = DeviceNormalizer(control_plane_tag=self.matching.control_plane_tag)
        self.resolver = InterfaceResolver(
            client,
            interface_tag=self.matching.interface_tag,
            policy=self.matching.interface_policy,
            require_mac=self.matching.require_mac,
        )
        self.enricher = NetworkEnricher(policy=self.matching.range_policy)

    def run(
        self,
        filter_tag: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[Machine]:
        """
        Выполняет все стадии.

        Отмена проверяется только до старта: запрос в процессе
        не прерывается.

        Args:
            filter_tag: Тег для фильтрации устройств (None = все)
            cancel_event: Флаг отмены (по умолчанию из context)

        Returns:
            List[Machine]: Машины в порядке устройств NetBox

        Raises:
            PipelineCancelledError: Отмена до старта
            StageError: Ошибка стадии (оригинал в .cause)
        """
        if cancel_event is not None:
            cancelled = cancel_event.is_set()
        else:
            cancelled = self.context is not None and self.context.cancelled
        if cancelled:
            raise PipelineCancelledError()

        self.results = []

        machines = self._run_stage(
            STAGE_DEVICES,
            lambda: self.normalizer.normalize(self.client.list_devices(filter_tag)),
        )
        machines = self._run_stage(STAGE_INTERFACES, lambda: self.resolver.resolve(machines))
        machines = self._run_stage(
            STAGE_IP_RANGES,
            lambda: self.enricher.enrich(machines, self.client.list_ip_ranges()),
        )

        if logger.isEnabledFor(logging.DEBUG):
            for machine in machines:
                logger.debug(f"Машина: {machine.redacted()}", device=machine.hostname)
        return machines

    def _run_stage(self, stage: str, action: Callable[[], List[Machine]]) -> List[Machine]:
        stage_logger = logger.bind(operation=stage)
        started = time.monotonic()
        try:
            machines = action()
        except HardwareCollectorError as e:
            self._record(stage, StageStatus.FAILED, started, error=str(e))
            stage_logger.error(f"Стадия {stage} завершилась ошибкой: {e}")
            raise StageError(stage, e) from e

        result = self._record(stage, StageStatus.COMPLETED, started, records=len(machines))
        stage_logger.info(
            f"Стадия {stage} завершена: {len(machines)} машин за {result.duration_ms} ms"
        )
        return machines

    def _record(self, stage, status, started, records=0, error=None) -> StageResult:
        result = StageResult(
            stage=stage,
            status=status,
            records=records,
            duration_ms=int((time.monotonic() - started) * 1000),
            error=error,
        )
        self.results.append(result)
        return result


def export_inventory(
    machines: List[Machine],
    output_folder: str = ".",
    csv_filename: str = DEFAULT_CSV_FILENAME,
    json_filename: Optional[str] = None,
    delimiter: str = ",",
) -> ExportResult:
    """
    Пропускает машины через промежуточную кодировку и пишет CSV.

    Raises:
        StageError: serialize (DecodeError) или export (ExportError)
    """
    from ..exporters import (
        HardwareCSVExporter,
        JSONExporter,
        deserialize_machines,
        serialize_machines,
    )

    try:
        decoded = deserialize_machines(serialize_machines(machines))
    except HardwareCollectorError as e:
        raise StageError(STAGE_SERIALIZE, e) from e
    logger.debug(f"Промежуточная кодировка: {len(decoded)} машин", operation=STAGE_SERIALIZE)

    try:
        json_path = None
        if json_filename:
            json_path = JSONExporter(output_folder=output_folder).export(decoded, json_filename)
        csv_path = HardwareCSVExporter(output_folder=output_folder, delimiter=delimiter).export(
            decoded, csv_filename
        )
    except HardwareCollectorError as e:
        raise StageError(STAGE_EXPORT, e) from e

    return ExportResult(csv_path=csv_path, json_path=json_path, machines=decoded)
