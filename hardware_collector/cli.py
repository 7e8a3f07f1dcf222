"""
CLI модуль hardware_collector.

Читает инвентарь из NetBox и пишет hardware.csv для provisioning.

Примеры использования:
    python -m hardware_collector --host localhost:8000 --token xxx
    python -m hardware_collector --host https://netbox.local --tag eks-a --debug
    python -m hardware_collector --host localhost:8000 --json hardware.json -o out/

Коды выхода:
    0   успех
    1   ошибка стадии pipeline или экспорта
    2   неверные аргументы или конфигурация
    130 прерывание (Ctrl+C)
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_config
from .core.context import RunContext, set_current_context
from .core.exceptions import ConfigError, HardwareCollectorError, format_error_for_log
from .core.logging import LogConfig, setup_logging_from_config
from .core.models import MatchingOptions
from .core.pipeline import HardwarePipeline, export_inventory

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def setup_parser() -> argparse.ArgumentParser:
    """
    Создаёт парсер аргументов командной строки.

    Returns:
        ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        prog="hardware_collector",
        description="Выгрузка физических машин из NetBox в hardware.csv",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры:
  %(prog)s --host localhost:8000 --token xxx
  %(prog)s --host https://netbox.local --tag eks-a --debug
  %(prog)s --host localhost:8000 --all-devices --json hardware.json
        """,
    )

    parser.add_argument("--host", default=None, help="Хост или URL NetBox (или NETBOX_URL)")
    parser.add_argument("--token", default=None, help="API токен NetBox (или NETBOX_TOKEN)")
    parser.add_argument(
        "--tag",
        default=None,
        help="Тег для фильтрации устройств (default: из конфигурации, eks-a)",
    )
    parser.add_argument(
        "--all-devices",
        action="store_true",
        help="Не фильтровать устройства по тегу",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Подробный вывод (DEBUG)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Папка для файлов (default: текущая)",
    )
    parser.add_argument(
        "--csv-name",
        default=None,
        help="Имя CSV файла (default: hardware.csv)",
    )
    parser.add_argument(
        "--json",
        dest="json_name",
        default=None,
        help="Дополнительно сохранить промежуточный JSON с этим именем",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Путь к файлу конфигурации YAML (default: config.yaml)",
    )
    parser.add_argument(
        "--no-verify-ssl",
        action="store_true",
        help="Не проверять SSL сертификат NetBox",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Логи в формате JSON",
    )
    return parser


def _setup_logging(args: argparse.Namespace, app_config) -> None:
    """Логирование из config.yaml с приоритетом флагов CLI."""
    log_config = LogConfig.from_dict(app_config.logging.to_dict())
    if args.debug or app_config.debug:
        log_config.level = logging.DEBUG
    if args.json_logs:
        log_config.json_format = True
    setup_logging_from_config(log_config)


def _build_client(args: argparse.Namespace, app_config):
    from .netbox.client import NetBoxClient

    return NetBoxClient(
        url=args.host or app_config.netbox.url,
        token=args.token,
        ssl_verify=app_config.netbox.verify_ssl and not args.no_verify_ssl,
        timeout=app_config.netbox.timeout,
        config_token=app_config.netbox.token,
    )


def run(args: argparse.Namespace) -> int:
    """Выполняет выгрузку по разобранным аргументам."""
    try:
        app_config = load_config(args.config)
    except ConfigError as e:
        print(format_error_for_log(e), file=sys.stderr)
        return EXIT_USAGE

    _setup_logging(args, app_config)

    output_dir = Path(args.output or app_config.output.output_folder)
    ctx = RunContext.create(triggered_by="cli", output_dir=output_dir)
    set_current_context(ctx)

    try:
        client = _build_client(args, app_config)
    except ConfigError as e:
        print(format_error_for_log(e), file=sys.stderr)
        return EXIT_USAGE

    filter_tag = None if args.all_devices else (args.tag or app_config.netbox.filter_tag)
    matching = MatchingOptions.from_dict(app_config.matching.to_dict())

    logger.info(f"Run started: {ctx.run_id} (tag={filter_tag})")
    try:
        pipeline = HardwarePipeline(client, matching=matching, context=ctx)
        machines = pipeline.run(filter_tag=filter_tag)
        result = export_inventory(
            machines,
            output_folder=str(ctx.output_dir),
            csv_filename=args.csv_name or app_config.output.csv_filename,
            json_filename=args.json_name or app_config.output.json_filename,
            delimiter=app_config.output.csv_delimiter,
        )
    except HardwareCollectorError as e:
        print(format_error_for_log(e), file=sys.stderr)
        return EXIT_FAILURE

    logger.info(f"CSV сохранён: {result.csv_path} ({len(result.machines)} машин)")
    logger.info(f"Run completed: {ctx.run_id} (elapsed={ctx.elapsed_human})")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция CLI."""
    parser = setup_parser()
    args = parser.parse_args(argv)
    try:
        return run(args)
    except KeyboardInterrupt:
        print("Прервано пользователем", file=sys.stderr)
        return EXIT_INTERRUPTED
    finally:
        set_current_context(None)


if __name__ == "__main__":
    sys.exit(main())
