"""
Точка входа для запуска модуля.

    python -m hardware_collector --host localhost:8000 --token xxx
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
