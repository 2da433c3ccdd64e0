"""
Configuração de logging do processo
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] [%(name)s] %(message)s"


def setup_logging(
    enable_logging: bool = True,
    log_file: Optional[str] = None,
    level: str = "info"
) -> logging.Logger:
    """
    Configura o logger raiz: console sempre, arquivo se log_file for definido.

    Com enable_logging=False só erros chegam ao console.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    if not enable_logging:
        root.setLevel(logging.ERROR)
        return root

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root
