"""
Logging estruturado da aplicação.
Campos extras passados como kwargs aparecem como ``chave=valor`` no final da linha.
"""

import logging
import sys
from typing import Optional

from painel_metas.core.config import settings

# Atributos padrão de LogRecord; tudo fora disso é campo estruturado
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "timestamp"}


class StructuredLogger:
    """Fachada fina sobre ``logging.Logger`` que aceita campos nomeados."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, message: str, **kwargs):
        self.logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(message, extra=kwargs)

    def error(self, message: str, exc: Optional[BaseException] = None, **kwargs):
        """Registra erro; ``exc`` anexa o traceback."""
        self.logger.error(message, exc_info=exc, extra=kwargs)


class StructuredFormatter(logging.Formatter):
    """``[timestamp] LEVEL nome: mensagem | k=v | k=v``"""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.default_time_format)
        line = f"[{timestamp}] {record.levelname} {record.name}: {record.getMessage()}"

        extra_fields = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        ]
        if extra_fields:
            line = f"{line} | {' | '.join(extra_fields)}"

        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(
    level: str = "INFO",
    format_type: str = "structured",
    enable_console: bool = True,
    enable_file: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """
    Configura o logging de toda a aplicação.

    Args:
        level: Nível (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'structured' ou 'simple'
        enable_console: Habilita saída em stdout
        enable_file: Habilita saída em arquivo
        log_file: Caminho do arquivo (obrigatório se enable_file=True)
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(numeric_level)

    if format_type == "structured":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if enable_file and log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Bibliotecas barulhentas
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    return StructuredLogger(name)


app_logger = get_logger("painel_metas")
engine_logger = get_logger("painel_metas.engine")
api_logger = get_logger("painel_metas.api")


def init_app_logging() -> None:
    """Inicializa o logging a partir das settings."""
    log_config = {
        "level": settings.LOG_LEVEL,
        "format_type": "structured",
        "enable_console": True,
        "enable_file": settings.LOG_TO_FILE,
        "log_file": settings.LOG_FILE_PATH,
    }
    configure_logging(**log_config)
    app_logger.info("Logging inicializado", **log_config)
