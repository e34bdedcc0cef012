"""Configuración por defecto de los archivos CSV.

Centraliza el separador, la codificación y el nivel de logging para que el
modelo y el controlador compartan los mismos valores.
"""
import logging
from dataclasses import dataclass

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class CSVConfig:
    """
    Attributes:
        separator: carácter separador de campos.
        encoding: codificación usada al leer y al guardar.
        log_level: nivel para configure_logging().
    """
    separator: str = ","
    encoding: str = "utf-8"
    log_level: str = "INFO"


DEFAULT_CONFIG = CSVConfig()


def configure_logging(level=None):
    """
    Configura el logging raíz para una aplicación que use los CSV.
    La librería no agrega handlers al importarse; quien la embebe llama:

        from config import configure_logging
        configure_logging("DEBUG")  # muestra cargas y guardados omitidos

    Sin argumento usa DEFAULT_CONFIG.log_level.
    """
    logging.basicConfig(
        level=level or DEFAULT_CONFIG.log_level,
        format=LOG_FORMAT,
    )
