import logging
import os
import stat
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)


class CSVServiceError(Exception):
    pass


class NoHeaderError(CSVServiceError):
    """El CSV no tiene encabezado (archivo vacío o encabezado sin definir)."""


class CSVIOError(CSVServiceError, OSError):
    """
    Fallo del sistema de archivos.
      - operation: operación intentada ('create', 'read', 'write')
      - path: archivo afectado
    """
    def __init__(self, operation: str, path, cause: Exception = None):
        self.operation = operation
        self.path = Path(path)
        detail = f": {cause}" if cause else ""
        super().__init__(f"Error de E/S ({operation}) en '{self.path}'{detail}")


class CSVService:
    """
    Acceso al sistema de archivos para los CSV.
    - Lee y escribe el archivo completo (nunca deja el archivo abierto).
    - Lectura y escritura en UTF-8.
    """

    @staticmethod
    def exists(path) -> bool:
        return Path(path).exists()

    @staticmethod
    def create_file(path) -> None:
        try:
            # 'x' falla si otro proceso lo creó entre medio
            with open(path, "x", encoding="utf-8"):
                pass
        except OSError as e:
            raise CSVIOError("create", path, e) from e
        logger.info("Archivo creado: %s", path)

    @staticmethod
    def read_all_lines(path, encoding: str = "utf-8") -> List[str]:
        try:
            with open(path, "r", encoding=encoding) as f:
                return [line.rstrip("\n") for line in f]
        except (UnicodeDecodeError, OSError) as e:
            raise CSVIOError("read", path, e) from e

    @staticmethod
    def write_all_lines(path, lines: Iterable[str], encoding: str = "utf-8") -> None:
        try:
            with open(path, "w", encoding=encoding) as f:
                for line in lines:
                    f.write(line + "\n")
        except OSError as e:
            raise CSVIOError("write", path, e) from e

    @staticmethod
    def is_writable(path) -> bool:
        path = Path(path)
        try:
            mode = path.stat().st_mode
        except OSError:
            return False
        if not stat.S_ISREG(mode): return False
        # Un archivo marcado como solo lectura no se toca, aunque seamos root
        if not mode & (stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH): return False
        return os.access(path, os.W_OK)
