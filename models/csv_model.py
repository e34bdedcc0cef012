import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from config import DEFAULT_CONFIG
from services.csv_service import CSVService, NoHeaderError

logger = logging.getLogger(__name__)

APPLIED = "applied"
SKIPPED = "skipped"


@dataclass(frozen=True)
class OperationResult:
    """Resultado de set_header() y save(): aplicado u omitido (con motivo)."""
    status: str
    reason: Optional[str] = None

    @classmethod
    def applied_result(cls):
        return cls(APPLIED)

    @classmethod
    def skipped(cls, reason: str):
        return cls(SKIPPED, reason)

    @property
    def applied(self) -> bool:
        return self.status == APPLIED

    def __bool__(self):
        return self.applied


def join_fields(fields: Iterable[str], separator: str) -> str:
    # Cada campo lleva el separador detrás, también el último: "x,y,"
    return "".join(f"{field}{separator}" for field in fields)


def split_fields(line: str, separator: str) -> List[str]:
    if separator not in line:
        return [line]
    parts = line.split(separator)
    # Los campos vacíos del final se descartan ("a,b," -> ["a", "b"])
    while parts and parts[-1] == "":
        parts.pop()
    return parts


class CSVTable:
    """
    Representa un archivo CSV en memoria:
      - rows: líneas crudas; rows[0] es el encabezado si existe
      - header: lista de columnas, o None si todavía no hay encabezado
    Si el archivo existe se lee completo; si no existe se crea vacío.
    """

    def __init__(self, file_path, separator: str = DEFAULT_CONFIG.separator, store=None):
        if not isinstance(separator, str) or len(separator) != 1:
            raise ValueError(f"El separador debe ser un único carácter: {separator!r}")

        self._file_path = Path(file_path)
        self._separator = separator
        self._store = store or CSVService
        self._header: Optional[List[str]] = None

        if self._store.exists(self._file_path):
            self._rows: List[str] = self._store.read_all_lines(self._file_path, DEFAULT_CONFIG.encoding)
            if not self._rows:
                raise NoHeaderError(f"CSV sin encabezado: {self._file_path}")
            self._header = split_fields(self._rows[0], separator)
            logger.debug("CSV cargado: %s (%d líneas)", self._file_path, len(self._rows))
        else:
            self._store.create_file(self._file_path)
            self._rows = []

    @classmethod
    def open(cls, file_path, separator: str = DEFAULT_CONFIG.separator, store=None) -> "CSVTable":
        return cls(file_path, separator, store)

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def rows(self) -> List[str]:
        return self._rows

    @property
    def header(self) -> Optional[List[str]]:
        return self._header

    @property
    def data_rows(self) -> List[str]:
        return self._rows[1:]

    def __len__(self):
        return len(self._rows)

    def split_line(self, line: str) -> List[str]:
        return split_fields(line, self._separator)

    # --- ENCABEZADO ---
    def set_header(self, columns: Sequence[str]) -> OperationResult:
        """Solo se aplica si el CSV está vacío; si ya hay líneas se omite."""
        if isinstance(columns, str):
            raise TypeError("El encabezado debe ser una lista de columnas, no un str.")
        if self._rows:
            logger.debug("Encabezado omitido en %s: el CSV ya tiene líneas", self._file_path)
            return OperationResult.skipped("El CSV ya tiene líneas")

        self._header = list(columns)
        self._rows.append(join_fields(self._header, self._separator))
        return OperationResult.applied_result()

    # --- FILAS ---
    def add_line(self, line) -> None:
        """
        Agrega una fila al final.
        - str: la línea completa, sin validar separadores ni cantidad de campos.
        - secuencia de str: los valores, unidos con el separador.
        """
        if not isinstance(line, str):
            line = join_fields(line, self._separator)
        if self._header is None:
            raise NoHeaderError("No hay encabezado definido en el CSV.")
        self._rows.append(line)

    def add_fields(self, fields: Sequence[str]) -> None:
        if isinstance(fields, str):
            raise TypeError("Los campos deben ser una lista, no un str.")
        self.add_line(join_fields(fields, self._separator))

    def add_lines(self, lines: Iterable[str]) -> None:
        if isinstance(lines, str):
            raise TypeError("add_lines recibe una lista de líneas; para una sola use add_line().")
        for line in lines:
            self.add_line(line)

    # --- GUARDADO ---
    def save(self) -> OperationResult:
        if not self._store.is_writable(self._file_path):
            logger.debug("Guardado omitido: %s no se puede escribir", self._file_path)
            return OperationResult.skipped("El archivo no se puede escribir")

        self._store.write_all_lines(self._file_path, self._rows, DEFAULT_CONFIG.encoding)
        logger.info("CSV guardado: %s (%d líneas)", self._file_path, len(self._rows))
        return OperationResult.applied_result()
