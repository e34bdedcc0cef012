import logging
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from config import DEFAULT_CONFIG
from models.csv_model import CSVTable, OperationResult
from services.csv_service import CSVServiceError, NoHeaderError

logger = logging.getLogger(__name__)


class CSVController:
    """Mantiene varios CSV abiertos, uno por contexto (clave)."""

    def __init__(self, store=None):
        self.tables: Dict[str, CSVTable] = {}
        self._store = store

    # --- LECTURA ---
    def load_csv(self, path, context_key: str, separator: Optional[str] = None) -> CSVTable:
        if separator is None:
            separator = DEFAULT_CONFIG.separator
        try:
            table = CSVTable.open(path, separator, store=self._store)
        except CSVServiceError: raise
        except ValueError: raise
        except Exception as e: raise CSVServiceError(f"Error inesperado al abrir CSV: {e}") from e

        self.tables[context_key] = table
        logger.debug("Contexto '%s' -> %s", context_key, table.file_path)
        return table

    def get_table(self, context_key: str) -> CSVTable:
        if context_key not in self.tables:
            raise CSVServiceError(f"No hay datos cargados en {context_key}.")
        return self.tables[context_key]

    def close(self, context_key: str):
        self.tables.pop(context_key, None)

    # --- MODIFICACIÓN ---
    def set_header(self, context_key: str, columns: Sequence[str]) -> OperationResult:
        return self.get_table(context_key).set_header(columns)

    def add_row(self, context_key: str, fields: Sequence[str]):
        self.get_table(context_key).add_fields(fields)

    def add_lines(self, context_key: str, lines: Iterable[str]):
        self.get_table(context_key).add_lines(lines)

    # --- GUARDADO ---
    def save(self, context_key: str) -> OperationResult:
        return self.get_table(context_key).save()

    def save_all(self) -> Dict[str, OperationResult]:
        return {key: table.save() for key, table in self.tables.items()}

    # ========================================================
    #  EXPORTACIÓN
    # ========================================================
    def to_dataframe(self, context_key: str) -> pd.DataFrame:
        table = self.get_table(context_key)
        if table.header is None:
            raise NoHeaderError(f"El CSV de {context_key} no tiene encabezado.")

        columns = table.header
        expected_cols = len(columns)
        rows: List[List[str]] = []
        for line in table.data_rows:
            row = table.split_line(line)
            # Rellenar o recortar al largo del encabezado
            if len(row) < expected_cols: row = row + [""] * (expected_cols - len(row))
            rows.append(row[:expected_cols])
        return pd.DataFrame(rows, columns=columns)

    def export_excel(self, context_key: str, filename, sheet_name: str = "Datos"):
        df = self.to_dataframe(context_key)
        try:
            with pd.ExcelWriter(filename, engine='openpyxl') as writer:
                df.to_excel(writer, sheet_name=sheet_name, index=False)
                sheet = writer.sheets[sheet_name]
                for column in sheet.columns:
                    cells = list(column)
                    max_length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in cells)
                    sheet.column_dimensions[cells[0].column_letter].width = max_length + 2
        except Exception as e: raise CSVServiceError(f"Error escribiendo Excel: {e}") from e
        logger.info("Excel exportado: %s", filename)
