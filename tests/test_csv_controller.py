import pandas as pd
import pytest

from controllers.csv_controller import CSVController
from services.csv_service import CSVServiceError, NoHeaderError


@pytest.fixture
def controller():
    return CSVController()


def test_load_and_edit_context(controller, tmp_path):
    path = tmp_path / "ventas.csv"
    table = controller.load_csv(path, "ventas")
    assert controller.get_table("ventas") is table

    assert controller.set_header("ventas", ["producto", "cantidad"]).applied
    controller.add_row("ventas", ["pan", "3"])
    controller.add_lines("ventas", ["leche,2,"])
    assert controller.save("ventas").applied

    reloaded = controller.load_csv(path, "otra")
    assert reloaded.rows == ["producto,cantidad,", "pan,3,", "leche,2,"]


def test_unknown_context(controller):
    with pytest.raises(CSVServiceError):
        controller.get_table("nada")


def test_load_empty_file_raises_no_header(controller, tmp_path):
    path = tmp_path / "vacio.csv"
    path.write_text("")
    with pytest.raises(NoHeaderError):
        controller.load_csv(path, "vacio")
    assert "vacio" not in controller.tables


def test_load_with_separator(controller, tmp_path):
    path = tmp_path / "pc.csv"
    path.write_text("a;b\n1;2\n", encoding="utf-8")
    table = controller.load_csv(path, "pc", separator=";")
    assert table.header == ["a", "b"]


def test_save_all_and_close(controller, tmp_path):
    controller.load_csv(tmp_path / "a.csv", "a").set_header(["x"])
    controller.load_csv(tmp_path / "b.csv", "b").set_header(["y"])
    results = controller.save_all()
    assert set(results) == {"a", "b"}
    assert all(r.applied for r in results.values())

    controller.close("a")
    assert "a" not in controller.tables


def test_to_dataframe_pads_and_truncates(controller, tmp_path):
    controller.load_csv(tmp_path / "d.csv", "d")
    controller.set_header("d", ["a", "b"])
    controller.add_row("d", ["1", "2"])
    controller.add_lines("d", ["3", "4,5,6"])

    df = controller.to_dataframe("d")
    assert list(df.columns) == ["a", "b"]
    assert df.values.tolist() == [["1", "2"], ["3", ""], ["4", "5"]]


def test_to_dataframe_without_header(controller, tmp_path):
    controller.load_csv(tmp_path / "n.csv", "n")
    with pytest.raises(NoHeaderError):
        controller.to_dataframe("n")


def test_export_excel(controller, tmp_path):
    controller.load_csv(tmp_path / "e.csv", "e")
    controller.set_header("e", ["nombre", "edad"])
    controller.add_row("e", ["Ana", "30"])
    out = tmp_path / "reporte.xlsx"

    controller.export_excel("e", out)

    df = pd.read_excel(out, sheet_name="Datos", dtype=str)
    assert list(df.columns) == ["nombre", "edad"]
    assert df.values.tolist() == [["Ana", "30"]]


@pytest.mark.parametrize("separator", ["", ";;"])
def test_load_with_bad_separator_raises(controller, tmp_path, separator):
    path = tmp_path / "a.csv"
    with pytest.raises(ValueError):
        controller.load_csv(path, "a", separator=separator)
    assert not path.exists()
    assert "a" not in controller.tables
