from pathlib import Path

import pytest

from enricher.batch.exceptions import RowSourceError
from enricher.batch.rows import InputRow, parse_rows, read_rows, rows_to_items


def _csv(tmp_path: Path, text: str, encoding: str = "utf-8") -> Path:
    path = tmp_path / "rows.csv"
    path.write_text(text, encoding=encoding)
    return path


class TestParseRows:
    def test_german_headers(self) -> None:
        rows = parse_rows(
            [{"Artikelnummer": "A1", "Produktname": "Boiler X", "URL": "https://shop.example/1"}]
        )
        assert rows == [InputRow("Boiler X", "A1", "https://shop.example/1")]

    def test_english_headers_any_case(self) -> None:
        rows = parse_rows([{"article number": " A1 ", "PRODUCTNAME": " Boiler X ", "link": ""}])
        assert rows == [InputRow("Boiler X", "A1", None)]

    def test_rows_without_product_name_are_dropped(self) -> None:
        rows = parse_rows([{"Produktname": "", "Artikelnummer": "A1"}, {"Produktname": "B"}])
        assert [r.product_name for r in rows] == ["B"]

    def test_missing_article_number_is_generated_from_position(self) -> None:
        rows = parse_rows([{"Produktname": "A"}, {"Produktname": ""}, {"Produktname": "C"}])
        assert [r.article_number for r in rows] == ["auto_1", "auto_3"]
        assert all(r.has_generated_article_number for r in rows)


class TestReadRows:
    def test_comma_separated(self, tmp_path: Path) -> None:
        path = _csv(tmp_path, "Artikelnummer,Produktname,URL\nA1,Boiler X,https://x.test\nA2,Boiler Y,\n")
        rows = read_rows(path)
        assert [(r.article_number, r.url) for r in rows] == [("A1", "https://x.test"), ("A2", None)]

    def test_semicolon_separated_with_bom(self, tmp_path: Path) -> None:
        path = _csv(tmp_path, "Artikelnummer;Produktname\nA1;Kessel Größe 2\n", encoding="utf-8-sig")
        assert read_rows(path) == [InputRow("Kessel Größe 2", "A1", None)]

    def test_tab_separated(self, tmp_path: Path) -> None:
        path = _csv(tmp_path, "ProductName\tArticleNumber\nBoiler X\tA1\n")
        assert read_rows(path) == [InputRow("Boiler X", "A1", None)]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RowSourceError, match="Cannot read"):
            read_rows(tmp_path / "missing.csv")

    def test_empty_file(self, tmp_path: Path) -> None:
        with pytest.raises(RowSourceError, match="no data"):
            read_rows(_csv(tmp_path, "  \n"))

    def test_missing_product_name_column(self, tmp_path: Path) -> None:
        with pytest.raises(RowSourceError, match="Found columns: Artikelnummer, URL"):
            read_rows(_csv(tmp_path, "Artikelnummer,URL\nA1,https://x.test\n"))

    def test_no_usable_rows(self, tmp_path: Path) -> None:
        with pytest.raises(RowSourceError, match="no rows with a product name"):
            read_rows(_csv(tmp_path, "Artikelnummer,Produktname\nA1,\nA2,\n"))


class TestRowsToItems:
    def test_builds_items_in_order(self) -> None:
        items = rows_to_items(
            [InputRow("Boiler X", "A1", "https://x.test"), InputRow("Boiler Y", "auto_2")],
            documents_required=True,
        )
        assert [i.article_number for i in items] == ["A1", "auto_2"]
        assert items[0].url == "https://x.test"
        assert all(i.documents_required for i in items)
        assert items[0].item_id != items[1].item_id
