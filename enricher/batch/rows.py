"""Input rows for a batch: article number, product name and product URL.

Column headers are matched case-insensitively against the German and
English spellings used by the product spreadsheets.
"""

import csv
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from enricher.batch.exceptions import RowSourceError
from enricher.logging.logger import Log
from enricher.pipeline.models import ExtractionItem

PRODUCT_NAME_COLUMNS = ("Produktname", "ProductName", "Product Name")
ARTICLE_NUMBER_COLUMNS = ("Artikelnummer", "ArticleNumber", "Article Number")
URL_COLUMNS = ("URL", "Link")

AUTO_ARTICLE_PREFIX = "auto_"


@dataclass(frozen=True)
class InputRow:
    product_name: str
    article_number: str
    url: str | None = None

    @property
    def has_generated_article_number(self) -> bool:
        return self.article_number.startswith(AUTO_ARTICLE_PREFIX)


def _find_column(row: Mapping[str, object], variants: tuple[str, ...]) -> str:
    lowered = {str(k).strip().lower(): v for k, v in row.items() if k is not None}
    for variant in variants:
        value = lowered.get(variant.lower())
        if value is not None:
            return str(value).strip()
    return ""


def parse_rows(records: Iterable[Mapping[str, object]]) -> list[InputRow]:
    """Turn raw records into rows, dropping those without a product name.

    Rows without an article number get ``auto_<n>``, where ``n`` is the
    1-based position of the record in the input.
    """
    rows: list[InputRow] = []
    for index, record in enumerate(records, start=1):
        product_name = _find_column(record, PRODUCT_NAME_COLUMNS)
        if not product_name:
            continue
        article_number = _find_column(record, ARTICLE_NUMBER_COLUMNS)
        url = _find_column(record, URL_COLUMNS)
        rows.append(
            InputRow(
                product_name=product_name,
                article_number=article_number or f"{AUTO_ARTICLE_PREFIX}{index}",
                url=url or None,
            )
        )
    return rows


def read_rows(path: Path) -> list[InputRow]:
    """Read rows from a CSV file (comma, semicolon or tab separated).

    Raises:
        RowSourceError: if the file cannot be read, has no product-name
            column, or contains no usable rows.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise RowSourceError(f"Cannot read {path}: {exc}") from exc
    if not text.strip():
        raise RowSourceError(f"{path} contains no data")

    try:
        dialect: type[csv.Dialect] | csv.Dialect = csv.Sniffer().sniff(
            text[:4096], delimiters=",;\t"
        )
    except csv.Error:
        dialect = csv.excel
    reader = csv.DictReader(text.splitlines(), dialect=dialect)

    headers = [h.strip().lower() for h in reader.fieldnames or []]
    if not any(column.lower() in headers for column in PRODUCT_NAME_COLUMNS):
        available = ", ".join(reader.fieldnames or []) or "none"
        raise RowSourceError(
            f"{path} needs a 'Produktname' or 'ProductName' column. Found columns: {available}"
        )

    rows = parse_rows(reader)
    if not rows:
        raise RowSourceError(f"{path} has no rows with a product name")
    with_article = sum(1 for r in rows if not r.has_generated_article_number)
    with_url = sum(1 for r in rows if r.url)
    Log.info(
        f"{len(rows)} product(s) loaded from {path.name}: "
        f"{with_article} with article number, {with_url} with URL"
    )
    return rows


def rows_to_items(rows: Iterable[InputRow], *, documents_required: bool) -> list[ExtractionItem]:
    return [
        ExtractionItem(
            product_name=row.product_name,
            article_number=row.article_number,
            url=row.url,
            documents_required=documents_required,
        )
        for row in rows
    ]
