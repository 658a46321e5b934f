import csv
from io import StringIO
from typing import Iterable

from inventory.models import Product

CSV_HEADER = ["Name", "Description", "Price"]


def _field(value) -> str:
    return "" if value is None else str(value)


def products_to_csv(products: Iterable[Product]) -> StringIO:
    buf = StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for product in products:
        writer.writerow(
            [_field(product.name), _field(product.description), _field(product.price)]
        )
    buf.seek(0)
    return buf


__all__ = [
    "CSV_HEADER",
    "products_to_csv",
]
