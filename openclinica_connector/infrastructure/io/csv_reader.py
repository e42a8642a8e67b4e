"""CSV input for item value tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import pandas as pd

from .exceptions import DataParseError, DataSourceNotFoundError

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(slots=True)
class CSVReadOptions:
    # utf-8-sig also accepts the BOM spreadsheet exports prepend.
    encoding: str = "utf-8-sig"
    delimiter: str = ","
    normalize_headers: bool = True
    drop_blank_rows: bool = True


class CSVReader:
    """Read a CSV file into a DataFrame of strings.

    Only empty cells are missing. Literal ``NA``, ``null`` or ``N/A`` are kept
    as text because they can be legitimate item values, and numbers keep
    their written form (``007`` stays ``007``).
    """

    def read(self, path: Path, options: CSVReadOptions | None = None) -> pd.DataFrame:
        options = options or CSVReadOptions()
        if not path.is_file():
            reason = "Not a file" if path.exists() else "File not found"
            raise DataSourceNotFoundError(f"{reason}: {path}")
        try:
            frame = pd.read_csv(
                path,
                dtype=str,
                sep=options.delimiter,
                encoding=options.encoding,
                keep_default_na=False,
                na_values=[""],
                skip_blank_lines=options.drop_blank_rows,
            )
        except pd.errors.EmptyDataError as exc:
            raise DataParseError(f"CSV file is empty: {path}") from exc
        except (pd.errors.ParserError, UnicodeDecodeError) as exc:
            raise DataParseError(
                f"Cannot read {path} as {options.encoding} CSV: {exc}"
            ) from exc

        if options.normalize_headers:
            frame.columns = [str(column).strip() for column in frame.columns]
        if options.drop_blank_rows:
            # Rows of bare delimiters survive skip_blank_lines.
            frame = frame.dropna(how="all").reset_index(drop=True)
        return frame
