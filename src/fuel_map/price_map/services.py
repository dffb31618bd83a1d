"""
Forecourt CSV ingestion.

Turns an uploaded fuel price export into ForecourtPoint records:
- Rejects files that are clearly not the CSV (HTML pages, no commas)
- Keeps every cell as a raw string
- Skips rows without a usable latitude/longitude
- Keeps rows with too many or too few fields and reports the first one
- Reports an unterminated quote, keeping the rows before it
"""
import io
import logging
from typing import Dict, List, Optional

import pandas as pd

from .exceptions import (
    NOT_CSV_MESSAGE,
    UNREADABLE_MESSAGE,
    UNTERMINATED_QUOTE_MESSAGE,
    CsvFormatError,
)
from .models import ForecourtPoint, ParseResult
from .pricing import extract_prices, format_number, parse_number

logger = logging.getLogger('price_map')

NODE_ID_COLUMN = 'forecourts.node_id'
LATITUDE_COLUMN = 'forecourts.location.latitude'
LONGITUDE_COLUMN = 'forecourts.location.longitude'
TRADING_NAME_COLUMN = 'forecourts.trading_name'
BRAND_COLUMN = 'forecourts.brand_name'
POSTCODE_COLUMN = 'forecourts.location.postcode'
UPDATED_COLUMN = 'latest_update_timestamp'
ADDRESS_COLUMNS = [
    'forecourts.location.address_line_1',
    'forecourts.location.address_line_2',
    'forecourts.location.city',
    'forecourts.location.county',
]

UNKNOWN_SITE = 'Unknown site'
UNKNOWN_BRAND = 'Unknown brand'


def field_count_message(expected: int, parsed: int) -> str:
    kind = 'many' if parsed > expected else 'few'
    return f"Too {kind} fields: expected {expected} fields but parsed {parsed}"


def find_unterminated_quote(text: str) -> Optional[int]:
    """
    Offset of a quoted field that is still open at the end of the text.

    A quote only opens a field at its start; inside a quoted field a
    doubled quote is literal.
    """
    if '"' not in text:
        return None
    in_quotes = False
    field_start = True
    opened_at = None
    i = 0
    while i < len(text):
        char = text[i]
        if in_quotes:
            if char == '"':
                if text[i + 1:i + 2] == '"':
                    i += 2
                    continue
                in_quotes = False
                field_start = False
        elif char == '"' and field_start:
            in_quotes = True
            opened_at = i
        else:
            field_start = char in ',\r\n'
        i += 1
    return opened_at if in_quotes else None


class ForecourtCsvService:
    """
    Service for reading forecourt CSV uploads.

    Nothing is persisted: each call returns a fresh ParseResult.
    """

    encoding = 'utf-8-sig'

    def parse_upload(self, uploaded_file) -> ParseResult:
        """
        Read a Django UploadedFile (or any binary file object with a name).

        Raises:
            CsvFormatError: the file cannot be read or is not the CSV
        """
        file_name = getattr(uploaded_file, 'name', '') or ''
        try:
            raw = uploaded_file.read()
        except OSError as e:
            logger.warning(f"Could not read upload {file_name!r}: {e}")
            raise CsvFormatError(UNREADABLE_MESSAGE)

        if isinstance(raw, bytes):
            text = raw.decode(self.encoding, errors='replace')
        else:
            text = raw
        return self.parse(text, file_name=file_name)

    def parse(self, text: str, file_name: str = '') -> ParseResult:
        """
        Parse CSV text into forecourt points.

        Rows with more fields than the header keep their first fields; rows
        with fewer are padded with blanks. The first problem found becomes
        the result's error.

        Raises:
            CsvFormatError: the text does not look like the CSV
        """
        if not self.looks_like_csv(text):
            logger.warning(f"Rejected {file_name!r}: not a CSV file")
            raise CsvFormatError(NOT_CSV_MESSAGE)

        result = ParseResult(file_name=file_name)

        quote_at = find_unterminated_quote(text)
        if quote_at is not None:
            # The open field runs to the end of the file
            result.error = UNTERMINATED_QUOTE_MESSAGE
            logger.warning(f"Unterminated quote at offset {quote_at} in {file_name!r}")
            text = text + '"'

        try:
            rows = self._read_rows(text)
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.warning(f"Failed to parse {file_name!r}: {e}")
            result.error = str(e).strip()
            return result

        # Cells are never NA, so padding is the only missing value
        field_counts = rows.notna().sum(axis=1)
        width = int(field_counts.iloc[0])
        header = [str(name) for name in rows.iloc[0, :width]]
        df = rows.iloc[1:, :width].fillna('').set_axis(header, axis=1)

        mismatched = field_counts.iloc[1:][field_counts.iloc[1:] != width]
        if len(mismatched):
            logger.warning(
                f"{len(mismatched)} rows in {file_name!r} do not have {width} fields"
            )
            if result.error is None:
                result.error = field_count_message(width, int(mismatched.iloc[0]))

        skipped = 0
        for row in df.to_dict(orient='records'):
            point = self.row_to_point(row)
            if point is None:
                skipped += 1
                continue
            result.points.append(point)

        logger.info(
            f"Parsed {file_name!r}: {len(df)} rows, "
            f"{len(result.points)} forecourts, {skipped} without coordinates"
        )
        return result

    @staticmethod
    def _read_rows(text: str) -> pd.DataFrame:
        """
        Read every record, header included, as raw cells.

        The frame is as wide as the longest record; shorter records are
        padded with NA. The header is read as a plain row so an over-long
        first data row cannot become an implicit index.
        """
        long_rows: List[int] = []

        def on_bad_line(line):
            long_rows.append(len(line))
            return None

        options = dict(
            header=None,
            dtype=object,
            keep_default_na=False,
            skip_blank_lines=True,
            engine='python',
        )
        rows = pd.read_csv(io.StringIO(text), on_bad_lines=on_bad_line, **options)
        if not long_rows:
            return rows

        width = max(rows.shape[1], max(long_rows))
        return pd.read_csv(io.StringIO(text), names=list(range(width)), **options)

    @staticmethod
    def looks_like_csv(text: str) -> bool:
        """Cheap check that catches HTML error pages saved as .csv"""
        trimmed = text.lstrip()
        if ',' not in trimmed:
            return False
        return not (trimmed.startswith('<!DOCTYPE') or trimmed.startswith('<html'))

    @staticmethod
    def row_to_point(row: Dict[str, str]) -> Optional[ForecourtPoint]:
        """Build a ForecourtPoint, or None when the row has no valid location."""
        lat = parse_number(row.get(LATITUDE_COLUMN, ''))
        lng = parse_number(row.get(LONGITUDE_COLUMN, ''))
        if lat is None or lng is None:
            return None

        address = ', '.join(
            row.get(column) for column in ADDRESS_COLUMNS if row.get(column)
        )

        return ForecourtPoint(
            id=row.get(NODE_ID_COLUMN) or f"{format_number(lat)},{format_number(lng)}",
            lat=lat,
            lng=lng,
            trading_name=row.get(TRADING_NAME_COLUMN) or UNKNOWN_SITE,
            brand=row.get(BRAND_COLUMN) or UNKNOWN_BRAND,
            address=address,
            postcode=row.get(POSTCODE_COLUMN) or '',
            updated=row.get(UPDATED_COLUMN) or '',
            prices=extract_prices(row),
        )
