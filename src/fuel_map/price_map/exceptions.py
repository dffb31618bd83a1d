"""
Errors raised while reading an uploaded forecourt CSV.
"""


class CsvFormatError(ValueError):
    """The upload could not be read or does not look like the forecourt CSV."""


NOT_CSV_MESSAGE = (
    'This file does not look like the CSV (it looks like HTML or has no commas). '
    'Please re-download the CSV and try again.'
)
UNREADABLE_MESSAGE = 'Could not read the file.'
UNTERMINATED_QUOTE_MESSAGE = 'Quoted field unterminated'
