"""CSV import/export shared by every resource router

read_csv_rows() and import_csv() only check row shape (are the required columns there);
type coercion and schema validation happen in Resource.import_rows().
"""
import csv
import io
from datetime import date, datetime

LIST_SEPARATOR = ';'


def read_csv_rows(buffer, required_fields):
    """Parse a CSV upload into (row_number, row dict) pairs

    Row numbers are 1-based positions among the data rows of the file,
    blank lines included, so they stay valid after later rejections.

    Args:
        buffer: Raw bytes of the uploaded file (UTF-8, BOM tolerated)
        required_fields: Column names every row must carry

    Returns:
        tuple: (numbered, invalid)
        numbered: list of (row_number, row dict keyed by header name)
        invalid: list of {'row', 'error', 'data'} for rejected rows

    Raises:
        UnicodeDecodeError: if the buffer is not UTF-8
    """
    text = buffer.decode('utf-8-sig')
    reader = csv.DictReader(io.StringIO(text))

    numbered = []
    invalid = []
    for row_number, row in enumerate(reader, start=1):
        # DictReader stores surplus cells under the None key
        row.pop(None, None)
        if not any((value or '').strip() for value in row.values()):
            continue

        missing = [field for field in required_fields if row.get(field) is None]
        if missing:
            invalid.append({
                'row': row_number,
                'error': f"Missing fields: {', '.join(missing)}",
                'data': row
            })
            continue

        numbered.append((row_number, {key.strip(): value for key, value in row.items()}))

    return numbered, invalid


def import_csv(buffer, required_fields):
    """Parse a CSV upload into row dicts

    Returns:
        tuple: (valid, invalid) as read_csv_rows() without the row numbers
    """
    numbered, invalid = read_csv_rows(buffer, required_fields)
    return [row for _, row in numbered], invalid


def _format_cell(value):
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        return LIST_SEPARATOR.join(_format_cell(item) for item in value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def export_csv(rows, fields):
    """Serialize documents to CSV bytes with a header row in `fields` order"""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(fields)
    for row in rows:
        writer.writerow([_format_cell(row.get(field)) for field in fields])
    return output.getvalue().encode('utf-8')
