import csv
import os

from health_export_tables.handlers import (
    cell_text,
    compute_row_count_text,
    export_choices_update,
    export_tables_handler,
    load_export_with_preview,
    preview_category_handler,
)
from health_export_tables.table import MISSING


def _upload(tmp_path, export_xml, include_end_date=False):
    path = tmp_path / 'export.xml'
    path.write_text(export_xml, encoding='utf-8')
    return load_export_with_preview(str(path), include_end_date)


def test_cell_text():
    from datetime import date, time
    assert cell_text(MISSING) == ''
    assert cell_text(date(2023, 1, 2)) == '2023-01-02'
    assert cell_text(time(7, 5)) == '07:05:00'
    assert cell_text(62.0) == '62.0'


def test_no_upload():
    result, dropdown, message, profile, summary, count = load_export_with_preview(None)
    assert result is None
    assert message == "No file uploaded."
    assert dropdown['choices'] == []


def test_upload_runs_pipeline(tmp_path, export_xml):
    result, dropdown, message, profile, summary, count = _upload(tmp_path, export_xml)
    assert result is not None
    assert dropdown['choices'] == ['HeartRate', 'SleepAnalysis']
    assert dropdown['value'] == 'HeartRate'
    assert message == "Successfully loaded. Found 2 categories."
    assert profile['DateOfBirth'] == '1980-02-29'
    assert summary['rows'].tolist() == [2, 1]
    assert count == "Records: 3 (categories: 2)"
    assert export_choices_update(result)['choices'] == ['HeartRate', 'SleepAnalysis']


def test_upload_with_end_date(tmp_path, export_xml):
    result = _upload(tmp_path, export_xml, include_end_date=True)[0]
    assert 'enddate' in result.tables['HeartRate'].columns


def test_broken_upload_reports_error(tmp_path):
    path = tmp_path / 'export.xml'
    path.write_text('<HealthData><Me/>', encoding='utf-8')
    result, dropdown, message, profile, summary, count = load_export_with_preview(str(path))
    assert result is None
    assert message.startswith("Error reading export:")
    assert compute_row_count_text(result) == ""


def test_preview(tmp_path, export_xml):
    result = _upload(tmp_path, export_xml)[0]
    frame = preview_category_handler(result, 'HeartRate', limit=1)
    assert len(frame) == 1
    assert preview_category_handler(result, 'Nope') is None
    assert preview_category_handler(None, 'HeartRate') is None


def test_export_writes_one_csv_per_category(tmp_path, export_xml):
    result = _upload(tmp_path, export_xml)[0]
    paths, message = export_tables_handler(result, ['HeartRate', 'SleepAnalysis'], 'my run')
    assert message.startswith("Export successful!")
    assert [os.path.basename(p) for p in paths] == ['my_run_HeartRate.csv', 'my_run_SleepAnalysis.csv']

    with open(paths[0], newline='', encoding='utf-8') as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 2
    assert rows[0]['creationdate'] == '2023-01-01'
    assert rows[1]['value'] == ''


def test_export_without_selection():
    assert export_tables_handler(None, ['HeartRate']) == (None, "No data loaded.")
