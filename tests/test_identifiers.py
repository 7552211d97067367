import pytest

from health_export_tables.identifiers import normalize_field_name, normalize_identifier, normalize_identifiers
from health_export_tables.schema import RECORD_SCHEMA
from health_export_tables.table import MISSING, UnifiedTable


@pytest.mark.parametrize('raw, expected', [
    ('HKQuantityTypeIdentifierHeartRate', 'HeartRate'),
    ('HKCategoryTypeIdentifierSleepAnalysis', 'SleepAnalysis'),
    ('HKCharacteristicTypeIdentifierDateOfBirth', 'DateOfBirth'),
    ('HKDataTypeSleepDurationGoal', 'DataTypeSleepDurationGoal'),
    ('HKBloodTypeNotSet', 'BloodTypeNotSet'),
    ('HKTimeZone', 'TimeZone'),
    ('sourceName', 'sourceName'),
    ('Identifier', 'Identifier'),
    ('HKvalue', 'HKvalue'),
    ('', ''),
])
def test_normalize_identifier(raw, expected):
    assert normalize_identifier(raw) == expected


def test_normalize_identifier_is_idempotent():
    for raw in ['HKQuantityTypeIdentifierHeartRate', 'HKHKBloodTypeA', 'QuantityTypeIdentifierX']:
        once = normalize_identifier(raw)
        assert normalize_identifier(once) == once


def test_dotted_names_normalize_per_segment():
    assert normalize_field_name('MetadataEntry.HKTimeZone') == 'MetadataEntry.TimeZone'
    assert normalize_field_name('HKQuantityTypeIdentifierBodyMass') == 'BodyMass'


def _table():
    return UnifiedTable({
        'type': ['HKQuantityTypeIdentifierHeartRate', 'HKCategoryTypeIdentifierSleepAnalysis', MISSING],
        'sourceName': ['HKQuantityTypeIdentifierOdd', 'Phone', 'Watch'],
        'value': ['62', 'HKCategoryValueSleepAnalysisInBed', '1'],
        'MetadataEntry.HKTimeZone': ['Europe/London', MISSING, MISSING],
    })


def test_only_identifier_columns_have_values_rewritten():
    table = normalize_identifiers(_table(), RECORD_SCHEMA)
    assert table.columns == ['type', 'sourceName', 'value', 'MetadataEntry.TimeZone']
    assert table.column('type') == ['HeartRate', 'SleepAnalysis', MISSING]
    assert table.column('sourceName') == ['HKQuantityTypeIdentifierOdd', 'Phone', 'Watch']
    assert table.column('value') == ['62', 'HKCategoryValueSleepAnalysisInBed', '1']


def test_normalizing_table_twice_equals_once():
    once = normalize_identifiers(_table(), RECORD_SCHEMA)
    snapshot = UnifiedTable({name: list(once.column(name)) for name in once.columns})
    twice = normalize_identifiers(once, RECORD_SCHEMA)
    assert twice == snapshot
