from health_export_tables.partition import group_row_indices, partition_by_category
from health_export_tables.table import MISSING, UnifiedTable


def _table():
    return UnifiedTable({
        'type': ['B', 'A', 'B', MISSING],
        'value': [1.0, MISSING, 2.0, 3.0],
        'note': [MISSING, 'hi', MISSING, MISSING],
    })


def test_groups_follow_first_appearance():
    groups = group_row_indices(_table(), 'type')
    assert list(groups) == ['B', 'A', '(unknown)']
    assert groups['B'] == [0, 2]


def test_row_counts_sum_to_total():
    tables = partition_by_category(_table(), 'type')
    assert sum(len(t) for t in tables.values()) == 4


def test_all_missing_columns_are_pruned_per_category():
    tables = partition_by_category(_table(), 'type')
    assert tables['B'].columns == ['type', 'value']
    assert tables['A'].columns == ['type', 'note']
    assert tables['(unknown)'].columns == ['value']


def test_column_with_any_value_is_kept():
    table = UnifiedTable({'type': ['A', 'A'], 'value': [MISSING, 0.0]})
    assert partition_by_category(table, 'type')['A'].columns == ['type', 'value']


def test_missing_discriminator_column_puts_everything_in_unknown():
    tables = partition_by_category(UnifiedTable({'x': [1, 2]}), 'type', unknown='other')
    assert list(tables) == ['other']
    assert len(tables['other']) == 2


def test_empty_table_has_no_categories():
    assert partition_by_category(UnifiedTable(), 'type') == {}
