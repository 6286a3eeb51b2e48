import pytest

from dimensions_repo import DEFAULT_DIMENSIONS_REGISTRY
from ideas_board import DEFAULT_COLUMNS, columns_from_registry


def _registry(scale):
    return {"dimensions_registry": {"core_dimensions": {"readiness": {"scale": scale}}}}


def test_default_registry_yields_five_columns():
    columns = columns_from_registry(DEFAULT_DIMENSIONS_REGISTRY)

    assert [column.key for column in columns] == ["1-2", "3-4", "5-6", "7-8", "9-10"]
    assert columns[2].title == "Implementation"
    assert columns[2].range_label == "Readiness 5-6"


def test_default_columns_partition_one_to_ten():
    for readiness in range(1, 11):
        owners = [column.key for column in DEFAULT_COLUMNS if column.contains(readiness)]
        assert len(owners) == 1


def test_custom_scale_is_sorted_and_titled():
    columns = columns_from_registry(_registry({"4-10": "Later", "1-3": "Early"}))

    assert [(c.key, c.min_readiness, c.max_readiness) for c in columns] == [
        ("1-3", 1, 3),
        ("4-10", 4, 10),
    ]
    assert columns[0].title == "Level 1-3"
    assert columns[1].description == "Later"


@pytest.mark.parametrize(
    "registry",
    [
        None,
        {},
        {"dimensions_registry": {"readiness_scale": {"levels": 5, "labels": ["idea"]}}},
        _registry({}),
        _registry({"one-two": "bad"}),
        _registry({"3-1": "reversed"}),
        _registry({"1-5": "a", "4-10": "overlap"}),
        _registry({"1-2": "a", "5-10": "gap"}),
    ],
)
def test_incompatible_registry_falls_back_to_defaults(registry):
    assert columns_from_registry(registry) == list(DEFAULT_COLUMNS)
