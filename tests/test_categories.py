import pytest

from painel_metas.domain.categories import (
    CATEGORY_ALIASES,
    CATEGORY_TITLES,
    LogicalCategory,
    reconcile_category,
)


@pytest.mark.parametrize(
    "code, expected",
    [
        ("geral", LogicalCategory.GENERAL),
        ("r_mais", LogicalCategory.PROFITABLE),
        ("rentaveis20", LogicalCategory.PROFITABLE),
        ("rentaveis25", LogicalCategory.PROFITABLE),
        ("perfumaria_r_mais", LogicalCategory.PERFUMERY_PLUS),
        ("conveniencia_r_mais", LogicalCategory.CONVENIENCE_PLUS),
        ("conveniencia", LogicalCategory.CONVENIENCE_PLUS),
        ("brinquedo", LogicalCategory.CONVENIENCE_PLUS),
        ("saude", LogicalCategory.HEALTH),
        ("goodlife", LogicalCategory.HEALTH),
    ],
)
def test_known_codes(code, expected):
    assert reconcile_category(code) is expected


@pytest.mark.parametrize("code", [None, "", "perfumaria", "GERAL", "saude ", "rentaveis30"])
def test_unknown_codes_are_unassigned(code):
    assert reconcile_category(code) is None


def test_declaration_order_is_dashboard_order():
    assert [c.value for c in LogicalCategory] == [
        "geral",
        "rentavel",
        "perfumaria",
        "conveniencia",
        "goodlife",
    ]


def test_every_category_has_title_and_aliases():
    for category in LogicalCategory:
        assert CATEGORY_TITLES[category] == category.label
        assert CATEGORY_ALIASES[category]


def test_aliases_are_mutually_exclusive():
    codes = [code for aliases in CATEGORY_ALIASES.values() for code in aliases]
    assert len(codes) == len(set(codes))
