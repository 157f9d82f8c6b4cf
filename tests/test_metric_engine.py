import logging
from datetime import date
from decimal import Decimal

import pytest

from painel_metas.domain.categories import LogicalCategory
from painel_metas.domain.models import (
    CategoryTarget,
    MetricInputs,
    MetricStatus,
    Period,
    SaleRecord,
    StoreContext,
    TargetRecord,
)
from painel_metas.services.metric_engine import (
    classify_status,
    compute_metrics,
    compute_quota,
    select_target,
    sum_by_category,
    targets_by_category,
    to_amount,
)

D = Decimal
TODAY = date(2025, 1, 10)
PERIOD = Period(id=7, start_date=date(2025, 1, 1), end_date=date(2025, 1, 31))
STORE = StoreContext(store_id=1, region="norte")


def sale(code, amount, day=TODAY):
    return SaleRecord(category_code=code, amount=amount, sale_date=day)


def by_category(results):
    return {r.category: r for r in results}


# -----------------------------------------------------------------------------
# Meta diária e faltante
# -----------------------------------------------------------------------------


def test_quota_behind_target_and_sold_above_daily():
    quota = compute_quota(D("1000"), D("400"), D("70"), 10)
    assert quota.shortfall_up_to_yesterday == D("600")
    assert quota.daily_target == D("60.00")
    assert quota.shortfall_today == D("0")
    assert classify_status(quota.daily_target, D("70")) is MetricStatus.EXCEEDED


def test_quota_target_already_met():
    quota = compute_quota(D("500"), D("500"), D("30"), 5)
    assert quota.shortfall_up_to_yesterday == D("0")
    assert quota.daily_target == D("0")
    assert quota.shortfall_today == D("0")
    assert classify_status(quota.daily_target, D("30")) is MetricStatus.PENDING


def test_quota_oversold_before_today_is_clamped():
    quota = compute_quota(D("500"), D("800"), D("0"), 5)
    assert quota.shortfall_up_to_yesterday == D("0")
    assert quota.daily_target == D("0")


def test_shortfall_today_when_behind():
    quota = compute_quota(D("1000"), D("400"), D("25"), 10)
    assert quota.shortfall_today == D("35.00")


def test_daily_target_rounded_to_cents():
    assert compute_quota(D("100"), D("0"), D("0"), 3).daily_target == D("33.33")
    assert compute_quota(D("200"), D("0"), D("0"), 3).daily_target == D("66.67")


def test_daily_target_never_increases_with_more_sales_up_to_yesterday():
    previous = None
    for sold in range(0, 1300, 25):
        daily = compute_quota(D("1000"), D(sold), D("0"), 7).daily_target
        assert daily >= 0
        if previous is not None:
            assert daily <= previous
        previous = daily


def test_todays_sales_do_not_change_todays_daily_target():
    targets = {compute_quota(D("1000"), D("400"), D(today), 10).daily_target for today in (0, 30, 60, 500)}
    assert targets == {D("60.00")}


def test_remaining_days_below_one_is_floored_at_one():
    for days in (0, -3):
        quota = compute_quota(D("1000"), D("400"), D("0"), days)
        assert quota.daily_target == D("600.00")
        assert quota.shortfall_today == D("600.00")


# -----------------------------------------------------------------------------
# Status
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "daily_target, sold_today, expected",
    [
        (D("60"), D("0"), MetricStatus.PENDING),
        (D("60"), D("59.99"), MetricStatus.PENDING),
        (D("60"), D("60"), MetricStatus.REACHED),
        (D("60.00"), D("60"), MetricStatus.REACHED),
        (D("60"), D("60.01"), MetricStatus.EXCEEDED),
        (D("0"), D("0"), MetricStatus.PENDING),
        (D("0"), D("100"), MetricStatus.PENDING),
    ],
)
def test_classify_status(daily_target, sold_today, expected):
    assert classify_status(daily_target, sold_today) is expected


# -----------------------------------------------------------------------------
# Valores
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, D("0")),
        (D("12.34"), D("12.34")),
        (10, D("10")),
        (0.1, D("0.1")),
        ("70", D("70")),
        ("12,50", D("12.50")),
        ("1.234,56", D("1234.56")),
        (" 8.5 ", D("8.5")),
    ],
)
def test_to_amount_accepts_numbers(raw, expected):
    assert to_amount(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "", "1,234.56", "1.000,00.5", float("nan"), float("inf"), "NaN", True, object()])
def test_to_amount_non_numeric_becomes_zero_with_warning(raw, caplog):
    with caplog.at_level(logging.WARNING, logger="painel_metas.engine"):
        assert to_amount(raw) == D("0")
    assert any("não numérico" in r.getMessage() for r in caplog.records)


# -----------------------------------------------------------------------------
# Agregação e metas
# -----------------------------------------------------------------------------


def test_sum_by_category_merges_aliases_and_drops_unknown():
    totals = sum_by_category(
        [
            sale("r_mais", D("10")),
            sale("rentaveis20", D("5")),
            sale("rentaveis25", D("2.5")),
            sale("saude", D("3")),
            sale("goodlife", D("4")),
            sale("xpto", D("1000")),
            sale(None, D("1000")),
        ]
    )
    assert totals == {
        LogicalCategory.PROFITABLE: D("17.5"),
        LogicalCategory.HEALTH: D("7"),
    }


def test_sum_by_category_handles_none():
    assert sum_by_category(None) == {}


def test_select_target_uses_first_and_warns(caplog):
    first = TargetRecord(store_id=1, period_id=7, overall_amount=D("100"))
    second = TargetRecord(store_id=1, period_id=7, overall_amount=D("999"))
    with caplog.at_level(logging.WARNING, logger="painel_metas.engine"):
        assert select_target([first, second]) is first
    assert caplog.records


def test_select_target_empty():
    assert select_target([]) is None
    assert select_target(None) is None


def test_targets_by_category_general_uses_overall_amount():
    target = TargetRecord(
        store_id=1,
        period_id=7,
        overall_amount="1000,00",
        categories=(
            CategoryTarget("geral", D("1")),
            CategoryTarget("conveniencia", D("300")),
            CategoryTarget("conveniencia_r_mais", D("999")),
            CategoryTarget("rentaveis25", D("200")),
            CategoryTarget("nao_existe", D("5")),
        ),
    )
    assert targets_by_category(target) == {
        LogicalCategory.GENERAL: D("1000.00"),
        LogicalCategory.CONVENIENCE_PLUS: D("300"),
        LogicalCategory.PROFITABLE: D("200"),
    }


# -----------------------------------------------------------------------------
# Resultado completo
# -----------------------------------------------------------------------------


def test_empty_inputs_produce_five_pending_zero_results():
    results = compute_metrics(MetricInputs(store=STORE, period=PERIOD, today=TODAY))

    assert [r.category for r in results] == list(LogicalCategory)
    for r in results:
        assert r.sold_today == r.sold_period == r.target == 0
        assert r.daily_target == r.shortfall_today == 0
        assert r.remaining_days == 22
        assert r.status is MetricStatus.PENDING


def test_compute_metrics_end_to_end():
    inputs = MetricInputs(
        store=STORE,
        period=Period(id=7, start_date=date(2025, 1, 1), end_date=date(2025, 1, 19)),
        today=TODAY,
        targets=[
            TargetRecord(
                store_id=1,
                period_id=7,
                overall_amount=D("1000"),
                categories=(CategoryTarget("r_mais", D("500")),),
            ),
            TargetRecord(store_id=1, period_id=7, overall_amount=D("50000")),
        ],
        period_sales=[
            sale("geral", D("400"), date(2025, 1, 5)),
            sale("geral", D("70")),
            sale("rentaveis20", D("500"), date(2025, 1, 6)),
            sale("rentaveis25", D("30")),
        ],
        sales_up_to_yesterday=[
            sale("geral", D("400"), date(2025, 1, 5)),
            sale("rentaveis20", D("500"), date(2025, 1, 6)),
        ],
        sales_today=[
            sale("geral", D("70")),
            sale("rentaveis25", D("30")),
        ],
    )

    results = by_category(compute_metrics(inputs))

    general = results[LogicalCategory.GENERAL]
    assert general.remaining_days == 10
    assert general.target == D("1000")
    assert general.sold_period == D("470")
    assert general.sold_today == D("70")
    assert general.daily_target == D("60.00")
    assert general.shortfall_today == D("0")
    assert general.status is MetricStatus.EXCEEDED

    profitable = results[LogicalCategory.PROFITABLE]
    assert profitable.target == D("500")
    assert profitable.sold_period == D("530")
    assert profitable.daily_target == D("0")
    assert profitable.shortfall_today == D("0")
    assert profitable.status is MetricStatus.PENDING

    assert results[LogicalCategory.HEALTH].target == D("0")


def test_centro_store_spreads_over_fewer_days():
    inputs = MetricInputs(
        store=StoreContext(store_id=2, region="centro"),
        period=PERIOD,
        today=date(2025, 1, 1),
        targets=[TargetRecord(store_id=2, period_id=7, overall_amount=D("2700"))],
    )
    general = compute_metrics(inputs)[0]
    assert general.remaining_days == 27
    assert general.daily_target == D("100.00")


def test_compute_metrics_is_idempotent():
    inputs = MetricInputs(
        store=STORE,
        period=PERIOD,
        today=TODAY,
        targets=[TargetRecord(store_id=1, period_id=7, overall_amount=D("777.77"))],
        period_sales=[sale("geral", 12.3)],
        sales_today=[sale("geral", "12,30")],
    )
    assert compute_metrics(inputs) == compute_metrics(inputs)


def test_result_invariants_hold_for_varied_inputs():
    for target in (D("0"), D("10"), D("1000")):
        for sold_before in (D("0"), D("5"), D("5000")):
            for sold_today in (D("0"), D("3"), D("900")):
                for today in (date(2024, 12, 1), TODAY, date(2025, 3, 1)):
                    inputs = MetricInputs(
                        store=StoreContext(store_id=1, region="centro"),
                        period=PERIOD,
                        today=today,
                        targets=[TargetRecord(store_id=1, period_id=7, overall_amount=target)],
                        sales_up_to_yesterday=[sale("geral", sold_before)],
                        sales_today=[sale("geral", sold_today)],
                    )
                    results = compute_metrics(inputs)
                    assert len(results) == 5
                    for r in results:
                        assert r.remaining_days >= 1
                        assert r.daily_target >= 0
                        assert r.shortfall_today >= 0
