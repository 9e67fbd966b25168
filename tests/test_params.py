from strategy_lab.risk import DisciplineParams, OnFailure
from strategy_lab.strategy import default_registry, merge_params, params_to_dict
from strategy_lab.strategy.catalog import CoppockParams, IchimokuParams, RsiParams, StochasticParams


def test_camel_case_and_snake_case_keys_merge():
    params = merge_params(RsiParams(), {"period": "21", "overBought": 80, "oversold": 20.5})

    assert params.period == 21
    assert params.overbought == 80.0
    assert params.oversold == 20.5
    assert params.reverse is False


def test_invalid_values_keep_defaults():
    params = merge_params(RsiParams(), {"period": "abc", "reverse": "maybe", "oversold": None})

    assert params == RsiParams()


def test_non_mapping_overrides_give_defaults():
    assert merge_params(RsiParams(), ["period", 3]) == RsiParams()
    assert merge_params(RsiParams(), None) == RsiParams()


def test_nested_discipline_overrides():
    params = merge_params(
        RsiParams(),
        {"discipline": {"maxConsecutiveLosses": 2, "onFailure": "Adapt", "enableDiscipline": "false"}},
    )

    assert params.discipline == DisciplineParams(
        enable_discipline=False,
        max_consecutive_losses=2,
        on_failure=OnFailure.ADAPT,
    )


def test_params_to_dict_uses_plain_values():
    payload = params_to_dict(default_registry().get_by_id("code-based-consensus").default_params())

    assert payload["strategy_ids"] == ["ema-crossover", "rsi-divergence", "macd-crossover"]
    assert payload["discipline"]["on_failure"] == "cooldown"


def test_default_params_follow_the_catalog():
    registry = default_registry()

    assert registry.get_by_id("sma-crossover").default_params().long_period == 50
    assert registry.get_by_id("ema-cci-macd").default_params().ema_period == 100
    assert registry.get_by_id("williams-r").default_params().oversold == -80.0
    assert registry.get_by_id("pivot-point-reversal").default_params().period == 24


def test_non_positive_windows_keep_defaults():
    assert merge_params(StochasticParams(), {"period": 0, "smoothK": -2}) == StochasticParams()
    assert merge_params(IchimokuParams(), {"displacement": -1, "tenkanPeriod": 0}) == IchimokuParams()
    assert merge_params(CoppockParams(), {"longRoC": 0, "wmaPeriod": "5"}) == CoppockParams(wma_period=5)


def test_non_window_fields_may_be_negative():
    params = merge_params(RsiParams(), {"oversold": -5})

    assert params.oversold == -5.0
