from types import SimpleNamespace

from strategy_lab.risk import DisciplineGuard, DisciplineMode, DisciplineParams, OnFailure, review_trades

MINUTE = 60_000


def test_consecutive_losses_start_a_cooldown():
    guard = DisciplineGuard(DisciplineParams(max_consecutive_losses=3, daily_drawdown_limit=50.0), 1000.0)
    for _ in range(3):
        guard.register_trade(-1.0)

    decision = guard.can_trade(0)

    assert decision.allow is False
    assert decision.mode is DisciplineMode.COOLDOWN
    assert guard.cooldown_until == 15 * MINUTE
    assert guard.can_trade(14 * MINUTE).allow is False

    after = guard.can_trade(15 * MINUTE)
    assert after.allow is True
    assert guard.consecutive_losses == 0
    assert guard.cooldown_until is None


def test_adapt_mode_blocks_without_cooldown():
    params = DisciplineParams(max_consecutive_losses=2, on_failure=OnFailure.ADAPT, daily_drawdown_limit=50.0)
    guard = DisciplineGuard(params, 1000.0)
    guard.register_trade(-1.0)
    guard.register_trade(-1.0)

    decision = guard.can_trade(10 * MINUTE)

    assert decision.allow is False
    assert decision.mode is DisciplineMode.ADAPT
    assert guard.cooldown_until is None


def test_win_resets_loss_streak():
    guard = DisciplineGuard(DisciplineParams(max_consecutive_losses=2), 1000.0)
    guard.register_trade(-1.0)
    guard.register_trade(2.0)
    guard.register_trade(-1.0)

    assert guard.consecutive_losses == 1
    assert guard.can_trade(0).allow is True


def test_drawdown_limit_blocks_trading():
    guard = DisciplineGuard(DisciplineParams(daily_drawdown_limit=10.0), 1000.0)
    guard.register_trade(50.0)
    guard.register_trade(-150.0)

    decision = guard.can_trade(0)

    assert decision.allow is False
    assert "drawdown" in decision.reason.lower()


def test_disabled_guard_always_allows():
    guard = DisciplineGuard(DisciplineParams(enable_discipline=False, max_consecutive_losses=1), 100.0)
    for _ in range(5):
        guard.register_trade(-50.0)

    assert guard.can_trade(0).allow is True


def test_reset_clears_state():
    guard = DisciplineGuard(DisciplineParams(max_consecutive_losses=1), 1000.0)
    guard.register_trade(-1.0)
    guard.can_trade(0)

    guard.reset()

    assert guard.session_pnl == 0.0
    assert guard.consecutive_losses == 0
    assert guard.can_trade(0).allow is True


def test_review_trades_replays_trade_list():
    trades = [
        SimpleNamespace(entry_time=0, pnl=-1.0),
        SimpleNamespace(entry_time=MINUTE, pnl=-1.0),
        SimpleNamespace(entry_time=2 * MINUTE, pnl=3.0),
        SimpleNamespace(entry_time=30 * MINUTE, pnl=1.0),
    ]
    params = DisciplineParams(max_consecutive_losses=2, cooldown_period_minutes=15, daily_drawdown_limit=90.0)

    decisions = review_trades(trades, params, 1000.0)

    assert [decision.allow for decision in decisions] == [True, True, False, True]
