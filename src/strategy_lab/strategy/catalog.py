"""Built-in indicator strategies."""

from __future__ import annotations

from dataclasses import dataclass

from strategy_lab import indicators as ind
from strategy_lab.indicators.moving import Series
from strategy_lab.strategy.base import IndicatorStrategy, PriceColumns
from strategy_lab.strategy.params import StrategyParams
from strategy_lab.strategy.rules import (
    BandReversal,
    CandleColorFlip,
    ChannelBreakout,
    CloudCross,
    Crossover,
    DirectionFlip,
    LevelReentry,
    PivotRejection,
    PowerCross,
    Rule,
    TripleConfirmation,
)


def _previous(series: Series) -> Series:
    return [None] + series[:-1]


@dataclass(frozen=True)
class SmaCrossoverParams(StrategyParams):
    short_period: int = 20
    long_period: int = 50


class SmaCrossoverStrategy(IndicatorStrategy):
    strategy_id = "sma-crossover"
    name = "SMA Crossover"
    description = "Buys when the short simple moving average crosses above the long one, sells on the cross below."
    params_type = SmaCrossoverParams

    def required_lookback(self, params: SmaCrossoverParams) -> int:
        return params.long_period

    def compute(self, prices: PriceColumns, params: SmaCrossoverParams) -> dict[str, Series]:
        return {
            "sma_short": ind.sma(prices.close, params.short_period),
            "sma_long": ind.sma(prices.close, params.long_period),
        }

    def build_rule(self, params: SmaCrossoverParams) -> Rule:
        return Crossover("sma_short", "sma_long")


@dataclass(frozen=True)
class EmaCrossoverParams(StrategyParams):
    short_period: int = 12
    long_period: int = 26


class EmaCrossoverStrategy(IndicatorStrategy):
    strategy_id = "ema-crossover"
    name = "EMA Crossover"
    description = "Buys when the fast exponential moving average crosses above the slow one, sells on the cross below."
    params_type = EmaCrossoverParams

    def required_lookback(self, params: EmaCrossoverParams) -> int:
        return params.long_period

    def compute(self, prices: PriceColumns, params: EmaCrossoverParams) -> dict[str, Series]:
        return {
            "ema_short": ind.ema(prices.close, params.short_period),
            "ema_long": ind.ema(prices.close, params.long_period),
        }

    def build_rule(self, params: EmaCrossoverParams) -> Rule:
        return Crossover("ema_short", "ema_long")


@dataclass(frozen=True)
class RsiParams(StrategyParams):
    period: int = 14
    oversold: float = 30.0
    overbought: float = 70.0


class RsiStrategy(IndicatorStrategy):
    strategy_id = "rsi-divergence"
    name = "RSI Reversal"
    description = "Buys when RSI climbs back above the oversold level, sells when it falls back below overbought."
    params_type = RsiParams

    def required_lookback(self, params: RsiParams) -> int:
        return params.period + 1

    def compute(self, prices: PriceColumns, params: RsiParams) -> dict[str, Series]:
        return {"rsi": ind.rsi(prices.close, params.period)}

    def build_rule(self, params: RsiParams) -> Rule:
        return LevelReentry("rsi", params.oversold, params.overbought)


@dataclass(frozen=True)
class MacdParams(StrategyParams):
    short_period: int = 12
    long_period: int = 26
    signal_period: int = 9


class MacdStrategy(IndicatorStrategy):
    strategy_id = "macd-crossover"
    name = "MACD Crossover"
    description = "Buys when the MACD line crosses above its signal line, sells on the cross below."
    params_type = MacdParams

    def required_lookback(self, params: MacdParams) -> int:
        return params.long_period

    def compute(self, prices: PriceColumns, params: MacdParams) -> dict[str, Series]:
        series = ind.macd(prices.close, params.short_period, params.long_period, params.signal_period)
        return {"macd": series.macd, "macd_signal": series.signal, "macd_hist": series.histogram}

    def build_rule(self, params: MacdParams) -> Rule:
        return Crossover("macd", "macd_signal")


@dataclass(frozen=True)
class BollingerParams(StrategyParams):
    period: int = 20
    std_dev: float = 2.0


class BollingerStrategy(IndicatorStrategy):
    strategy_id = "bollinger-bands"
    name = "Bollinger Bands"
    description = "Fades touches of the outer Bollinger Bands once price closes back inside."
    params_type = BollingerParams

    def required_lookback(self, params: BollingerParams) -> int:
        return params.period

    def compute(self, prices: PriceColumns, params: BollingerParams) -> dict[str, Series]:
        bands = ind.bollinger_bands(prices.close, params.period, params.std_dev)
        return {"bb_upper": bands.upper, "bb_middle": bands.middle, "bb_lower": bands.lower}

    def build_rule(self, params: BollingerParams) -> Rule:
        return BandReversal("bb_upper", "bb_lower")


@dataclass(frozen=True)
class SupertrendParams(StrategyParams):
    period: int = 10
    multiplier: float = 3.0


class SupertrendStrategy(IndicatorStrategy):
    strategy_id = "supertrend"
    name = "Supertrend"
    description = "Follows Supertrend direction changes."
    params_type = SupertrendParams

    def required_lookback(self, params: SupertrendParams) -> int:
        return params.period + 1

    def compute(self, prices: PriceColumns, params: SupertrendParams) -> dict[str, Series]:
        trend = ind.supertrend(prices.high, prices.low, prices.close, params.period, params.multiplier)
        return {"supertrend": trend.value, "supertrend_direction": trend.direction}

    def build_rule(self, params: SupertrendParams) -> Rule:
        return DirectionFlip("supertrend_direction")


@dataclass(frozen=True)
class DonchianParams(StrategyParams):
    period: int = 20


class DonchianStrategy(IndicatorStrategy):
    strategy_id = "donchian-channels"
    name = "Donchian Channels"
    description = "Breakout of the highest high or lowest low of the preceding bars."
    params_type = DonchianParams

    def required_lookback(self, params: DonchianParams) -> int:
        return params.period + 1

    def compute(self, prices: PriceColumns, params: DonchianParams) -> dict[str, Series]:
        # Channel of the bars before the current one, so a close can break it.
        bands = ind.donchian_channels(prices.high, prices.low, params.period)
        return {
            "donchian_upper": _previous(bands.upper),
            "donchian_middle": _previous(bands.middle),
            "donchian_lower": _previous(bands.lower),
        }

    def build_rule(self, params: DonchianParams) -> Rule:
        return ChannelBreakout("donchian_upper", "donchian_lower")


@dataclass(frozen=True)
class IchimokuParams(StrategyParams):
    tenkan_period: int = 9
    kijun_period: int = 26
    senkou_b_period: int = 52
    displacement: int = 26


class IchimokuStrategy(IndicatorStrategy):
    strategy_id = "ichimoku-cloud"
    name = "Ichimoku Cloud"
    description = "Tenkan/kijun crosses taken only when price is clear of the cloud."
    params_type = IchimokuParams

    def required_lookback(self, params: IchimokuParams) -> int:
        return params.senkou_b_period + params.displacement

    def compute(self, prices: PriceColumns, params: IchimokuParams) -> dict[str, Series]:
        series = ind.ichimoku(
            prices.high,
            prices.low,
            prices.close,
            params.tenkan_period,
            params.kijun_period,
            params.senkou_b_period,
            params.displacement,
        )
        return {
            "tenkan": series.tenkan,
            "kijun": series.kijun,
            "senkou_a": series.senkou_a,
            "senkou_b": series.senkou_b,
            "chikou": series.chikou,
        }

    def build_rule(self, params: IchimokuParams) -> Rule:
        return CloudCross()


@dataclass(frozen=True)
class AwesomeOscillatorParams(StrategyParams):
    short_period: int = 5
    long_period: int = 34


class AwesomeOscillatorStrategy(IndicatorStrategy):
    strategy_id = "awesome-oscillator"
    name = "Awesome Oscillator"
    description = "Zero-line crosses of the Awesome Oscillator."
    params_type = AwesomeOscillatorParams

    def required_lookback(self, params: AwesomeOscillatorParams) -> int:
        return params.long_period

    def compute(self, prices: PriceColumns, params: AwesomeOscillatorParams) -> dict[str, Series]:
        return {"ao": ind.awesome_oscillator(prices.high, prices.low, params.short_period, params.long_period)}

    def build_rule(self, params: AwesomeOscillatorParams) -> Rule:
        return Crossover("ao", 0.0)


@dataclass(frozen=True)
class CciParams(StrategyParams):
    period: int = 20
    overbought: float = 100.0
    oversold: float = -100.0


class CciStrategy(IndicatorStrategy):
    strategy_id = "cci-reversion"
    name = "CCI Reversion"
    description = "Buys when CCI recovers above the oversold level, sells when it drops back below overbought."
    params_type = CciParams

    def required_lookback(self, params: CciParams) -> int:
        return params.period

    def compute(self, prices: PriceColumns, params: CciParams) -> dict[str, Series]:
        return {"cci": ind.cci(prices.high, prices.low, prices.close, params.period)}

    def build_rule(self, params: CciParams) -> Rule:
        return LevelReentry("cci", params.oversold, params.overbought)


@dataclass(frozen=True)
class CmfParams(StrategyParams):
    period: int = 20


class ChaikinMoneyFlowStrategy(IndicatorStrategy):
    strategy_id = "chaikin-money-flow"
    name = "Chaikin Money Flow"
    description = "Zero-line crosses of Chaikin money flow."
    params_type = CmfParams

    def required_lookback(self, params: CmfParams) -> int:
        return params.period

    def compute(self, prices: PriceColumns, params: CmfParams) -> dict[str, Series]:
        return {"cmf": ind.cmf(prices.high, prices.low, prices.close, prices.volume, params.period)}

    def build_rule(self, params: CmfParams) -> Rule:
        return Crossover("cmf", 0.0)


@dataclass(frozen=True)
class CoppockParams(StrategyParams):
    long_roc: int = 14
    short_roc: int = 11
    wma_period: int = 10


class CoppockStrategy(IndicatorStrategy):
    strategy_id = "coppock-curve"
    name = "Coppock Curve"
    description = "Zero-line crosses of the Coppock curve."
    params_type = CoppockParams

    def required_lookback(self, params: CoppockParams) -> int:
        return params.long_roc + params.wma_period

    def compute(self, prices: PriceColumns, params: CoppockParams) -> dict[str, Series]:
        return {"coppock": ind.coppock_curve(prices.close, params.long_roc, params.short_roc, params.wma_period)}

    def build_rule(self, params: CoppockParams) -> Rule:
        return Crossover("coppock", 0.0)


@dataclass(frozen=True)
class ElderRayParams(StrategyParams):
    period: int = 13


class ElderRayStrategy(IndicatorStrategy):
    strategy_id = "elder-ray-index"
    name = "Elder-Ray Index"
    description = "Bear power turning positive in an uptrend buys; bull power turning negative in a downtrend sells."
    params_type = ElderRayParams

    def required_lookback(self, params: ElderRayParams) -> int:
        return params.period + 1

    def compute(self, prices: PriceColumns, params: ElderRayParams) -> dict[str, Series]:
        series = ind.elder_ray(prices.high, prices.low, prices.close, params.period)
        return {
            "elder_ema": ind.ema(prices.close, params.period),
            "bull_power": series.bull_power,
            "bear_power": series.bear_power,
        }

    def build_rule(self, params: ElderRayParams) -> Rule:
        return PowerCross()


@dataclass(frozen=True)
class KeltnerParams(StrategyParams):
    period: int = 20
    multiplier: float = 2.0


class KeltnerStrategy(IndicatorStrategy):
    strategy_id = "keltner-channels"
    name = "Keltner Channels"
    description = "Closes breaking out of the ATR-based Keltner channel."
    params_type = KeltnerParams

    def required_lookback(self, params: KeltnerParams) -> int:
        return params.period + 1

    def compute(self, prices: PriceColumns, params: KeltnerParams) -> dict[str, Series]:
        bands = ind.keltner_channels(prices.high, prices.low, prices.close, params.period, params.multiplier)
        return {"keltner_upper": bands.upper, "keltner_middle": bands.middle, "keltner_lower": bands.lower}

    def build_rule(self, params: KeltnerParams) -> Rule:
        return ChannelBreakout("keltner_upper", "keltner_lower")


@dataclass(frozen=True)
class MomentumParams(StrategyParams):
    period: int = 14


class MomentumStrategy(IndicatorStrategy):
    strategy_id = "momentum-cross"
    name = "Momentum Cross"
    description = "Zero-line crosses of price momentum."
    params_type = MomentumParams

    def required_lookback(self, params: MomentumParams) -> int:
        return params.period + 1

    def compute(self, prices: PriceColumns, params: MomentumParams) -> dict[str, Series]:
        return {"momentum": ind.momentum(prices.close, params.period)}

    def build_rule(self, params: MomentumParams) -> Rule:
        return Crossover("momentum", 0.0)


@dataclass(frozen=True)
class ObvParams(StrategyParams):
    period: int = 20


class ObvStrategy(IndicatorStrategy):
    strategy_id = "obv-divergence"
    name = "OBV Trend"
    description = "On-balance volume crossing its own moving average."
    params_type = ObvParams

    def required_lookback(self, params: ObvParams) -> int:
        return params.period

    def compute(self, prices: PriceColumns, params: ObvParams) -> dict[str, Series]:
        balance = ind.obv(prices.close, prices.volume)
        return {"obv": balance, "obv_sma": ind.sma(balance, params.period)}

    def build_rule(self, params: ObvParams) -> Rule:
        return Crossover("obv", "obv_sma")


@dataclass(frozen=True)
class ParabolicSarParams(StrategyParams):
    af_start: float = 0.02
    af_increment: float = 0.02
    af_max: float = 0.2


class ParabolicSarStrategy(IndicatorStrategy):
    strategy_id = "parabolic-sar-flip"
    name = "Parabolic SAR Flip"
    description = "Trades the side of every Parabolic SAR reversal."
    params_type = ParabolicSarParams

    def required_lookback(self, params: ParabolicSarParams) -> int:
        return 2

    def compute(self, prices: PriceColumns, params: ParabolicSarParams) -> dict[str, Series]:
        trend = ind.parabolic_sar(prices.high, prices.low, params.af_start, params.af_increment, params.af_max)
        return {"psar": trend.value, "psar_direction": trend.direction}

    def build_rule(self, params: ParabolicSarParams) -> Rule:
        return DirectionFlip("psar_direction")


@dataclass(frozen=True)
class PivotParams(StrategyParams):
    period: int = 24


class PivotPointStrategy(IndicatorStrategy):
    strategy_id = "pivot-point-reversal"
    name = "Pivot Point Reversal"
    description = "Rejections of floor-pivot support and resistance levels."
    params_type = PivotParams

    def required_lookback(self, params: PivotParams) -> int:
        return params.period + 1

    def compute(self, prices: PriceColumns, params: PivotParams) -> dict[str, Series]:
        levels = ind.pivot_points(prices.high, prices.low, prices.close, params.period)
        return {
            "pivot_pp": levels.pp,
            "pivot_s1": levels.s1,
            "pivot_s2": levels.s2,
            "pivot_s3": levels.s3,
            "pivot_r1": levels.r1,
            "pivot_r2": levels.r2,
            "pivot_r3": levels.r3,
        }

    def build_rule(self, params: PivotParams) -> Rule:
        return PivotRejection()


@dataclass(frozen=True)
class StochasticParams(StrategyParams):
    period: int = 14
    smooth_k: int = 3
    smooth_d: int = 3


class StochasticStrategy(IndicatorStrategy):
    strategy_id = "stochastic-crossover"
    name = "Stochastic Crossover"
    description = "%K crossing %D of the slow stochastic."
    params_type = StochasticParams

    def required_lookback(self, params: StochasticParams) -> int:
        return params.period + params.smooth_k + params.smooth_d

    def compute(self, prices: PriceColumns, params: StochasticParams) -> dict[str, Series]:
        series = ind.stochastic(
            prices.high, prices.low, prices.close, params.period, params.smooth_k, params.smooth_d
        )
        return {"stoch_k": series.k, "stoch_d": series.d}

    def build_rule(self, params: StochasticParams) -> Rule:
        return Crossover("stoch_k", "stoch_d")


@dataclass(frozen=True)
class VwapParams(StrategyParams):
    period: int = 20


class VwapStrategy(IndicatorStrategy):
    strategy_id = "vwap-cross"
    name = "VWAP Cross"
    description = "Close crossing the rolling volume-weighted average price."
    params_type = VwapParams

    def required_lookback(self, params: VwapParams) -> int:
        return params.period

    def compute(self, prices: PriceColumns, params: VwapParams) -> dict[str, Series]:
        return {"vwap": ind.vwap(prices.high, prices.low, prices.close, prices.volume, params.period)}

    def build_rule(self, params: VwapParams) -> Rule:
        return Crossover("close", "vwap")


@dataclass(frozen=True)
class WilliamsRParams(StrategyParams):
    period: int = 14
    overbought: float = -20.0
    oversold: float = -80.0


class WilliamsRStrategy(IndicatorStrategy):
    strategy_id = "williams-r"
    name = "Williams %R"
    description = "Williams %R leaving its oversold or overbought zone."
    params_type = WilliamsRParams

    def required_lookback(self, params: WilliamsRParams) -> int:
        return params.period

    def compute(self, prices: PriceColumns, params: WilliamsRParams) -> dict[str, Series]:
        return {"williams_r": ind.williams_r(prices.high, prices.low, prices.close, params.period)}

    def build_rule(self, params: WilliamsRParams) -> Rule:
        return LevelReentry("williams_r", params.oversold, params.overbought)


class HeikinAshiStrategy(IndicatorStrategy):
    strategy_id = "heikin-ashi-trend"
    name = "Heikin-Ashi Trend"
    description = "Colour changes of Heikin-Ashi candles."
    params_type = StrategyParams

    def required_lookback(self, params: StrategyParams) -> int:
        return 2

    def compute(self, prices: PriceColumns, params: StrategyParams) -> dict[str, Series]:
        candles = ind.heikin_ashi(prices.open, prices.high, prices.low, prices.close)
        return {
            "ha_open": candles.open,
            "ha_high": candles.high,
            "ha_low": candles.low,
            "ha_close": candles.close,
        }

    def build_rule(self, params: StrategyParams) -> Rule:
        return CandleColorFlip()


@dataclass(frozen=True)
class EmaCciMacdParams(StrategyParams):
    ema_period: int = 100
    cci_period: int = 14
    cci_level: float = 100.0
    short_period: int = 12
    long_period: int = 26
    signal_period: int = 9


class EmaCciMacdStrategy(IndicatorStrategy):
    strategy_id = "ema-cci-macd"
    name = "EMA + CCI + MACD"
    description = "CCI reversals confirmed by the long EMA trend and the MACD histogram."
    params_type = EmaCciMacdParams

    def required_lookback(self, params: EmaCciMacdParams) -> int:
        return max(params.ema_period, params.cci_period, params.long_period + params.signal_period)

    def compute(self, prices: PriceColumns, params: EmaCciMacdParams) -> dict[str, Series]:
        series = ind.macd(prices.close, params.short_period, params.long_period, params.signal_period)
        return {
            "ema": ind.ema(prices.close, params.ema_period),
            "cci": ind.cci(prices.high, prices.low, prices.close, params.cci_period),
            "macd": series.macd,
            "macd_signal": series.signal,
            "macd_hist": series.histogram,
        }

    def build_rule(self, params: EmaCciMacdParams) -> Rule:
        return TripleConfirmation(level=params.cci_level)


BUILTIN_STRATEGIES: tuple[type[IndicatorStrategy], ...] = (
    SmaCrossoverStrategy,
    EmaCrossoverStrategy,
    RsiStrategy,
    MacdStrategy,
    BollingerStrategy,
    SupertrendStrategy,
    DonchianStrategy,
    IchimokuStrategy,
    AwesomeOscillatorStrategy,
    CciStrategy,
    ChaikinMoneyFlowStrategy,
    CoppockStrategy,
    ElderRayStrategy,
    KeltnerStrategy,
    MomentumStrategy,
    ObvStrategy,
    ParabolicSarStrategy,
    PivotPointStrategy,
    StochasticStrategy,
    VwapStrategy,
    WilliamsRStrategy,
    HeikinAshiStrategy,
    EmaCciMacdStrategy,
)
