"""Trade code classification.

Each trade code is one rule: a set of conditions on UWP attributes, all of
which must hold. Adding a code means adding a rule, nothing else.
"""

from dataclasses import dataclass

from ..models import StaleDerivedData, TradeCode, World


def at_least(low: int) -> range:
    return range(low, 100)


def at_most(high: int) -> range:
    return range(0, high + 1)


@dataclass(frozen=True)
class TradeRule:
    """A trade code and the attribute values it requires."""

    code: TradeCode
    conditions: dict  # attribute name -> allowed values

    def matches(self, world: World) -> bool:
        return all(getattr(world, name) in allowed for name, allowed in self.conditions.items())


TRADE_RULES: tuple[TradeRule, ...] = (
    TradeRule(
        TradeCode.AG,
        {"atmosphere": range(4, 10), "hydrographics": range(4, 9), "population": range(5, 8)},
    ),
    TradeRule(TradeCode.AS, {"size": {0}, "atmosphere": {0}, "hydrographics": {0}}),
    TradeRule(TradeCode.BA, {"population": {0}, "government": {0}, "law_level": {0}}),
    TradeRule(TradeCode.DE, {"atmosphere": at_least(2), "hydrographics": {0}}),
    TradeRule(TradeCode.FL, {"atmosphere": at_least(10), "hydrographics": at_least(1)}),
    TradeRule(
        TradeCode.GA,
        {"atmosphere": {5, 6, 8}, "hydrographics": range(4, 10), "population": range(4, 9)},
    ),
    TradeRule(TradeCode.HI, {"population": at_least(9)}),
    TradeRule(TradeCode.HT, {"tech_level": at_least(12)}),
    TradeRule(TradeCode.IC, {"atmosphere": at_most(1), "hydrographics": at_least(1)}),
    TradeRule(TradeCode.IN, {"atmosphere": {0, 1, 2, 4, 7, 9}, "population": at_least(9)}),
    TradeRule(TradeCode.LO, {"population": at_most(3)}),
    TradeRule(TradeCode.LT, {"tech_level": at_most(5)}),
    TradeRule(
        TradeCode.NA,
        {"atmosphere": at_most(3), "hydrographics": at_most(3), "population": at_least(6)},
    ),
    TradeRule(TradeCode.NI, {"population": range(4, 7)}),
    TradeRule(TradeCode.PO, {"atmosphere": range(2, 6), "hydrographics": at_most(3)}),
    TradeRule(TradeCode.RI, {"atmosphere": {6, 8}, "population": range(6, 9)}),
    TradeRule(TradeCode.VA, {"atmosphere": {0}}),
    TradeRule(TradeCode.WA, {"hydrographics": at_least(10)}),
)

# Editing any of these requires re-classification
TRADE_CODE_FIELDS = frozenset(name for rule in TRADE_RULES for name in rule.conditions)


def classify(world: World) -> frozenset:
    """Return the trade codes whose rules the world satisfies."""
    return frozenset(rule.code for rule in TRADE_RULES if rule.matches(world))


def check_trade_codes(world: World) -> None:
    """Raise StaleDerivedData if the stored trade codes disagree with the profile."""
    expected = classify(world)
    if world.trade_codes != expected:
        shown = " ".join(sorted(code.value for code in expected)) or "-"
        raise StaleDerivedData(
            f"World {world.name} ({world.profile}) carries trade codes "
            f"{world.trade_code_str}, its profile gives {shown}"
        )
