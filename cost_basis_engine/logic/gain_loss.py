# cost_basis_engine/logic/gain_loss.py

from cost_basis_engine.core.models.disposal import GainLossResult
from cost_basis_engine.core.numbers import DecimalLike, to_decimal


def calculate_gain_loss(cost_basis: DecimalLike, proceeds: DecimalLike) -> GainLossResult:
    """Realized gain/loss = proceeds - cost basis. Break-even counts as a gain."""
    gain_loss = to_decimal(proceeds) - to_decimal(cost_basis)
    return GainLossResult(gain_loss=gain_loss, is_gain=gain_loss >= 0)
