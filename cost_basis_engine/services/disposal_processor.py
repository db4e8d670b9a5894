# cost_basis_engine/services/disposal_processor.py

import logging
from typing import Sequence

from cost_basis_engine.core.models.disposal import DisposalReport, DisposalRequest
from cost_basis_engine.core.models.lot import Lot
from cost_basis_engine.core.numbers import DecimalLike, to_decimal
from cost_basis_engine.logic.cost_calculator import calculate_cost_basis
from cost_basis_engine.logic.disposition_engine import update_lots_after_disposal
from cost_basis_engine.logic.gain_loss import calculate_gain_loss
from cost_basis_engine.logic.tax_summary import build_lot_disposals

logger = logging.getLogger(__name__)

class DisposalProcessor:
    """
    Orchestrates the end-to-end realization of a single disposal:
    cost basis, gain/loss, per-lot records and the post-disposal lot snapshot.

    The processor holds no lots between calls. Callers must serialize
    disposals against the same asset, since two disposals computed from the
    same snapshot would both draw on the same lot capacity.
    """
    def realize(
        self,
        request: DisposalRequest,
        lots: Sequence[Lot],
        proceeds: DecimalLike
    ) -> DisposalReport:
        proceeds = to_decimal(proceeds)
        logger.info(f"Realizing disposal of {request.quantity} {request.asset_symbol} on {request.disposal_date} ({request.method}) against {len(lots)} lots.")

        # 1. Select lots and price the disposal; raises before anything is produced
        cost_basis = calculate_cost_basis(request, lots)

        # 2. Overall and per-lot results
        gain_loss = calculate_gain_loss(cost_basis.total_cost_basis, proceeds)
        disposals = build_lot_disposals(cost_basis, lots, request.disposal_date, proceeds)

        # 3. Post-disposal snapshot for the ledger to persist
        updated_lots = update_lots_after_disposal(lots, cost_basis)

        logger.info(f"Disposal realized: cost basis {cost_basis.total_cost_basis}, proceeds {proceeds}, gain/loss {gain_loss.gain_loss} across {len(disposals)} lots.")
        return DisposalReport(
            cost_basis=cost_basis,
            proceeds=proceeds,
            gain_loss=gain_loss,
            disposals=disposals,
            updated_lots=updated_lots
        )
