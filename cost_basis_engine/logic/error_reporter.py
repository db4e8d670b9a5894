# cost_basis_engine/logic/error_reporter.py

from cost_basis_engine.core.models.response import ErroredLot

class ErrorReporter:
    """
    Collects problems found in a batch of lots, keyed by lot ID.
    Every reason is kept so a whole batch can be reported in one pass.
    """
    def __init__(self):
        self._reasons_by_lot: dict[str, list[str]] = {}

    def add_error(self, lot_id: str, error_reason: str):
        """
        Records a problem for a lot. The same reason is only recorded once per lot.
        """
        reasons = self._reasons_by_lot.setdefault(lot_id, [])
        if error_reason not in reasons:
            reasons.append(error_reason)

    def get_errors(self) -> list[ErroredLot]:
        """
        Returns one ErroredLot per lot, reasons joined with '; '.
        """
        return [
            ErroredLot(lot_id=lot_id, error_reason="; ".join(reasons))
            for lot_id, reasons in self._reasons_by_lot.items()
        ]

    def has_errors(self) -> bool:
        return bool(self._reasons_by_lot)

