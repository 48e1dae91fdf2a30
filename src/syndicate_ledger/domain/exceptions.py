class LedgerError(Exception):
    pass


class OutcomeValidationError(LedgerError, ValueError):
    """输入非法，直接拦截；绝不偷偷归零或截断"""
    pass


class InvalidStakeError(OutcomeValidationError):
    pass


class InvalidOddsError(OutcomeValidationError):
    pass


class InvalidCommissionError(OutcomeValidationError):
    pass


class MissingCashOutError(OutcomeValidationError):
    pass


class UnsettledBetError(OutcomeValidationError):
    pass


class InvalidTransitionError(LedgerError):
    pass


class RecordParseError(LedgerError):
    def __init__(self, collection: str, record_id: str, reason: str):
        self.collection = collection
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"{collection}[{record_id}]: {reason}")


class ReconciliationError(LedgerError):
    pass
