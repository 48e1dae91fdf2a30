from typing import Iterable, List
from syndicate_ledger.domain.models import Bet, Fund, Partner, Withdrawal
from syndicate_ledger.infrastructure.stores.base import BaseRecordStore

class InMemoryRecordStore(BaseRecordStore):
    def __init__(self, bets: Iterable[Bet] = (), partners: Iterable[Partner] = (),
                 funds: Iterable[Fund] = (), withdrawals: Iterable[Withdrawal] = ()):
        self.bets = list(bets)
        self.partners = list(partners)
        self.funds = list(funds)
        self.withdrawals = list(withdrawals)

    @property
    def name(self) -> str: return "memory"

    # 每次返回副本，调用方改列表不会污染存储
    def load_bets(self) -> List[Bet]: return list(self.bets)
    def load_partners(self) -> List[Partner]: return list(self.partners)
    def load_funds(self) -> List[Fund]: return list(self.funds)
    def load_withdrawals(self) -> List[Withdrawal]: return list(self.withdrawals)
