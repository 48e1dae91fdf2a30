from abc import ABC, abstractmethod
from typing import List, Tuple
from pydantic import BaseModel, ConfigDict
from syndicate_ledger.domain.models import Bet, Fund, Partner, Withdrawal

class RecordSnapshot(BaseModel):
    """一次读取的四张表快照，只读"""
    model_config = ConfigDict(frozen=True)

    bets: Tuple[Bet, ...] = ()
    partners: Tuple[Partner, ...] = ()
    funds: Tuple[Fund, ...] = ()
    withdrawals: Tuple[Withdrawal, ...] = ()

class BaseRecordStore(ABC):
    @property
    @abstractmethod
    def name(self) -> str: pass
    @abstractmethod
    def load_bets(self) -> List[Bet]: pass
    @abstractmethod
    def load_partners(self) -> List[Partner]: pass
    @abstractmethod
    def load_funds(self) -> List[Fund]: pass
    @abstractmethod
    def load_withdrawals(self) -> List[Withdrawal]: pass

    def load_snapshot(self) -> RecordSnapshot:
        return RecordSnapshot(
            bets=tuple(self.load_bets()), partners=tuple(self.load_partners()),
            funds=tuple(self.load_funds()), withdrawals=tuple(self.load_withdrawals()),
        )
