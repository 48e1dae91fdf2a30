import logging
import os
from typing import Dict, List, Optional
import pandas as pd
from syndicate_ledger.application.ingestion import RecordParser
from syndicate_ledger.config import settings
from syndicate_ledger.domain.models import Bet, Fund, Partner, Withdrawal
from syndicate_ledger.infrastructure.stores.base import BaseRecordStore

logger = logging.getLogger(__name__)

FILE_NAMES = {
    "BETS": "bets.csv",
    "PARTNERS": "partners.csv",
    "FUNDS": "funds.csv",
    "WITHDRAWALS": "withdrawals.csv",
}

class CsvRecordStore(BaseRecordStore):
    """从表格导出的 CSV 目录里读取四张表；文件不存在就当空表"""

    def __init__(self, data_dir: Optional[str] = None, parser: Optional[RecordParser] = None):
        self.data_dir = data_dir or settings.DATA_DIR
        self.parser = parser or RecordParser()

    @property
    def name(self) -> str: return "csv"

    def load_bets(self) -> List[Bet]: return self._load("BETS")
    def load_partners(self) -> List[Partner]: return self._load("PARTNERS")
    def load_funds(self) -> List[Fund]: return self._load("FUNDS")
    def load_withdrawals(self) -> List[Withdrawal]: return self._load("WITHDRAWALS")

    def _load(self, collection: str) -> list:
        rows = self._read_rows(os.path.join(self.data_dir, FILE_NAMES[collection]))
        records = self.parser.parse_many(collection, rows)
        logger.info("loaded %d %s records from %s", len(records), collection.lower(), self.data_dir)
        return records

    @staticmethod
    def _read_rows(path: str) -> List[Dict[str, str]]:
        if not os.path.exists(path):
            logger.info("%s not found, treating as empty", path)
            return []
        # 全部按字符串读，数值转换交给 RecordParser 统一处理
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
        return df.to_dict(orient="records")
