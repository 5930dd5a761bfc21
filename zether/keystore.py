"""
BabyJubJub 계정 저장소
======================

지갑 주소마다 한 번 만든 BabyJubJub 계정을 TinyDB 에 보관한다.
개인키만 저장하고, 공개키는 읽을 때마다 private_key · G 로 다시 계산한다.

  path 를 주면 JSON 파일 저장소, 주지 않으면 메모리 저장소 (MemoryStorage)

저장소 파일에는 개인키가 평문으로 들어 있으므로 파일 권한은 호출하는 쪽이 관리한다.
"""

import logging

from tinydb import TinyDB, Query
from tinydb.storages import MemoryStorage

from zether.curve import BABYJUB, Account


logger = logging.getLogger(__name__)

Accounts = Query()


class AccountStore:

    def __init__(self, path=None, curve=BABYJUB):
        if path is None:
            self.db = TinyDB(storage=MemoryStorage)
        else:
            self.db = TinyDB(path)
        self.table = self.db.table("accounts")
        self.curve = curve

    def save(self, address, account):
        address = _normalize(address)
        self.table.upsert(
            {
                "address": address,
                "curve": self.curve.name,
                "private_key": str(account.private_key),
            },
            Accounts.address == address,
        )
        logger.info("stored account for %s", address)

    def load(self, address):
        row = self.table.get(Accounts.address == _normalize(address))
        if row is None:
            return None
        if row.get("curve", self.curve.name) != self.curve.name:
            raise ValueError(f"stored account for {address} is on curve {row['curve']}")
        return Account(int(row["private_key"]), self.curve)

    def load_or_create(self, address):
        account = self.load(address)
        if account is None:
            account = Account.generate(self.curve)
            self.save(address, account)
        return account

    def remove(self, address):
        self.table.remove(Accounts.address == _normalize(address))

    def addresses(self):
        return [row["address"] for row in self.table.all()]

    def close(self):
        self.db.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def _normalize(address):
    return address.lower()
