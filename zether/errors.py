"""
Zether 클라이언트 예외 계층
============================

엔진과 오케스트레이터가 발생시키는 모든 예외는 ZetherError를 상속한다.

  ZetherError
  ├── CurveError               곡선 밖의 점, 범위를 벗어난 스칼라
  ├── AccountNotRegistered     조회한 공개키가 (0, 0)
  │   ├── ReceiverNotRegistered
  │   └── SpenderNotRegistered
  ├── BalanceUndecodable       이산로그 탐색이 bound를 넘음
  ├── AllowanceNotFound        allowance 바이트가 비어 있음
  ├── InsufficientBalance      금액이 현재 잔액보다 큼
  └── ProofGenerationFailed    외부 증명 엔진 실패

BalanceUndecodable은 "잔액 0"과 구분되어야 한다. 0은 정상적으로 복호화된 값이다.
"""


class ZetherError(Exception):
    """모든 Zether 예외의 기반 클래스."""


class CurveError(ZetherError, ValueError):
    """점이 곡선 위에 없거나 스칼라가 허용 범위 밖일 때."""


class AccountNotRegistered(ZetherError):
    """원장에 등록된 공개키가 없는 계정."""

    role = "account"

    def __init__(self, address):
        self.address = address
        super().__init__(f"{self.role} public key not registered: {address}")


class ReceiverNotRegistered(AccountNotRegistered):
    role = "receiver"


class SpenderNotRegistered(AccountNotRegistered):
    role = "spender"


class BalanceUndecodable(ZetherError):
    """커밋먼트가 [0, bound) 안의 값으로 복호화되지 않는다.

    다른 사람의 계정이거나 bound가 프로토콜과 맞지 않는 경우다.
    """

    def __init__(self, bound, what="balance"):
        self.bound = bound
        super().__init__(f"{what} unavailable: no value found below bound {bound}")


class AllowanceNotFound(ZetherError):
    def __init__(self, owner=None, spender=None):
        self.owner = owner
        self.spender = spender
        super().__init__(f"allowance not found (owner={owner}, spender={spender})")


class InsufficientBalance(ZetherError):
    def __init__(self, amount, available):
        self.amount = amount
        self.available = available
        super().__init__(f"amount {amount} exceeds available {available}")


class ProofGenerationFailed(ZetherError):
    """증명 엔진이 증명을 만들지 못했다. 원인은 __cause__에 보존된다."""
