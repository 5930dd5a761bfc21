"""
원장(Ledger) 경계
=================

커밋먼트를 저장하고 증명을 검증하는 온체인 컨트랙트와의 인터페이스.
이 엔진은 원장을 구현하지 않고, 아래 읽기/쓰기 호출만 사용한다.
실제 구현(지갑 서명, RPC 전송)은 이 클래스를 상속해 외부에서 제공한다.

**읽기**:
  - address_to_public_key(address) → (x, y)    (0, 0) 이면 미등록
  - counter(address) → int                     증명마다 쓰는 replay 방지 카운터
  - epoch_length() / current_block_number()    epoch = block_number // epoch_length
  - simulate_accounts(addresses, epoch) → [(CL, CR)]
  - confidential_allowance(owner, spender) → bytes (비어 있으면 allowance 없음)
  - confidential_balance_of(address) → bytes   epoch 반영 전의 저장된 (CL, CR)
  - max_amount() → int                         범위 증명의 상한 MAX

**쓰기** (호출하는 지갑 주소 = ledger.sender):
  register_account, mint, burn, confidential_transfer, confidential_approve,
  confidential_transfer_from, revoke_allowance, roll_over
"""

from abc import ABC, abstractmethod


class Ledger(ABC):
    """원장 컨트랙트 인터페이스.

    속성:
        address: 컨트랙트 주소 (Schnorr 챌린지에 결합된다)
        sender: 쓰기 호출을 서명하는 지갑 주소
    """

    address = None
    sender = None

    # ── 읽기 ──

    @abstractmethod
    def address_to_public_key(self, address):
        """등록된 BabyJubJub 공개키 (x, y). 미등록이면 (0, 0)."""

    @abstractmethod
    def counter(self, address):
        """replay 방지 카운터."""

    @abstractmethod
    def epoch_length(self):
        """epoch 당 블록 수."""

    @abstractmethod
    def current_block_number(self):
        """현재 블록 번호."""

    @abstractmethod
    def simulate_accounts(self, addresses, epoch):
        """epoch 까지의 대기 중인 변화량을 반영한 [(CL, CR), ...]."""

    @abstractmethod
    def confidential_allowance(self, owner, spender):
        """8 × uint256 allowance 바이트. 없으면 빈 바이트."""

    @abstractmethod
    def confidential_balance_of(self, address):
        """저장된 (CL, CR) 의 4 × uint256 바이트."""

    @abstractmethod
    def max_amount(self):
        """컨트랙트의 MAX 상수."""

    # ── 쓰기 ──

    @abstractmethod
    def register_account(self, public_key, challenge, response):
        pass

    @abstractmethod
    def mint(self, value):
        pass

    @abstractmethod
    def burn(self, amount, proof):
        pass

    @abstractmethod
    def confidential_transfer(self, to, value, proof):
        pass

    @abstractmethod
    def confidential_approve(self, spender, value, proof):
        pass

    @abstractmethod
    def confidential_transfer_from(self, from_address, to, value, proof):
        pass

    @abstractmethod
    def revoke_allowance(self, spender):
        pass

    @abstractmethod
    def roll_over(self, address):
        pass
