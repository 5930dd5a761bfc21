"""
Zether 기밀 토큰 클라이언트 (오케스트레이터)
============================================

원장 읽기 → 잔액 복호화 → 커밋먼트 생성 → 증명 입력 구성 → 외부 증명 →
calldata 평탄화 → 원장 제출 순서로 각 연산을 진행한다.

  ┌─────────────────────────────────────────────────────┐
  │  1. simulate_accounts / confidential_allowance 읽기 │
  │  2. decode_balance (bound = config.decode_bound)    │
  │  3. 상대방 공개키 확인 (0, 0) → *NotRegistered        │
  │  4. r ← random_scalar, 커밋먼트 튜플 생성             │
  │  5. ProofInput 구성 → prover.prove()                 │
  │  6. flatten_proof → encode_proof                    │
  │  7. ledger.<write>(...)                             │
  └─────────────────────────────────────────────────────┘

모든 사전 조건(등록 여부, 잔액 복호화, 잔액 충분)은 커밋먼트를 만들기 전에 확인하므로
실패할 때 증명 엔진이나 원장 쓰기가 호출되지 않는다.
증명 엔진의 예외는 그대로 호출자에게 전달된다.

사용 예시:
    >>> client = ConfidentialClient(ledger, prover, account, config)
    >>> client.register()
    >>> client.mint(10)
    >>> client.transfer("0xBob...", 3)
"""

import logging

from zether.calldata import (
    decode_allowance, decode_commitment_tuple, encode_commitment_tuple, encode_proof,
)
from zether.commitment import decode_balance
from zether.config import ProtocolConfig
from zether.curve import is_zero_point
from zether.errors import (
    AccountNotRegistered,
    BalanceUndecodable,
    InsufficientBalance,
    ReceiverNotRegistered,
    SpenderNotRegistered,
)
from zether.inputs import (
    RegisterInput,
    approve_input,
    burn_input,
    circuit_id,
    circuit_input,
    transfer_from_input,
    transfer_input,
)
from zether.randomness import random_curve_scalar
from zether.transfer import build_transfer_commitment, build_transfer_from_commitment


logger = logging.getLogger(__name__)


class ConfidentialClient:
    """한 지갑 주소의 기밀 잔액을 다루는 클라이언트.

    Args:
        ledger: zether.ledger.Ledger 구현. ledger.sender 가 이 클라이언트의 지갑 주소이다.
        prover: zether.groth16.prover.Prover 구현
        account: 이 지갑의 BabyJubJub 계정 (zether.curve.Account)
        config: ProtocolConfig (기본값: BabyJubJub, MAX = 2^32 - 1)

    transfer / approve 의 MAX 는 원장의 max_amount() 를 읽고,
    transfer_from 은 config.max_amount 를 쓴다.
    """

    def __init__(self, ledger, prover, account, config=None):
        self.ledger = ledger
        self.prover = prover
        self.account = account
        self.config = config if config is not None else ProtocolConfig(curve=account.curve)
        if self.config.curve != account.curve:
            raise ValueError("account curve does not match config curve")

    @property
    def address(self):
        return self.ledger.sender

    @property
    def curve(self):
        return self.config.curve

    @property
    def public_key(self):
        return self.account.public_key

    # ─────────────────────────────────────────────────────────────
    # 읽기
    # ─────────────────────────────────────────────────────────────

    def is_registered(self, address=None):
        address = self.address if address is None else address
        return not is_zero_point(self.ledger.address_to_public_key(address))

    def current_epoch(self):
        return self.ledger.current_block_number() // self.ledger.epoch_length()

    def simulate_account(self):
        """현재 epoch 로 정산한 이 계정의 (CL, CR)."""
        accounts = self.ledger.simulate_accounts([self.address], self.current_epoch())
        CL, CR = accounts[0]
        return tuple(CL), tuple(CR)

    def decode_commitment(self, CL, CR, bound=None):
        """이 계정의 개인키로 (CL, CR) 을 복호화한다. 실패하면 None."""
        bound = self.config.decode_bound if bound is None else bound
        return decode_balance(
            tuple(CL), tuple(CR), self.account.private_key, bound, self.curve,
            linear_search_limit=self.config.linear_search_limit,
        )

    def current_balance(self):
        """현재 epoch 기준 잔액.

        Raises:
            BalanceUndecodable: 잔액이 [0, decode_bound) 에서 복호화되지 않을 때
        """
        return self._require_decoded(*self.simulate_account())

    def confidential_balance(self):
        """epoch 정산 전 원장에 저장된 (CL, CR)."""
        CL, CR = decode_commitment_tuple(self.ledger.confidential_balance_of(self.address), 2)
        return CL, CR

    def read_spender_allowance(self, spender):
        """이 계정(owner)이 spender 에게 준 allowance 커밋먼트."""
        return decode_allowance(
            self.ledger.confidential_allowance(self.address, spender),
            owner=self.address, spender=spender,
        )

    def read_owner_allowance(self, owner):
        """owner 가 이 계정(spender)에게 준 allowance 커밋먼트."""
        return decode_allowance(
            self.ledger.confidential_allowance(owner, self.address),
            owner=owner, spender=self.address,
        )

    def current_allowance(self, owner):
        """owner 가 이 계정에게 준 allowance 의 복호화 값."""
        CL, CR = self.read_owner_allowance(owner).spender
        return self._require_decoded(CL, CR, what="allowance")

    # ─────────────────────────────────────────────────────────────
    # 쓰기
    # ─────────────────────────────────────────────────────────────

    def register(self):
        """Schnorr 소유 증명과 함께 공개키를 등록한다."""
        reg = RegisterInput.create(self.ledger.address, self.address, self.account)
        logger.info("registering %s", self.address)
        return self.ledger.register_account(reg.public_key, reg.challenge, reg.response)

    def mint(self, value):
        logger.info("minting %d for %s", value, self.address)
        return self.ledger.mint(value)

    def burn(self, amount):
        CL, CR = self.simulate_account()
        cur_b = self._require_decoded(CL, CR)
        _check_available(amount, cur_b)
        counter = self.ledger.counter(self.address)

        proof_input = burn_input(self.account, (CL, CR), amount, cur_b, counter)
        proof = self._prove(proof_input)

        logger.info("burning %d from %s", amount, self.address)
        return self.ledger.burn(amount, proof)

    def transfer(self, to, amount):
        receiver_pub = self._registered_key(to, ReceiverNotRegistered)
        CL, CR = self.simulate_account()
        cur_b = self._require_decoded(CL, CR)
        _check_available(amount, cur_b)
        counter = self.ledger.counter(self.address)
        max_amount = self.ledger.max_amount()

        r = random_curve_scalar(self.curve)
        commitment = build_transfer_commitment(
            self.public_key, receiver_pub, amount, r, self.curve
        )
        proof_input = transfer_input(
            self.account, receiver_pub, (CL, CR), commitment,
            amount, r, cur_b, counter, max_amount,
        )
        proof = self._prove(proof_input)

        value = encode_commitment_tuple(commitment)
        logger.info("confidential transfer from %s to %s", self.address, to)
        return self.ledger.confidential_transfer(to, value, proof)

    def approve(self, spender, amount):
        """잔액에서 amount 를 spender 의 allowance 로 옮긴다."""
        spender_pub = self._registered_key(spender, SpenderNotRegistered)
        CL, CR = self.simulate_account()
        cur_b = self._require_decoded(CL, CR)
        _check_available(amount, cur_b)
        counter = self.ledger.counter(self.address)
        max_amount = self.ledger.max_amount()

        r = random_curve_scalar(self.curve)
        commitment = build_transfer_commitment(
            self.public_key, spender_pub, amount, r, self.curve
        )
        proof_input = approve_input(
            self.account, spender_pub, (CL, CR), commitment,
            amount, r, cur_b, counter, max_amount,
        )
        proof = self._prove(proof_input)

        value = encode_commitment_tuple(commitment)
        logger.info("confidential approve from %s to %s", self.address, spender)
        return self.ledger.confidential_approve(spender, value, proof)

    def transfer_from(self, from_address, to, amount):
        """from_address 가 이 계정에 준 allowance 에서 to 로 amount 를 옮긴다."""
        from_pub = self._registered_key(from_address, AccountNotRegistered)
        spender_pub = self._registered_key(self.address, SpenderNotRegistered)
        to_pub = self._registered_key(to, ReceiverNotRegistered)

        allowance = self.read_owner_allowance(from_address).spender
        cur_allowance = self._require_decoded(*allowance, what="allowance")
        _check_available(amount, cur_allowance)
        counter = self.ledger.counter(self.address)

        r = random_curve_scalar(self.curve)
        commitment = build_transfer_from_commitment(
            from_pub, spender_pub, to_pub, amount, r, self.curve
        )
        proof_input = transfer_from_input(
            self.account, to_pub, from_pub, allowance, commitment,
            amount, r, cur_allowance, counter, self.config.max_amount,
        )
        proof = self._prove(proof_input)

        value = encode_commitment_tuple(commitment)
        logger.info("confidential transferFrom %s -> %s by %s", from_address, to, self.address)
        return self.ledger.confidential_transfer_from(from_address, to, value, proof)

    def revoke_allowance(self, spender):
        logger.info("revoking allowance of %s", spender)
        return self.ledger.revoke_allowance(spender)

    def roll_over(self):
        return self.ledger.roll_over(self.address)

    # ─────────────────────────────────────────────────────────────
    # 내부
    # ─────────────────────────────────────────────────────────────

    def _registered_key(self, address, error):
        key = tuple(int(c) for c in self.ledger.address_to_public_key(address))
        if is_zero_point(key):
            raise error(address)
        return self.curve.validate(key)

    def _require_decoded(self, CL, CR, what="balance"):
        value = self.decode_commitment(CL, CR)
        if value is None:
            raise BalanceUndecodable(self.config.decode_bound, what)
        return value

    def _prove(self, proof_input):
        cid = circuit_id(proof_input)
        result = self.prover.prove(cid, circuit_input(proof_input))
        logger.debug("%s proof generated with %d public signals", cid, len(result.public_signals))
        return encode_proof(result.flatten())


def _check_available(amount, available):
    if isinstance(amount, int) and amount > available:
        raise InsufficientBalance(amount, available)
