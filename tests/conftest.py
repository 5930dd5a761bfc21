import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from py_ecc import bn128

from zether.calldata import (
    Allowance, decode_commitment_tuple, decode_proof, encode_allowance, encode_commitment_tuple,
)
from zether.commitment import add_commitments, subtract_commitments, zero_commitment
from zether.config import ProtocolConfig
from zether.curve import BABYJUB, Account
from zether.groth16.proof import ProofResult
from zether.groth16.prover import Prover
from zether.ledger import Ledger
from zether.schnorr import verify


# ── 테스트 상수 ──
CONTRACT = "0x" + "c0" * 20
ALICE = "0x" + "a1" * 20
BOB = "0x" + "b2" * 20
CAROL = "0x" + "c3" * 20
NOBODY = "0x" + "d4" * 20

ALICE_SK = 1234567
BOB_SK = 7654321
CAROL_SK = 1111111

EPOCH_LENGTH = 10
BLOCK_NUMBER = 25


# ─────────────────────────────────────────────────────────────────────
# 메모리 원장
# ─────────────────────────────────────────────────────────────────────

class LedgerState:
    """여러 지갑이 공유하는 원장 상태. 컨트랙트처럼 커밋먼트를 점 단위로 갱신한다."""

    def __init__(self, curve=BABYJUB):
        self.curve = curve
        self.public_keys = {}
        self.balances = {}
        self.allowances = {}
        self.counters = {}
        self.writes = []
        self.block_number = BLOCK_NUMBER
        self.max_amount = 1000
        self.last_epoch = None

    def balance(self, address):
        return self.balances.get(address, zero_commitment(self.curve))

    def credit(self, address, delta):
        self.balances[address] = add_commitments(self.balance(address), delta, self.curve)

    def debit(self, address, delta):
        self.balances[address] = subtract_commitments(self.balance(address), delta, self.curve)

    def bump(self, address):
        self.counters[address] = self.counters.get(address, 0) + 1


class FakeLedger(Ledger):
    """LedgerState 를 sender 지갑으로 호출하는 원장 뷰."""

    address = CONTRACT

    def __init__(self, state, sender):
        self.state = state
        self.sender = sender

    # ── 읽기 ──

    def address_to_public_key(self, address):
        return self.state.public_keys.get(address, (0, 0))

    def counter(self, address):
        return self.state.counters.get(address, 0)

    def epoch_length(self):
        return EPOCH_LENGTH

    def current_block_number(self):
        return self.state.block_number

    def simulate_accounts(self, addresses, epoch):
        self.state.last_epoch = epoch
        return [self.state.balance(a) for a in addresses]

    def confidential_allowance(self, owner, spender):
        allowance = self.state.allowances.get((owner, spender))
        if allowance is None:
            return b""
        return encode_allowance(allowance)

    def confidential_balance_of(self, address):
        return encode_commitment_tuple(self.state.balance(address))

    def max_amount(self):
        return self.state.max_amount

    # ── 쓰기 ──

    def register_account(self, public_key, challenge, response):
        if not verify(self.address, self.sender, public_key, (challenge, response), self.state.curve):
            raise ValueError("invalid registration signature")
        self.state.writes.append(("register", self.sender))
        self.state.public_keys[self.sender] = tuple(public_key)
        self.state.balances[self.sender] = zero_commitment(self.state.curve)

    def mint(self, value):
        self.state.writes.append(("mint", self.sender))
        curve = self.state.curve
        self.state.credit(self.sender, (curve.base_mul(value), curve.identity))

    def burn(self, amount, proof):
        assert len(decode_proof(proof)) == 8
        self.state.writes.append(("burn", self.sender))
        curve = self.state.curve
        self.state.debit(self.sender, (curve.base_mul(amount), curve.identity))
        self.state.bump(self.sender)

    def confidential_transfer(self, to, value, proof):
        assert len(decode_proof(proof)) == 8
        C_send, C_receive, D = decode_commitment_tuple(value, 3)
        self.state.writes.append(("transfer", self.sender))
        self.state.debit(self.sender, (C_send, D))
        self.state.credit(to, (C_receive, D))
        self.state.bump(self.sender)

    def confidential_approve(self, spender, value, proof):
        assert len(decode_proof(proof)) == 8
        C_send, C_receive, D = decode_commitment_tuple(value, 3)
        curve = self.state.curve
        self.state.writes.append(("approve", self.sender))
        self.state.debit(self.sender, (C_send, D))

        key = (self.sender, spender)
        owner, spender_part = self.state.allowances.get(
            key, (zero_commitment(curve), zero_commitment(curve))
        )
        self.state.allowances[key] = Allowance(
            owner=add_commitments(owner, (C_send, D), curve),
            spender=add_commitments(spender_part, (C_receive, D), curve),
        )
        self.state.bump(self.sender)

    def confidential_transfer_from(self, from_address, to, value, proof):
        assert len(decode_proof(proof)) == 8
        C_from, C_spender, C_to, D = decode_commitment_tuple(value, 4)
        curve = self.state.curve
        self.state.writes.append(("transferFrom", self.sender))

        key = (from_address, self.sender)
        owner, spender_part = self.state.allowances[key]
        self.state.allowances[key] = Allowance(
            owner=subtract_commitments(owner, (C_from, D), curve),
            spender=subtract_commitments(spender_part, (C_spender, D), curve),
        )
        self.state.credit(to, (C_to, D))
        self.state.bump(self.sender)

    def revoke_allowance(self, spender):
        self.state.writes.append(("revoke", self.sender))
        allowance = self.state.allowances.pop((self.sender, spender))
        self.state.credit(self.sender, allowance.owner)

    def roll_over(self, address):
        self.state.writes.append(("rollOver", address))


# ─────────────────────────────────────────────────────────────────────
# 가짜 증명 엔진
# ─────────────────────────────────────────────────────────────────────

def sample_proof(public_signals=(1, 2)):
    A = bn128.multiply(bn128.G1, 2)
    B = bn128.G2
    C = bn128.multiply(bn128.G1, 3)
    return ProofResult(
        pA=(int(A[0]), int(A[1])),
        pB=(
            (int(B[0].coeffs[0]), int(B[0].coeffs[1])),
            (int(B[1].coeffs[0]), int(B[1].coeffs[1])),
        ),
        pC=(int(C[0]), int(C[1])),
        public_signals=list(public_signals),
    )


class FakeProver(Prover):
    """호출을 기록하고 고정된 증명을 돌려준다."""

    def __init__(self):
        self.calls = []

    def prove(self, circuit_id, input_fields):
        self.calls.append((circuit_id, input_fields))
        return sample_proof()


class FailingProver(Prover):
    def __init__(self, error):
        self.error = error

    def prove(self, circuit_id, input_fields):
        raise self.error


# ─────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def alice_account():
    return Account(ALICE_SK)


@pytest.fixture
def bob_account():
    return Account(BOB_SK)


@pytest.fixture
def carol_account():
    return Account(CAROL_SK)


@pytest.fixture
def small_config():
    """선형 탐색만 쓰는 작은 bound 설정. 클라이언트 흐름 테스트용."""
    return ProtocolConfig(max_amount=1000, decode_bound=1000)


@pytest.fixture
def ledger_state():
    return LedgerState()


@pytest.fixture
def prover():
    return FakeProver()
