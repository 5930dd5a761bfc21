"""
증명 입력 (Proof Input) 레코드
==============================

증명 종류마다 고정된 모양의 입력 레코드를 정의한다.

  ProofInput = BurnInput | TransferInput | ApproveInput | TransferFromInput

각 레코드는 두 부분으로 나뉜다:
  - public:  회로의 공개 입력. 온체인 public signal 로도 쓰인다.
             필드 선언 순서가 곧 회로의 공개 입력 순서이다.
  - private: witness 전용 값. 로컬 증명 단계 밖으로 나가지 않는다.

남은 잔액(bRem), 현재 잔액(cur_b), 개인키(sk), 블라인딩 값(r) 은 모두 private 쪽에만
존재하므로 public_input_values() 로 실수로 새어 나갈 수 없다.

**필드 목록**:
  | 종류         | public                                            | private                  |
  |--------------|---------------------------------------------------|--------------------------|
  | burn         | y, CL, CR, b, counter                             | sk, cur_b                |
  | transfer     | MAX, CS, D, CRe, y, yR, CL, CR, counter           | sk, r, sAmount, bRem     |
  | approve      | transfer 와 같음 (owner → spender)                 | transfer 와 같음          |
  | transferFrom | y, yR, yF, CL, CR, CS, CRe, CFr, D, counter, MAX  | sk, bRem, sAmount, r     |

회로 입력 직렬화 규칙: 스칼라는 10진 문자열, 점은 [x, y] 10진 문자열 쌍.

등록(register)은 회로 증명 없이 Schnorr 서명만 쓴다 (RegisterInput).
"""

from dataclasses import dataclass, fields

from zether.errors import InsufficientBalance
from zether.schnorr import sign


# ─────────────────────────────────────────────────────────────────────
# Burn
# ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BurnPublic:
    y: tuple
    CL: tuple
    CR: tuple
    b: int
    counter: int


@dataclass(frozen=True)
class BurnPrivate:
    sk: int
    cur_b: int


@dataclass(frozen=True)
class BurnInput:
    public: BurnPublic
    private: BurnPrivate


# ─────────────────────────────────────────────────────────────────────
# Transfer / Approve
# ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TransferPublic:
    MAX: int
    CS: tuple
    D: tuple
    CRe: tuple
    y: tuple
    yR: tuple
    CL: tuple
    CR: tuple
    counter: int


@dataclass(frozen=True)
class TransferPrivate:
    sk: int
    r: int
    sAmount: int
    bRem: int


@dataclass(frozen=True)
class TransferInput:
    public: TransferPublic
    private: TransferPrivate


@dataclass(frozen=True)
class ApproveInput(TransferInput):
    """owner 가 송신자, spender 가 수신자 역할을 하는 transfer 와 같은 모양."""


# ─────────────────────────────────────────────────────────────────────
# TransferFrom
# ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TransferFromPublic:
    y: tuple
    yR: tuple
    yF: tuple
    CL: tuple
    CR: tuple
    CS: tuple
    CRe: tuple
    CFr: tuple
    D: tuple
    counter: int
    MAX: int


@dataclass(frozen=True)
class TransferFromPrivate:
    sk: int
    bRem: int
    sAmount: int
    r: int


@dataclass(frozen=True)
class TransferFromInput:
    public: TransferFromPublic
    private: TransferFromPrivate


# ─────────────────────────────────────────────────────────────────────
# Register (Schnorr only)
# ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RegisterInput:
    public_key: tuple
    challenge: int
    response: int

    @classmethod
    def create(cls, contract_address, account_address, account):
        sig = sign(
            contract_address,
            account_address,
            account.public_key,
            account.private_key,
            account.curve,
        )
        return cls(account.public_key, sig.challenge, sig.response)


# ─────────────────────────────────────────────────────────────────────
# 직렬화
# ─────────────────────────────────────────────────────────────────────

CIRCUIT_IDS = {
    BurnInput: "burn",
    TransferInput: "transfer",
    ApproveInput: "approve",
    TransferFromInput: "transferFrom",
}


def circuit_id(proof_input):
    """레코드 종류에 대응하는 외부 회로 id."""
    try:
        return CIRCUIT_IDS[type(proof_input)]
    except KeyError:
        raise TypeError(f"unknown proof input kind: {type(proof_input).__name__}") from None


def circuit_input(proof_input):
    """증명 엔진에 넘길 전체 입력 {필드 이름: 10진 문자열 | [x, y]}.

    public 필드가 선언 순서대로 먼저 오고, 그다음 private 필드가 온다.
    """
    circuit_id(proof_input)
    out = {}
    for part in (proof_input.public, proof_input.private):
        for f in fields(part):
            out[f.name] = _serialize(getattr(part, f.name))
    return out


def public_input_values(proof_input):
    """공개 입력만 회로 순서대로 평탄화한 정수 리스트. 점은 x, y 두 값이 된다."""
    circuit_id(proof_input)
    values = []
    for f in fields(proof_input.public):
        value = getattr(proof_input.public, f.name)
        if isinstance(value, tuple):
            values.extend(int(c) for c in value)
        else:
            values.append(int(value))
    return values


def _serialize(value):
    if isinstance(value, tuple):
        return [str(int(c)) for c in value]
    return str(int(value))


# ─────────────────────────────────────────────────────────────────────
# 생성 함수
# ─────────────────────────────────────────────────────────────────────

def burn_input(account, commitment, amount, current_balance, counter):
    """Burn 입력. cur_b 는 현재 잔액, b 는 소각할 금액이다."""
    _check_spend(amount, current_balance)
    CL, CR = commitment
    return BurnInput(
        public=BurnPublic(
            y=account.public_key,
            CL=tuple(CL),
            CR=tuple(CR),
            b=amount,
            counter=counter,
        ),
        private=BurnPrivate(sk=account.private_key, cur_b=current_balance),
    )


def transfer_input(account, receiver_pub, commitment, transfer_commitment,
                   amount, r, current_balance, counter, max_amount):
    """Transfer 입력. bRem = current_balance - amount."""
    return _two_party(TransferInput, account, receiver_pub, commitment,
                      transfer_commitment, amount, r, current_balance, counter, max_amount)


def approve_input(account, spender_pub, commitment, transfer_commitment,
                  amount, r, current_balance, counter, max_amount):
    """Approve 입력. owner 의 잔액에서 amount 만큼 allowance 로 옮긴다."""
    return _two_party(ApproveInput, account, spender_pub, commitment,
                      transfer_commitment, amount, r, current_balance, counter, max_amount)


def transfer_from_input(account, to_pub, from_pub, allowance, commitment,
                        amount, r, current_allowance, counter, max_amount):
    """TransferFrom 입력.

    Args:
        account: spender 계정 (증명하는 쪽)
        to_pub: 수신자 공개키
        from_pub: owner 공개키
        allowance: spender 몫의 allowance 커밋먼트 (CL, CR)
        commitment: TransferFromCommitment
        amount: 옮길 금액
        r: commitment 에 쓴 블라인딩 값
        current_allowance: 복호화한 현재 allowance
        counter: spender 의 replay 방지 카운터
        max_amount: 프로토콜 MAX
    """
    _check_spend(amount, current_allowance, max_amount)
    CL, CR = allowance
    return TransferFromInput(
        public=TransferFromPublic(
            y=account.public_key,
            yR=tuple(to_pub),
            yF=tuple(from_pub),
            CL=tuple(CL),
            CR=tuple(CR),
            CS=commitment.C_spender,
            CRe=commitment.C_to,
            CFr=commitment.C_from,
            D=commitment.D,
            counter=counter,
            MAX=max_amount,
        ),
        private=TransferFromPrivate(
            sk=account.private_key,
            bRem=current_allowance - amount,
            sAmount=amount,
            r=r,
        ),
    )


def _two_party(kind, account, other_pub, commitment, transfer_commitment,
               amount, r, current_balance, counter, max_amount):
    _check_spend(amount, current_balance, max_amount)
    CL, CR = commitment
    return kind(
        public=TransferPublic(
            MAX=max_amount,
            CS=transfer_commitment.C_send,
            D=transfer_commitment.D,
            CRe=transfer_commitment.C_receive,
            y=account.public_key,
            yR=tuple(other_pub),
            CL=tuple(CL),
            CR=tuple(CR),
            counter=counter,
        ),
        private=TransferPrivate(
            sk=account.private_key,
            r=r,
            sAmount=amount,
            bRem=current_balance - amount,
        ),
    )


def _check_spend(amount, available, max_amount=None):
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise ValueError(f"amount must be a non-negative int: {amount!r}")
    if max_amount is not None and amount > max_amount:
        raise ValueError(f"amount {amount} exceeds protocol maximum {max_amount}")
    if amount > available:
        raise InsufficientBalance(amount, available)
