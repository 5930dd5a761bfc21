"""
전송/승인 커밋먼트 생성
========================

하나의 블라인딩 값 r 을 공유하는 다자간 커밋먼트 튜플을 만든다.

**2자 전송 (transfer, approve)**:

      C_send    = y_S · r + amount · G
      C_receive = y_R · r + amount · G
      D         = r · G

  원장은 송신자의 (CL, CR) 에서 (C_send, D) 를 빼고, 수신자의 커밋먼트에
  (C_receive, D) 를 더한다. 두 쪽 모두 자기 개인키로 변화량을 복호화할 수 있다.
  approve 에서는 owner / spender 가 송신자 / 수신자 역할을 한다.

**3자 전송 (transferFrom)**:

      C_from    = y_F · r + amount · G     owner 몫의 allowance 감소
      C_spender = y_P · r + amount · G     spender 몫의 allowance 감소
      C_to      = y_T · r + amount · G     수신자 잔액 증가
      D         = r · G

amount 는 커밋먼트와 증명 입력에 같은 값으로 넘겨야 한다.
범위 제한은 회로가 강제하며 여기서는 음수가 아닌 정수인지만 확인한다.
"""

from collections import namedtuple

from zether.curve import is_zero_point
from zether.errors import CurveError


TransferCommitment = namedtuple("TransferCommitment", ["C_send", "C_receive", "D"])

TransferFromCommitment = namedtuple(
    "TransferFromCommitment", ["C_from", "C_spender", "C_to", "D"]
)


def build_transfer_commitment(sender_pub, receiver_pub, amount, r, curve):
    """2자 전송 커밋먼트 (C_send, C_receive, D) 를 만든다.

    Args:
        sender_pub: 송신자(또는 owner) 공개키
        receiver_pub: 수신자(또는 spender) 공개키
        amount: 전송 금액 (음수가 아닌 정수)
        r: 블라인딩 스칼라 [0, ℓ)
        curve: 곡선 파라미터

    Returns:
        TransferCommitment
    """
    g_amount = _amount_point(amount, curve)
    return TransferCommitment(
        C_send=_commit(sender_pub, r, g_amount, curve),
        C_receive=_commit(receiver_pub, r, g_amount, curve),
        D=curve.base_mul(r),
    )


def build_transfer_from_commitment(from_pub, spender_pub, to_pub, amount, r, curve):
    """3자 전송 커밋먼트 (C_from, C_spender, C_to, D) 를 만든다."""
    g_amount = _amount_point(amount, curve)
    return TransferFromCommitment(
        C_from=_commit(from_pub, r, g_amount, curve),
        C_spender=_commit(spender_pub, r, g_amount, curve),
        C_to=_commit(to_pub, r, g_amount, curve),
        D=curve.base_mul(r),
    )


def _amount_point(amount, curve):
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise CurveError(f"amount must be a non-negative int: {amount!r}")
    return curve.base_mul(amount)


def _commit(public_key, r, g_amount, curve):
    if is_zero_point(public_key):
        raise CurveError("public key is the unregistered (0, 0) marker")
    return curve.add(curve.mul(public_key, r), g_amount)
