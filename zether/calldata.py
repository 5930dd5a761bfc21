"""
온체인 calldata 인코딩/디코딩 헬퍼
====================================

원장 컨트랙트가 기대하는 파라미터 레이아웃으로 값을 변환한다.
모든 정수는 256비트 부호 없는 정수 (ABI uint256) 이다.

  - 증명 바이트:      abi.encode(uint256[8])
  - 커밋먼트 튜플:    abi.encode((uint256,uint256), ...)   2 ~ 4 개의 점
  - allowance 바이트: 8개의 uint256 = owner (CL.x, CL.y, CR.x, CR.y), spender (CL.x, CL.y, CR.x, CR.y)
"""

from collections import namedtuple

from eth_abi import decode, encode

from zether.errors import AllowanceNotFound


POINT_TYPE = "(uint256,uint256)"

Allowance = namedtuple("Allowance", ["owner", "spender"])


# ─── Groth16 증명 ───

def flatten_proof(pA, pB, pC):
    """(pA, pB, pC) → [pA.x, pA.y, pB[0][0], pB[0][1], pB[1][0], pB[1][1], pC.x, pC.y]

    pB 는 이미 Solidity 순서로 바뀐 G2 좌표여야 한다 (ProofResult.to_calldata 참고).
    검증 컨트랙트의 uint256[8] 레이아웃이므로 순서를 바꾸면 안 된다.
    """
    return [
        int(pA[0]),
        int(pA[1]),
        int(pB[0][0]),
        int(pB[0][1]),
        int(pB[1][0]),
        int(pB[1][1]),
        int(pC[0]),
        int(pC[1]),
    ]


def encode_proof(flat):
    """list[int] (8개) → abi.encode(uint256[8])"""
    if len(flat) != 8:
        raise ValueError(f"flattened proof must have 8 elements, got {len(flat)}")
    return encode(["uint256[8]"], [list(flat)])


def decode_proof(data):
    """abi.encode(uint256[8]) → list[int]"""
    (flat,) = decode(["uint256[8]"], bytes(data))
    return list(flat)


# ─── 커밋먼트 튜플 ───

def encode_commitment_tuple(points):
    """[(x, y), ...] (2 ~ 4개) → abi.encode((uint256,uint256), ...)

    transfer / approve 는 (C_send, C_receive, D),
    transferFrom 은 (C_from, C_spender, C_to, D) 순서로 넘긴다.
    """
    points = [tuple(int(c) for c in p) for p in points]
    if not 2 <= len(points) <= 4:
        raise ValueError(f"commitment tuple must hold 2 to 4 points, got {len(points)}")
    return encode([POINT_TYPE] * len(points), points)


def decode_commitment_tuple(data, count):
    """abi.encode((uint256,uint256) × count) → [(x, y), ...]"""
    return [tuple(p) for p in decode([POINT_TYPE] * count, bytes(data))]


# ─── allowance ───

def decode_allowance(data, owner=None, spender=None):
    """allowance 바이트 → Allowance(owner=(CL, CR), spender=(CL, CR))

    Raises:
        AllowanceNotFound: 바이트가 비어 있거나 "0x" 일 때
    """
    if data is None:
        raise AllowanceNotFound(owner, spender)
    if isinstance(data, str):
        data = bytes.fromhex(data[2:] if data.startswith("0x") else data)
    if len(data) == 0:
        raise AllowanceNotFound(owner, spender)

    v = decode(["uint256"] * 8, bytes(data))
    return Allowance(
        owner=((v[0], v[1]), (v[2], v[3])),
        spender=((v[4], v[5]), (v[6], v[7])),
    )


def encode_allowance(allowance):
    """Allowance → 8 × uint256 (원장 쪽 레이아웃, 테스트용 원장이 사용)"""
    (ocl, ocr), (scl, scr) = allowance
    return encode(["uint256"] * 8, [*ocl, *ocr, *scl, *scr])
