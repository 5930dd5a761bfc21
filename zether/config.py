"""
프로토콜 설정
=============

한 번 만들어 모든 구성 요소에 그대로 넘기는 불변 설정 값.

  - curve:               곡선 파라미터 (기본값 BABYJUB)
  - max_amount:          transferFrom 범위 증명의 MAX (기본값 2^32 - 1)
  - decode_bound:        잔액 복호화 탐색 상한 (기본값 max_amount)
  - linear_search_limit: 이 값 이하의 bound 는 선형 탐색
  - circuits:            회로 id → CircuitArtifacts(wasm, zkey)
  - snarkjs:             snarkjs 실행 파일

JSON 파일 예시:
    {
      "max_amount": 4294967295,
      "snarkjs": "snarkjs",
      "circuits": {"burn": {"wasm": "burn_js/burn.wasm", "zkey": "burn_1.zkey"}}
    }
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from zether.commitment import LINEAR_SEARCH_LIMIT
from zether.curve import BABYJUB, Curve


logger = logging.getLogger(__name__)

# 2^32 - 1
DEFAULT_MAX_AMOUNT = 4294967295

CIRCUIT_IDS = ("burn", "transfer", "approve", "transferFrom")


@dataclass(frozen=True)
class CircuitArtifacts:
    """snarkjs 가 읽는 컴파일된 회로 파일."""
    wasm: str
    zkey: str


@dataclass(frozen=True)
class ProtocolConfig:
    curve: Curve = BABYJUB
    max_amount: int = DEFAULT_MAX_AMOUNT
    decode_bound: int = DEFAULT_MAX_AMOUNT
    linear_search_limit: int = LINEAR_SEARCH_LIMIT
    circuits: dict = field(default_factory=dict)
    snarkjs: str = "snarkjs"

    def __post_init__(self):
        if self.max_amount < 1:
            raise ValueError(f"max_amount must be positive: {self.max_amount}")
        if self.decode_bound < 1:
            raise ValueError(f"decode_bound must be positive: {self.decode_bound}")
        unknown = set(self.circuits) - set(CIRCUIT_IDS)
        if unknown:
            raise ValueError(f"unknown circuit ids: {sorted(unknown)}")

    @classmethod
    def from_dict(cls, data, base_dir=None):
        """JSON 형태의 dict 로 설정을 만든다. 상대 경로는 base_dir 기준으로 바꾼다."""
        base = Path(base_dir) if base_dir is not None else None
        circuits = {}
        for circuit_id, paths in data.get("circuits", {}).items():
            wasm, zkey = Path(paths["wasm"]), Path(paths["zkey"])
            if base is not None:
                wasm, zkey = base / wasm, base / zkey
            circuits[circuit_id] = CircuitArtifacts(str(wasm), str(zkey))

        max_amount = int(data.get("max_amount", DEFAULT_MAX_AMOUNT))
        return cls(
            max_amount=max_amount,
            decode_bound=int(data.get("decode_bound", max_amount)),
            linear_search_limit=int(data.get("linear_search_limit", LINEAR_SEARCH_LIMIT)),
            circuits=circuits,
            snarkjs=data.get("snarkjs", "snarkjs"),
        )

    @classmethod
    def from_file(cls, path):
        path = Path(path)
        with open(path) as f:
            data = json.load(f)
        logger.info("loaded protocol config from %s", path)
        return cls.from_dict(data, base_dir=path.parent)


def default_circuits(root="./circom"):
    """circom 빌드 출력 배치: <id>_js/<id>.wasm, <id>_1.zkey"""
    root = Path(root)
    return {
        cid: CircuitArtifacts(
            str(root / f"{cid}_js" / f"{cid}.wasm"),
            str(root / f"{cid}_1.zkey"),
        )
        for cid in CIRCUIT_IDS
    }
