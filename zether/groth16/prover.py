"""
증명 엔진 경계 (Prover)
=======================

회로 id 와 입력 필드를 받아 Groth16 증명을 돌려주는 외부 엔진과의 경계.

  prove(circuit_id, input_fields) → ProofResult

circuit_id ∈ {burn, transfer, approve, transferFrom}, input_fields 는
zether.inputs.circuit_input() 의 결과이다.

SnarkjsProver 는 snarkjs CLI 를 호출한다:

  snarkjs groth16 fullprove input.json <id>.wasm <id>.zkey proof.json public.json

엔진에서 발생한 실패는 모두 ProofGenerationFailed 로 올라가며 로컬에서 복구하지 않는다.
"""

import json
import logging
import subprocess
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from zether.errors import ProofGenerationFailed
from zether.groth16.proof import ProofResult


logger = logging.getLogger(__name__)


class Prover(ABC):
    """증명 엔진 인터페이스."""

    @abstractmethod
    def prove(self, circuit_id, input_fields):
        """입력 필드로 circuit_id 회로의 증명을 만든다.

        Returns:
            ProofResult
        """


class SnarkjsProver(Prover):
    """snarkjs CLI 로 증명을 만드는 Prover.

    Args:
        circuits: {circuit_id: CircuitArtifacts(wasm, zkey)}
        snarkjs: snarkjs 실행 파일 (기본값: PATH 의 "snarkjs")
        timeout: 한 번의 증명에 허용하는 초 단위 시간. None 이면 제한 없음.
    """

    def __init__(self, circuits, snarkjs="snarkjs", timeout=None):
        self.circuits = dict(circuits)
        self.snarkjs = snarkjs
        self.timeout = timeout

    @classmethod
    def from_config(cls, config, timeout=None):
        return cls(config.circuits, snarkjs=config.snarkjs, timeout=timeout)

    def command(self, circuit_id, workdir):
        try:
            artifacts = self.circuits[circuit_id]
        except KeyError:
            raise ProofGenerationFailed(f"no artifacts for circuit '{circuit_id}'") from None
        workdir = Path(workdir)
        return [
            self.snarkjs, "groth16", "fullprove",
            str(workdir / "input.json"),
            artifacts.wasm,
            artifacts.zkey,
            str(workdir / "proof.json"),
            str(workdir / "public.json"),
        ]

    def prove(self, circuit_id, input_fields):
        with tempfile.TemporaryDirectory(prefix=f"zether-{circuit_id}-") as tmp:
            workdir = Path(tmp)
            cmd = self.command(circuit_id, workdir)
            with open(workdir / "input.json", "w") as f:
                json.dump(input_fields, f)

            logger.debug("running %s", " ".join(cmd[:3] + [circuit_id]))
            try:
                subprocess.run(
                    cmd,
                    check=True,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                )
            except subprocess.CalledProcessError as e:
                raise ProofGenerationFailed(
                    f"snarkjs failed for '{circuit_id}' (exit {e.returncode}): {e.stderr.strip()}"
                ) from e
            except (OSError, subprocess.TimeoutExpired) as e:
                raise ProofGenerationFailed(f"snarkjs failed for '{circuit_id}': {e}") from e

            try:
                with open(workdir / "proof.json") as f:
                    proof = json.load(f)
                with open(workdir / "public.json") as f:
                    public_signals = json.load(f)
                return ProofResult.from_snarkjs(proof, public_signals)
            except (OSError, ValueError, KeyError) as e:
                raise ProofGenerationFailed(f"unreadable snarkjs output for '{circuit_id}': {e}") from e
