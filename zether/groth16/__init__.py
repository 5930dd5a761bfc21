"""Groth16 증명 데이터, 검증, 외부 증명 엔진 경계."""
