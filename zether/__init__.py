"""
Zether 기밀 토큰 클라이언트 암호 코어
====================================

  curve       BabyJubJub 곡선 연산, Account
  commitment  잔액 커밋먼트 암호화 / 복호화
  transfer    전송 커밋먼트 튜플
  schnorr     등록용 Schnorr 소유 증명
  inputs      회로별 증명 입력 레코드
  calldata    온체인 ABI 인코딩
  client      원장과 증명 엔진을 잇는 오케스트레이터
"""
