"""이 파일은 .py API 패키지 초기화 모듈입니다."""
