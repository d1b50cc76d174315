"""utils: 유틸리티 함수들을 모아놓은 패키지.

Modules:
    exceptions: HTTP 에러 헬퍼
    formatters: 날짜/페이지 포맷팅
    jwt_utils: Access Token 생성 및 검증
    file_utils: 첨부파일 형식 분류 및 검증
    storage: 로컬 파일 저장소
    s3_utils: S3 파일 저장소
    upload: 저장소 디스패처
"""
