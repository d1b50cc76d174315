"""database: MySQL 연결 풀 및 스키마 패키지."""
