"""controllers: 요청 핸들러 패키지.

커뮤니티 게시글과 카테고리 컨트롤러 모듈을 제공합니다.
"""

from . import post_controller
from . import category_controller

__all__ = [
    "post_controller",
    "category_controller",
]
