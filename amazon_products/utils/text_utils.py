"""텍스트 처리 유틸리티"""

from __future__ import annotations

import re
from typing import Optional


# 앞쪽 공백 뒤의 부호/숫자만 읽음 ("37abc" -> 37, "1.5" -> 1)
LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?[0-9]+)")


def normalize_query(query: Optional[str]) -> str:
    """캐시 키용 검색어 정규화 (공백 제거 + 소문자)

    정규화된 값을 다시 넣어도 같은 결과가 나옵니다.

    예시:
    - "  Notebook  " -> "notebook"
    - "notebook" -> "notebook"
    """
    if not query:
        return ""
    return query.strip().lower()


def parse_positive_int(value: Optional[str]) -> Optional[int]:
    """앞부분의 10진수 정수를 읽어 양수면 반환, 아니면 None

    " 37 " -> 37, "37abc" -> 37, "1.5" -> 1
    "abc", "", "x1", "0", "-5" -> None
    """
    if value is None:
        return None
    match = LEADING_INT_PATTERN.match(str(value))
    if match is None:
        return None
    parsed = int(match.group(1), 10)
    return parsed if parsed >= 1 else None
