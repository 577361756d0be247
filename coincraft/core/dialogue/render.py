"""노드 본문 템플릿 치환

본문의 {balance}, {grade} 같은 자리표시자를 해석기 컨텍스트로 채운다.
컨텍스트에 없는 키는 원문 그대로 남긴다.
"""

import logging
from typing import Any, Mapping

logger = logging.getLogger(__name__)


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def escape_braces(text: str) -> str:
    """동적으로 끼워 넣는 문장(문항 등)이 자리표시자로 오인되지 않게"""
    return text.replace("{", "{{").replace("}", "}}")


def render_text(template: str, context: Mapping[str, Any]) -> str:
    try:
        return template.format_map(_KeepMissing(context))
    except (ValueError, IndexError, AttributeError):
        logger.warning("Malformed dialogue template left unrendered: %r", template[:60])
        return template
