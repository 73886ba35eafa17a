"""이 파일은 .py 소스 마스킹 모듈로 주석/문자열 리터럴을 공백으로 치환해 매칭 범위를 나눕니다.

치환은 같은 길이의 공백으로 이뤄지고 줄바꿈은 그대로 두기 때문에
마스킹된 텍스트의 오프셋과 라인 번호는 원본과 동일하다.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import List, Tuple

from .types import Scope

_NEWLINES = ("\n", "\r")


@dataclass(frozen=True)
class SourceView:
    raw: str
    code: str
    code_and_strings: str
    line_starts: Tuple[int, ...]

    def text(self, scope: Scope) -> str:
        if scope == Scope.CODE:
            return self.code
        if scope == Scope.CODE_AND_STRINGS:
            return self.code_and_strings
        return self.raw

    def line_of(self, offset: int) -> int:
        # 오프셋이 속한 1-based 라인 번호를 반환한다.
        return bisect_right(self.line_starts, offset)


def _blank(chunk: str) -> str:
    return "".join(ch if ch in _NEWLINES else " " for ch in chunk)


def _line_starts(text: str) -> Tuple[int, ...]:
    # \n, \r\n, 단독 \r 모두 한 줄의 끝으로 센다(마스킹의 줄 끝 기준과 같다).
    starts = [0]
    for index, ch in enumerate(text):
        if ch == "\n" or (ch == "\r" and text[index + 1:index + 2] != "\n"):
            starts.append(index + 1)
    return tuple(starts)


def mask_source(text: str) -> SourceView:
    code: List[str] = []
    code_and_strings: List[str] = []
    length = len(text)
    i = 0

    while i < length:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < length else ""

        if ch == "/" and nxt == "/":
            # 라인 주석은 줄바꿈 직전까지이다.
            end = i
            while end < length and text[end] not in _NEWLINES:
                end += 1
            blanked = _blank(text[i:end])
            code.append(blanked)
            code_and_strings.append(blanked)
            i = end
            continue

        if ch == "/" and nxt == "*":
            # 닫히지 않은 블록 주석은 파일 끝까지 주석으로 본다.
            close = text.find("*/", i + 2)
            end = length if close == -1 else close + 2
            blanked = _blank(text[i:end])
            code.append(blanked)
            code_and_strings.append(blanked)
            i = end
            continue

        if ch in ('"', "'"):
            # 따옴표는 남기고 본문만 비운다. 이스케이프와 줄바꿈 종료를 처리한다.
            end = i + 1
            while end < length:
                current = text[end]
                if current == "\\":
                    end += 2
                    continue
                if current == ch or current in _NEWLINES:
                    break
                end += 1
            end = min(end, length)
            body = text[i + 1:end]
            closing = text[end] if end < length and text[end] == ch else ""
            code.append(ch + _blank(body) + closing)
            code_and_strings.append(ch + body + closing)
            i = end + len(closing)
            continue

        code.append(ch)
        code_and_strings.append(ch)
        i += 1

    return SourceView(
        raw=text,
        code="".join(code),
        code_and_strings="".join(code_and_strings),
        line_starts=_line_starts(text),
    )
