"""Выбор одного кандидата из нескольких по MatchPolicy."""

from typing import List, Optional, TypeVar

from ..exceptions import AmbiguousMatchError
from ..models import MatchPolicy

T = TypeVar("T")


def pick(
    candidates: List[T],
    policy: MatchPolicy,
    hostname: str,
    kind: str,
    describe=str,
) -> Optional[T]:
    """
    Возвращает выбранного кандидата или None если список пуст.

    Args:
        candidates: Кандидаты в порядке получения из NetBox
        policy: LAST, FIRST или STRICT
        hostname: Машина (для ошибки)
        kind: interface / ip_range (для ошибки)
        describe: Как показать кандидата в ошибке

    Raises:
        AmbiguousMatchError: STRICT и кандидатов больше одного
    """
    if not candidates:
        return None
    if policy == MatchPolicy.STRICT and len(candidates) > 1:
        raise AmbiguousMatchError(hostname, kind, [describe(c) for c in candidates])
    if policy == MatchPolicy.FIRST:
        return candidates[0]
    return candidates[-1]
