from __future__ import annotations

from pydantic import BaseModel


class Ack(BaseModel):
    success: bool = True
    id: int | None = None


def unique_in_order(values: list[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for value in values:
        cleaned = value.strip()
        if not cleaned or cleaned in seen:
            continue
        seen.add(cleaned)
        ordered.append(cleaned)
    return ordered
