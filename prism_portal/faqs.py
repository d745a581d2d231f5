"""
FAQ store: an ordered question/answer list shown on the public home page.
"""

from __future__ import annotations

import copy
import threading
from typing import Any, ContextManager, Dict, List, Optional

from prism_portal.errors import NotFound
from prism_portal.models import Faq


class FaqStore:
    def __init__(self, lock: Optional[ContextManager[Any]] = None) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._faqs: Dict[int, Faq] = {}
        self._next_id = 1

    # PUBLIC_INTERFACE
    def list(self) -> List[Faq]:
        """Return FAQs ordered by position, then id."""
        with self._lock:
            return [copy.copy(f) for f in sorted(self._faqs.values(), key=lambda f: (f.position, f.id))]

    # PUBLIC_INTERFACE
    def create(self, *, question: str, answer: str, position: Optional[int] = None) -> Faq:
        """Append a FAQ. Without an explicit position it goes after the current last entry."""
        with self._lock:
            if position is None:
                position = max((f.position for f in self._faqs.values()), default=-1) + 1
            faq = Faq(id=self._next_id, question=question, answer=answer, position=position)
            self._faqs[faq.id] = faq
            self._next_id += 1
            return copy.copy(faq)

    # PUBLIC_INTERFACE
    def update(
        self,
        faq_id: int,
        *,
        question: Optional[str] = None,
        answer: Optional[str] = None,
        position: Optional[int] = None,
    ) -> Faq:
        with self._lock:
            current = self._faqs.get(faq_id)
            if current is None:
                raise NotFound(f"FAQ {faq_id} not found.")
            updated = Faq(
                id=faq_id,
                question=question if question is not None else current.question,
                answer=answer if answer is not None else current.answer,
                position=position if position is not None else current.position,
            )
            self._faqs[faq_id] = updated
            return copy.copy(updated)

    # PUBLIC_INTERFACE
    def delete(self, faq_id: int) -> None:
        with self._lock:
            if self._faqs.pop(faq_id, None) is None:
                raise NotFound(f"FAQ {faq_id} not found.")
