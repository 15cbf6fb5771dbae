"""
In-memory ideas repository (ideas, likes, comments).

Mirrors PostgresIdeaRepository: counters are derived on read, deleting an
idea cascades to its likes and comments, and likes are a set of
(idea_id, user_id) pairs so a duplicate can never exist.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from itertools import count
from threading import Lock
from typing import Dict, List, Optional, Set, Tuple

from ....domain.entities import Idea, IdeaComment
from .user import InMemoryUserRepository


class InMemoryIdeaRepository:
    def __init__(self, users: InMemoryUserRepository | None = None) -> None:
        self._lock = Lock()
        self._ideas: Dict[int, Idea] = {}
        self._comments: Dict[int, IdeaComment] = {}
        self._likes: Set[Tuple[int, int]] = set()
        self._idea_ids = count(1)
        self._comment_ids = count(1)
        self._users = users

    def _author(self, user_id: int) -> tuple[str | None, str | None, str | None]:
        user = self._users.get_user_by_id(user_id) if self._users else None
        if user is None:
            return None, None, None
        return user.first_name, user.last_name, user.position

    def _view(self, idea: Idea, viewer_id: int) -> Idea:
        # R: se llama con el lock tomado.
        first, last, position = self._author(idea.user_id)
        return replace(
            idea,
            first_name=first,
            last_name=last,
            position=position,
            likes_count=sum(1 for (i, _) in self._likes if i == idea.id),
            comments_count=sum(1 for c in self._comments.values() if c.idea_id == idea.id),
            is_liked=(idea.id, viewer_id) in self._likes,
            comments=[],
        )

    def _comment_view(self, comment: IdeaComment) -> IdeaComment:
        first, last, _ = self._author(comment.user_id)
        return replace(comment, first_name=first, last_name=last)

    def list_ideas(self, *, viewer_id: int) -> List[Idea]:
        with self._lock:
            views = [self._view(i, viewer_id) for i in self._ideas.values()]
        return sorted(views, key=lambda i: (i.created_at, i.id), reverse=True)

    def get_idea(self, idea_id: int, *, viewer_id: int) -> Optional[Idea]:
        with self._lock:
            idea = self._ideas.get(idea_id)
            if idea is None:
                return None
            view = self._view(idea, viewer_id)
            comments = sorted(
                (c for c in self._comments.values() if c.idea_id == idea_id),
                key=lambda c: (c.created_at, c.id),
            )
        view.comments = [self._comment_view(c) for c in comments]
        return view

    def create_idea(self, *, user_id: int, title: str, content: str) -> Idea:
        with self._lock:
            idea = Idea(
                id=next(self._idea_ids),
                user_id=user_id,
                title=title,
                content=content,
                created_at=datetime.now(timezone.utc),
            )
            self._ideas[idea.id] = idea
            return self._view(idea, user_id)

    def update_idea(self, idea_id: int, *, title: str, content: str) -> bool:
        with self._lock:
            idea = self._ideas.get(idea_id)
            if idea is None:
                return False
            self._ideas[idea_id] = replace(idea, title=title, content=content)
            return True

    def delete_idea(self, idea_id: int) -> bool:
        with self._lock:
            if self._ideas.pop(idea_id, None) is None:
                return False
            self._likes = {pair for pair in self._likes if pair[0] != idea_id}
            self._comments = {
                cid: c for cid, c in self._comments.items() if c.idea_id != idea_id
            }
            return True

    def toggle_like(self, idea_id: int, *, user_id: int) -> bool:
        key = (idea_id, user_id)
        with self._lock:
            if key in self._likes:
                self._likes.discard(key)
                return False
            self._likes.add(key)
            return True

    def add_comment(self, idea_id: int, *, user_id: int, comment: str) -> IdeaComment:
        with self._lock:
            item = IdeaComment(
                id=next(self._comment_ids),
                idea_id=idea_id,
                user_id=user_id,
                comment=comment,
                created_at=datetime.now(timezone.utc),
            )
            self._comments[item.id] = item
        return self._comment_view(item)

    def get_comment(self, comment_id: int) -> Optional[IdeaComment]:
        with self._lock:
            item = self._comments.get(comment_id)
        return self._comment_view(item) if item else None

    def delete_comment(self, comment_id: int) -> bool:
        with self._lock:
            return self._comments.pop(comment_id, None) is not None
