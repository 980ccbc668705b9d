from datetime import datetime
from typing import Any, Dict, List, Optional

from circles.db.repositories import polls as poll_repo
from circles.db.schemas import AnswerOut, PollOut, VoteOut
from circles.services._guards import storage_guard
from circles.services.plugins.base import CirclePluginService
from circles.utils.errors import Conflict, NotFound

POLL_NOT_FOUND = "Poll not found."
ANSWER_NOT_FOUND = "Answer not found."


class PollService(CirclePluginService):
    """Polls with answers and one vote per member."""

    def _poll_in_circle(self, poll_id: int, circle_id: int):
        with storage_guard(self.db, "get_poll"):
            poll = poll_repo.get_poll(self.db, poll_id, circle_id)
        if poll is None:
            raise NotFound(POLL_NOT_FOUND)
        return poll

    @staticmethod
    def _polls_out(rows) -> List[Dict[str, Any]]:
        return [
            PollOut(
                id=poll.id,
                question=poll.question,
                period_start_on=poll.period_start_on,
                period_end_on=poll.period_end_on,
                created_by=creator.full_name,
            ).to_wire()
            for poll, creator in rows
        ]

    def add(self, user_id: int, circle_id: int, question: str, start_on: datetime,
            end_on: datetime) -> Dict[str, int]:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "add_poll"):
            poll_id = poll_repo.add_poll(self.db, circle_id, user_id, question, start_on, end_on)
        return {"id": poll_id}

    def edit(self, user_id: int, circle_id: int, poll_id: int, question: str, start_on: datetime,
             end_on: datetime) -> None:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "edit_poll"):
            if not poll_repo.edit_poll(self.db, poll_id, circle_id, question, start_on, end_on):
                raise NotFound(POLL_NOT_FOUND)

    def remove(self, user_id: int, circle_id: int, poll_id: int) -> None:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "remove_poll"):
            if not poll_repo.remove_poll(self.db, poll_id, circle_id, user_id):
                raise NotFound(POLL_NOT_FOUND)

    def active_polls(self, user_id: int, circle_id: int, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "active_polls"):
            rows = poll_repo.get_active_polls(self.db, circle_id, now)
        if not rows:
            raise NotFound("There are no Active Polls.")
        return self._polls_out(rows)

    def valid_polls(self, user_id: int, circle_id: int, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "valid_polls"):
            rows = poll_repo.get_valid_polls(self.db, circle_id, self.config.valid_poll_window_days, now)
        if not rows:
            raise NotFound("There are no Valid Polls.")
        return self._polls_out(rows)

    def add_answer(self, user_id: int, circle_id: int, poll_id: int, answer: str) -> Dict[str, int]:
        self._require_member(user_id, circle_id)
        self._poll_in_circle(poll_id, circle_id)
        with storage_guard(self.db, "add_poll_answer"):
            answer_id = poll_repo.add_answer(self.db, poll_id, user_id, answer)
        return {"id": answer_id}

    def edit_answer(self, user_id: int, circle_id: int, poll_id: int, answer_id: int, answer: str) -> None:
        self._require_member(user_id, circle_id)
        self._poll_in_circle(poll_id, circle_id)
        with storage_guard(self.db, "edit_poll_answer"):
            if not poll_repo.edit_answer(self.db, answer_id, poll_id, answer):
                raise NotFound(ANSWER_NOT_FOUND)

    def remove_answer(self, user_id: int, circle_id: int, poll_id: int, answer_id: int) -> None:
        self._require_member(user_id, circle_id)
        self._poll_in_circle(poll_id, circle_id)
        with storage_guard(self.db, "remove_poll_answer"):
            if not poll_repo.remove_answer(self.db, answer_id, poll_id, user_id):
                raise NotFound(ANSWER_NOT_FOUND)

    def active_answers(self, user_id: int, circle_id: int, poll_id: int) -> List[Dict[str, Any]]:
        self._require_member(user_id, circle_id)
        self._poll_in_circle(poll_id, circle_id)
        with storage_guard(self.db, "active_poll_answers"):
            answers = poll_repo.get_active_answers(self.db, poll_id)
        if not answers:
            raise NotFound("There are no Active Answer for this Poll.")
        return [AnswerOut.model_validate(a).to_wire() for a in answers]

    def add_vote(self, user_id: int, circle_id: int, poll_id: int, answer_id: int) -> Dict[str, int]:
        """Record the caller's single vote in the poll and refresh the answer total."""
        self._require_member(user_id, circle_id)
        self._poll_in_circle(poll_id, circle_id)
        with storage_guard(self.db, "add_poll_vote"):
            answer = poll_repo.get_answer(self.db, answer_id)
            if answer is None or answer.poll_id != poll_id:
                raise NotFound(ANSWER_NOT_FOUND)
            if poll_repo.has_voted_in_poll(self.db, poll_id, user_id):
                raise Conflict("User already voted in this poll.")
            vote_id = poll_repo.add_vote(self.db, answer_id, user_id)
        return {"id": vote_id}

    def votes(self, user_id: int, circle_id: int, poll_id: int) -> List[Dict[str, Any]]:
        self._require_member(user_id, circle_id)
        self._poll_in_circle(poll_id, circle_id)
        with storage_guard(self.db, "poll_votes"):
            rows = poll_repo.get_votes(self.db, poll_id)
        if not rows:
            raise NotFound("There are no Votes for this Poll.")
        return [
            VoteOut(answer_id=vote.answer_id, user_id=voter.id, name=voter.full_name,
                    created_on=vote.created_on).to_wire()
            for vote, voter in rows
        ]
