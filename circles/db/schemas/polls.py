from datetime import datetime

from pydantic import Field, field_validator, model_validator

from circles.db.schemas.base import CamelModel, CircleScoped
from circles.utils.validators import check_id, check_length, parse_datetime

QUESTION_MESSAGE = "The Question must have a minimum of 3 characters and a maximum of 1024 characters"
ANSWER_MESSAGE = "The Answer must have a minimum of 3 characters and a maximum of 1024 characters"
PERIOD_MESSAGE = "End on must be after start on"


class PollAdd(CircleScoped):
    question: str = Field(default=None, validate_default=True)
    start_on: datetime = Field(default=None, validate_default=True)
    end_on: datetime = Field(default=None, validate_default=True)

    @field_validator("question", mode="before")
    @classmethod
    def _check_question(cls, v):
        return check_length(v, 3, 1024, QUESTION_MESSAGE)

    @field_validator("start_on", mode="before")
    @classmethod
    def _check_start_on(cls, v):
        return parse_datetime(v, "Start on")

    @field_validator("end_on", mode="before")
    @classmethod
    def _check_end_on(cls, v):
        return parse_datetime(v, "End on")

    @model_validator(mode="after")
    def _check_period(self):
        if self.start_on > self.end_on:
            raise ValueError(PERIOD_MESSAGE)
        return self


class PollRef(CircleScoped):
    id: int = Field(default=None, validate_default=True)

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, v):
        return check_id(v, "Poll Id is required")


class PollEdit(PollAdd):
    id: int = Field(default=None, validate_default=True)

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, v):
        return check_id(v, "Poll Id is required")


class _PollScoped(CircleScoped):
    poll_id: int = Field(default=None, validate_default=True)

    @field_validator("poll_id", mode="before")
    @classmethod
    def _check_poll_id(cls, v):
        return check_id(v, "Poll Id is required")


class AnswerAdd(_PollScoped):
    answer: str = Field(default=None, validate_default=True)

    @field_validator("answer", mode="before")
    @classmethod
    def _check_answer(cls, v):
        return check_length(v, 3, 1024, ANSWER_MESSAGE)


class AnswerRef(_PollScoped):
    id: int = Field(default=None, validate_default=True)

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, v):
        return check_id(v, "Answer Id is required")


class AnswerEdit(AnswerRef):
    answer: str = Field(default=None, validate_default=True)

    @field_validator("answer", mode="before")
    @classmethod
    def _check_answer(cls, v):
        return check_length(v, 3, 1024, ANSWER_MESSAGE)


class VoteAdd(_PollScoped):
    answer_id: int = Field(default=None, validate_default=True)

    @field_validator("answer_id", mode="before")
    @classmethod
    def _check_answer_id(cls, v):
        return check_id(v, "Answer Id is required")


class PollOut(CamelModel):
    id: int
    question: str
    period_start_on: datetime
    period_end_on: datetime
    created_by: str


class AnswerOut(CamelModel):
    id: int
    answer: str
    total_votes: int


class VoteOut(CamelModel):
    answer_id: int
    user_id: int
    name: str
    created_on: datetime
