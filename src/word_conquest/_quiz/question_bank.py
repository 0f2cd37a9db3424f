# Area: Quiz
"""
word_conquest._quiz.question_bank — Question providers
======================================================

The engine asks a QuestionProvider for the fixed question sequence of
each quiz, keyed by the player's grade. Two providers ship:

- StaticQuestionBank: the built-in ten-word set, same for every grade
- JsonQuestionBank: per-grade sets loaded from a JSON file

JSON layout::

    {
      "grade4": [
        {"id": "q1", "word": "apple", "options": ["苹果", "香蕉", "橙子", "葡萄"],
         "correct_answer": 0, "difficulty": "easy"},
        ...
      ],
      "default": [...]
    }
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Literal, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from ..errors import ConfigurationInvariantError
from .state import Question

logger = logging.getLogger("word_conquest.question_bank")

DEFAULT_KEY = "default"


class QuestionProvider(ABC):
    """Source of quiz questions."""

    @abstractmethod
    def get_questions(self, grade: str, count: int) -> List[Question]:
        """
        Return the ordered question sequence for one quiz.

        Args:
            grade: Player grade key, e.g. "grade4".
            count: Maximum number of questions wanted.
        """
        ...


BUILTIN_QUESTIONS = (
    Question("q1", "apple", ("苹果", "香蕉", "橙子", "葡萄"), 0),
    Question("q2", "book", ("桌子", "椅子", "书本", "电脑"), 2),
    Question("q3", "dog", ("狗", "猫", "兔子", "鸟"), 0),
    Question("q4", "happy", ("悲伤的", "快乐的", "生气的", "害怕的"), 1),
    Question("q5", "school", ("公园", "医院", "学校", "商店"), 2),
    Question("q6", "family", ("家庭", "朋友", "同事", "邻居"), 0),
    Question("q7", "water", ("水", "火", "土", "空气"), 0),
    Question("q8", "friend", ("敌人", "朋友", "陌生人", "老师"), 1),
    Question("q9", "teacher", ("学生", "家长", "老师", "医生"), 2),
    Question("q10", "student", ("老师", "家长", "学生", "校长"), 2),
)


class StaticQuestionBank(QuestionProvider):
    """Built-in question set, identical for every grade."""

    def __init__(self, questions=BUILTIN_QUESTIONS):
        self._questions = tuple(questions)

    def get_questions(self, grade: str, count: int) -> List[Question]:
        return list(self._questions[:count])


class QuestionRecord(BaseModel):
    """Schema of one question entry in a JSON bank."""

    id: str = Field(min_length=1)
    word: str = Field(min_length=1)
    options: List[str] = Field(min_length=2)
    correct_answer: int = Field(ge=0)
    difficulty: Literal["easy", "medium", "hard"] = "easy"

    @model_validator(mode="after")
    def _answer_in_range(self) -> "QuestionRecord":
        if self.correct_answer >= len(self.options):
            raise ValueError(
                f"correct_answer {self.correct_answer} out of range for "
                f"{len(self.options)} options"
            )
        return self

    def to_question(self) -> Question:
        return Question(
            id=self.id,
            word=self.word,
            options=tuple(self.options),
            correct_answer=self.correct_answer,
            difficulty=self.difficulty,
        )


class JsonQuestionBank(QuestionProvider):
    """
    Per-grade question sets read from a JSON file.

    Unknown grades use the "default" set when present, otherwise the
    built-in set.
    """

    def __init__(self, source: Union[str, Path, Dict[str, list]]):
        raw = self._read(source)
        self._sets: Dict[str, List[Question]] = {}
        problems: List[str] = []

        for grade, entries in raw.items():
            if not isinstance(entries, list):
                problems.append(f"{grade}: expected a list of questions")
                continue
            questions = []
            for i, entry in enumerate(entries):
                try:
                    questions.append(QuestionRecord.model_validate(entry).to_question())
                except ValidationError as e:
                    for err in e.errors():
                        loc = ".".join(str(p) for p in err["loc"]) or "entry"
                        problems.append(f"{grade}[{i}].{loc}: {err['msg']}")
            self._sets[grade] = questions

        if problems:
            raise ConfigurationInvariantError("question_bank", problems)
        logger.info(f"Loaded question bank with {len(self._sets)} set(s)")
        self._fallback = StaticQuestionBank()

    @staticmethod
    def _read(source: Union[str, Path, Dict[str, list]]) -> Dict[str, list]:
        if isinstance(source, dict):
            return source
        path = Path(source)
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ConfigurationInvariantError(
                "question_bank", [f"{path}: top level must be an object keyed by grade"]
            )
        return data

    def grades(self) -> List[str]:
        return sorted(self._sets)

    def get_questions(self, grade: str, count: int) -> List[Question]:
        questions = self._sets.get(grade) or self._sets.get(DEFAULT_KEY)
        if not questions:
            logger.debug(f"No questions for '{grade}', using built-in set")
            return self._fallback.get_questions(grade, count)
        return list(questions[:count])
