from __future__ import annotations

from pathlib import Path
from typing import Any

from .resources import load_role_table, match_role

QUESTION_TYPES = ("hr", "behavioral", "technical")
ROUND_ORDER = (
    "HR Round",
    "Behavioral",
    "Technical Round 1",
    "Technical Round 2",
    "Technical Round 3",
    "Final Round",
)

QuestionSet = dict[str, list[dict[str, Any]]]


class InterviewQuestionBank:
    def __init__(self, questions_path: str | Path | None = None) -> None:
        path = Path(questions_path) if questions_path else Path(__file__).with_name("interview_questions.json")
        self._questions: dict[str, QuestionSet] = load_role_table(path)

    def get_questions_for_role(self, role: str | None) -> QuestionSet:
        return match_role(self._questions, role)

    def get_questions_by_round(self, role: str | None) -> dict[str, list[dict[str, Any]]]:
        questions = self.get_questions_for_role(role)
        organized: dict[str, list[dict[str, Any]]] = {name: [] for name in ROUND_ORDER}

        for question_type in QUESTION_TYPES:
            for question in questions.get(question_type) or []:
                round_name = question.get("round") or "General"
                organized.setdefault(round_name, []).append({**question, "type": question_type})

        return {name: items for name, items in organized.items() if items}


def count_questions(by_round: dict[str, list[dict[str, Any]]]) -> int:
    return sum(len(items) for items in by_round.values())
