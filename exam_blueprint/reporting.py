from __future__ import annotations
from collections import Counter

from exam_blueprint.schemas import BLOOM_LEVELS, DIFFICULTIES, Question


def _zero_filled(counts: Counter, keys: tuple[str, ...]) -> dict:
    return {k: counts.get(k, 0) for k in keys}


def compute_statistics(questions: list[Question]) -> dict:
    difficulty_counts = Counter([q.difficulty for q in questions])
    type_counts = Counter([q.type for q in questions])
    bloom_counts = Counter([q.bloom_level for q in questions])
    co_counts = Counter([q.course_outcome for q in questions])
    po_counts = Counter([q.program_outcome for q in questions])

    return {
        "total_questions": len(questions),
        "total_marks": sum(q.marks for q in questions),
        "difficulty_distribution": _zero_filled(difficulty_counts, DIFFICULTIES),
        "type_distribution": dict(type_counts),
        "bloom_distribution": _zero_filled(bloom_counts, BLOOM_LEVELS),
        "co_distribution": dict(sorted(co_counts.items())),
        "po_distribution": dict(sorted(po_counts.items())),
    }
