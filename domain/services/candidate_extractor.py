"""
Turns questionnaire answers into scoring-ready candidates.

Answers arrive either as a flat mapping (``{"role": "Backend", "skills":
"python, sql", ...}``) or, for imported questionnaires, as a list of keyed
items (``[{"key": "role", "valueOptionIds": ["opt-1"]}, ...]``). Both shapes
are flattened to the same mapping before normalization. Malformed field
values never raise: they fall back to the field's default.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from domain.models.candidate import Candidate
from domain.models.hackathon import Questionnaire, QuestionnaireAnswer, QuestionnaireSource
from domain.models.identity import Participant

logger = logging.getLogger(__name__)

_SKILL_SEPARATORS = re.compile(r"[,;]")


def normalize_role(value: Any) -> Optional[str]:
    if value is None:
        return None
    role = str(value).strip().lower()
    return role or None


def parse_skills(value: Any) -> frozenset:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        tokens: Iterable[Any] = _SKILL_SEPARATORS.split(value)
    elif isinstance(value, (list, tuple, set, frozenset)):
        tokens = [part for item in value if item is not None
                  for part in _SKILL_SEPARATORS.split(str(item))]
    else:
        return frozenset()
    return frozenset(t.strip().lower() for t in tokens if str(t).strip())


def non_negative_int(value: Any) -> int:
    """Coerce a questionnaire number to ``max(0, value)``; anything unparsable is 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                return 0
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        value = int(value)
    if not isinstance(value, int):
        return 0
    return max(0, value)


def _is_yes(value: Any) -> bool:
    text = str(value).strip().lower()
    return text.startswith("yes") or text == "true"


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


class OptionLabelIndex:
    """Maps questionnaire option ids to their display labels."""

    def __init__(self, labels: Dict[str, str]):
        self.labels = labels

    @classmethod
    def from_questions(cls, questions: Optional[Mapping[str, Any]]) -> "OptionLabelIndex":
        labels: Dict[str, str] = {}
        if not isinstance(questions, Mapping):
            return cls(labels)
        items = questions.get("questions")
        if not isinstance(items, list):
            return cls(labels)
        for q in items:
            if not isinstance(q, Mapping) or not isinstance(q.get("options"), list):
                continue
            for opt in q["options"]:
                if not isinstance(opt, Mapping):
                    continue
                opt_id = str(opt.get("id") or "").strip()
                label = str(opt.get("label") or "").strip()
                if opt_id and label:
                    labels[opt_id] = label
        return cls(labels)

    def label(self, option_id: Optional[str]) -> Optional[str]:
        if option_id is None:
            return None
        key = option_id.strip()
        if not key:
            return None
        return self.labels.get(key, key)

    def labels_for(self, option_ids: Iterable[str]) -> List[str]:
        out: List[str] = []
        for option_id in option_ids:
            label = self.label(option_id)
            if label and label not in out:
                out.append(label)
        return out


# =========================
# Keyed-array answers
# =========================

def _selected_option_ids(item: Mapping[str, Any]) -> List[str]:
    ids = item.get("valueOptionIds")
    if isinstance(ids, list):
        out = [str(i).strip() for i in ids if i is not None and str(i).strip()]
        if out:
            return out
    single = str(item.get("valueOptionId") or "").strip()
    return [single] if single else []


def _option_ids(item: Mapping[str, Any]) -> List[str]:
    selected = _selected_option_ids(item)
    if selected:
        return selected
    text = str(item.get("valueText") or "").strip()
    if not text:
        return []
    return [t.strip() for t in text.split(",") if t.strip()]


def _first_option_id(item: Mapping[str, Any]) -> Optional[str]:
    selected = _selected_option_ids(item)
    if selected:
        return selected[0]
    # free-text roles keep their commas
    text = str(item.get("valueText") or "").strip()
    return text or None


def _number_like(item: Mapping[str, Any]) -> int:
    number = item.get("valueNumber")
    if isinstance(number, (int, float)) and not isinstance(number, bool):
        return non_negative_int(number)
    return non_negative_int(item.get("valueText"))


def _motivation_average(item: Mapping[str, Any]) -> int:
    scores = item.get("valueJson")
    if isinstance(scores, Mapping):
        values: List[float] = []
        for v in scores.values():
            if isinstance(v, bool):
                continue
            if isinstance(v, (int, float)):
                values.append(float(v))
            elif isinstance(v, str):
                try:
                    values.append(float(v.strip()))
                except ValueError:
                    continue
        values = [v for v in values if math.isfinite(v)]
        if values:
            return max(0, _round_half_up(sum(values) / len(values)))
    return _number_like(item)


def flatten_keyed_items(items: List[Any], options: OptionLabelIndex) -> Dict[str, Any]:
    by_key: Dict[str, Mapping[str, Any]] = {}
    for item in items:
        if isinstance(item, Mapping):
            key = str(item.get("key") or "").strip()
            if key:
                by_key[key] = item

    flat: Dict[str, Any] = {}
    if "role" in by_key:
        flat["role"] = options.label(_first_option_id(by_key["role"]))
    if "skills" in by_key:
        flat["skills"] = options.labels_for(_option_ids(by_key["skills"]))
    if "motivation" in by_key:
        flat["motivation"] = _motivation_average(by_key["motivation"])
    if "years_experience" in by_key:
        flat["years_experience"] = _number_like(by_key["years_experience"])
    for name in ("first_name", "last_name"):
        if name in by_key:
            flat[name] = by_key[name].get("valueText")
    if "age_verification" in by_key:
        item = by_key["age_verification"]
        verified = item.get("valueBoolean")
        flat["age_verification"] = verified if isinstance(verified, bool) else _is_yes(item.get("valueText", ""))
    return flat


# =========================
# Extraction
# =========================

def build_candidate(participant: Participant, data: Mapping[str, Any]) -> Candidate:
    first_name = data.get("first_name") or participant.first_name
    last_name = data.get("last_name") or participant.last_name
    return Candidate(
        participant_id=participant.id,
        role=normalize_role(data.get("role")),
        skills=parse_skills(data.get("skills")),
        motivation=non_negative_int(data.get("motivation")),
        years_experience=non_negative_int(data.get("years_experience")),
        first_name=str(first_name) if first_name is not None else None,
        last_name=str(last_name) if last_name is not None else None,
    )


class CandidateExtractor:
    def __init__(self, questionnaire: Questionnaire):
        self.questionnaire = questionnaire
        self.options = OptionLabelIndex.from_questions(questionnaire.questions)

    def flatten(self, data: Any) -> Dict[str, Any]:
        if isinstance(data, list):
            return flatten_keyed_items(data, self.options)
        if isinstance(data, Mapping):
            return dict(data)
        return {}

    def is_eligible(self, answer: QuestionnaireAnswer, data: Mapping[str, Any]) -> bool:
        if self.questionnaire.source == QuestionnaireSource.INTERNAL and not answer.consent:
            logger.info(f"Skipping participant {answer.participant_id}: consent=false")
            return False
        if "age_verification" in data:
            verified = data["age_verification"]
            allowed = verified if isinstance(verified, bool) else _is_yes(verified)
            if not allowed:
                logger.info(f"Skipping participant {answer.participant_id}: eligibility check failed")
                return False
        return True

    def extract(self, participant: Participant, answer: Optional[QuestionnaireAnswer]) -> Optional[Candidate]:
        """Return the participant's candidate, or None when they have no usable answer."""
        if answer is None:
            return None
        if answer.data is None:
            logger.info(f"Skipping participant {answer.participant_id}: empty answer payload")
            return None
        data = self.flatten(answer.data)
        if not self.is_eligible(answer, data):
            return None
        return build_candidate(participant, data)
